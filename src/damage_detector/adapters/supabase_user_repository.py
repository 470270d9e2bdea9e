"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client, PostgrestAPIError

from damage_detector.domain.errors import DuplicateIdentityError, InternalFailureError
from damage_detector.domain.models import UserRecord
from damage_detector.services.users import UserRepository

_USER_COLUMNS = "id, username, email, password_hash, created_at"
_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: int) -> UserRecord | None:
        """Return the user with the given id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _row_to_user(response.data[0])
        return None

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with the email, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _row_to_user(response.data[0])
        return None

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        """Create a new user row and return it.

        Concurrent signups that pass the lookup hit the unique constraints.
        """
        for column, value in (("username", username), ("email", email)):
            existing = (
                self.client.table("users")
                .select("id")
                .eq(column, value)
                .limit(1)
                .execute()
            )
            if existing.data:
                raise DuplicateIdentityError
        try:
            response = (
                self.client.table("users")
                .insert(
                    {
                        "username": username,
                        "email": email,
                        "password_hash": password_hash,
                    }
                )
                .execute()
            )
        except PostgrestAPIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateIdentityError from exc
            raise InternalFailureError("Failed to create user in Supabase") from exc
        if not response.data:
            raise InternalFailureError("Failed to create user in Supabase")
        return _row_to_user(response.data[0])


def _row_to_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=int(row["id"]),
        username=str(row["username"]),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
