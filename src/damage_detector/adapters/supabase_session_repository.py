"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from damage_detector.domain.errors import InternalFailureError
from damage_detector.domain.sessions import SessionRecord
from damage_detector.services.sessions import SessionRepository


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for login sessions."""

    client: Client

    def save_session(self, session: SessionRecord) -> None:
        """Insert a session row."""
        response = (
            self.client.table("sessions")
            .insert(
                {
                    "token": session.token,
                    "user_id": session.user_id,
                    "created_at": session.created_at.isoformat(),
                    "expires_at": session.expires_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise InternalFailureError("Failed to create session")

    def get_session(self, token: str) -> SessionRecord | None:
        """Return a session by token, if present."""
        response = (
            self.client.table("sessions")
            .select("token, user_id, created_at, expires_at")
            .eq("token", token)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return SessionRecord(
            token=row["token"],
            user_id=int(row["user_id"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            expires_at=datetime.fromisoformat(row["expires_at"]),
        )

    def delete_session(self, token: str) -> None:
        """Delete a session row."""
        self.client.table("sessions").delete().eq("token", token).execute()
