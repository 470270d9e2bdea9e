"""In-process user repository."""

import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime

from damage_detector.domain.errors import DuplicateIdentityError
from damage_detector.domain.models import UserRecord
from damage_detector.services.users import UserRepository


@dataclass
class InMemoryUserRepository(UserRepository):
    """Lock-guarded user table keyed by id."""

    users: dict[int, UserRecord] = field(default_factory=dict)
    _next_id: int = field(default=1, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def get_by_id(self, user_id: int) -> UserRecord | None:
        with self._lock:
            return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        with self._lock:
            for user in self.users.values():
                if user.email == email:
                    return user
        return None

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        with self._lock:
            for existing in self.users.values():
                if existing.username == username or existing.email == email:
                    raise DuplicateIdentityError
            user = UserRecord(
                id=self._next_id,
                username=username,
                email=email,
                password_hash=password_hash,
                created_at=datetime.now(tz=UTC),
            )
            self.users[user.id] = user
            self._next_id += 1
            return user
