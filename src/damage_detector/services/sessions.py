"""Session manager mapping opaque tokens to authenticated users."""

import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from damage_detector.domain.sessions import SessionRecord

DEFAULT_SESSION_TTL = timedelta(hours=24)
_TOKEN_BYTES = 32


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class SessionRepository(Protocol):
    """Persistence interface for login sessions."""

    def save_session(self, session: SessionRecord) -> None:
        """Store a session keyed by its token."""

    def get_session(self, token: str) -> SessionRecord | None:
        """Return a stored session by token, if present."""

    def delete_session(self, token: str) -> None:
        """Remove a session; missing tokens are ignored."""


@dataclass
class SessionService:
    """Issues, resolves and destroys fixed-window sessions."""

    repository: SessionRepository
    ttl: timedelta = DEFAULT_SESSION_TTL
    clock: Callable[[], datetime] = _utcnow

    def create_session(self, user_id: int) -> SessionRecord:
        """Issue a new session for the user."""
        now = self.clock()
        session = SessionRecord(
            token=secrets.token_urlsafe(_TOKEN_BYTES),
            user_id=user_id,
            created_at=now,
            expires_at=now + self.ttl,
        )
        self.repository.save_session(session)
        return session

    def resolve(self, token: str | None) -> SessionRecord | None:
        """Return the live session for a token, or None.

        Expired sessions are removed on sight and never extended.
        """
        if not token:
            return None
        session = self.repository.get_session(token)
        if session is None:
            return None
        if session.is_expired(self.clock()):
            self.repository.delete_session(token)
            return None
        return session

    def destroy(self, token: str | None) -> None:
        """Destroy a session. Destroying an unknown token is a no-op."""
        if token:
            self.repository.delete_session(token)
