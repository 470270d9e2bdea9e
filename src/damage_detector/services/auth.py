"""Authorization gate for protected operations."""

from dataclasses import dataclass

from damage_detector.domain.errors import UnauthenticatedError
from damage_detector.domain.models import UserRecord
from damage_detector.services.sessions import SessionService
from damage_detector.services.users import UserService


@dataclass
class AuthorizationGate:
    """Resolves a session token into the calling user."""

    session_service: SessionService
    user_service: UserService

    def authorize(self, token: str | None) -> UserRecord:
        """Return the authenticated user or raise UnauthenticatedError."""
        session = self.session_service.resolve(token)
        if session is None:
            raise UnauthenticatedError
        user = self.user_service.get_user(session.user_id)
        if user is None:
            raise UnauthenticatedError
        return user
