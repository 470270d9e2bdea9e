"""Credential store business logic."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from damage_detector.domain.errors import (
    DuplicateIdentityError,
    InvalidCredentialsError,
)
from damage_detector.domain.models import UserRecord
from damage_detector.services.passwords import PasswordHasher

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_id(self, user_id: int) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an exact email, if present."""

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        """Create and return a new user.

        Raises DuplicateIdentityError when the username or email is taken.
        """


@dataclass
class UserService:
    """Application service for signup and login."""

    repository: UserRepository
    hasher: PasswordHasher
    _dummy_hash: str | None = field(default=None, init=False, repr=False)

    def create_user(self, username: str, email: str, password: str) -> UserRecord:
        """Register a user, storing only the password hash."""
        password_hash = self.hasher.hash(password)
        try:
            user = self.repository.create_user(username, email, password_hash)
        except DuplicateIdentityError:
            logger.info("Signup rejected for duplicate identity")
            raise
        logger.info("New user registered: %s", user.username)
        return user

    def verify_credentials(self, email: str, password: str) -> UserRecord:
        """Return the user for valid credentials.

        Unknown email and wrong password raise the same error, and both paths
        run one hash verification.
        """
        user = self.repository.get_by_email(email)
        if user is None:
            self.hasher.verify(password, self._get_dummy_hash())
            raise InvalidCredentialsError
        if not self.hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError
        logger.info("User logged in: %s", user.username)
        return user

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return a user by id, if present."""
        return self.repository.get_by_id(user_id)

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash("not-a-real-password")
        return self._dummy_hash
