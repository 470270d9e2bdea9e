"""Password hashing backed by bcrypt."""

from dataclasses import dataclass
from typing import Protocol

import bcrypt


class PasswordHasher(Protocol):
    """One-way hash and verify capability."""

    def hash(self, password: str) -> str:
        """Return a salted hash for the password."""

    def verify(self, password: str, password_hash: str) -> bool:
        """Return true when the password matches the stored hash."""


@dataclass
class BcryptPasswordHasher(PasswordHasher):
    """bcrypt implementation with a per-hash random salt."""

    rounds: int = 10

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except ValueError:
            return False
