"""Domain models for registered users."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the credential store."""

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime
