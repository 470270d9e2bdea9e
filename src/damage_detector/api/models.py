"""Request models and response payload builders for the HTTP API."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from damage_detector.domain.damage import AssessmentRecord
from damage_detector.domain.models import UserRecord

# bcrypt only accepts passwords up to this many bytes.
MAX_PASSWORD_BYTES = 72


class SignupRequest(BaseModel):
    """Signup form fields."""

    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
            )
        return value


class LoginRequest(BaseModel):
    """Login form fields."""

    email: EmailStr
    password: str = Field(min_length=1)


def user_summary(user: UserRecord) -> dict[str, object]:
    """Public view of a user; never includes the password hash."""
    return {"id": user.id, "username": user.username, "email": user.email}


def record_payload(record: AssessmentRecord) -> dict[str, object]:
    """Serialize an assessment record with the field names clients expect."""
    return {
        "id": record.id,
        "userId": record.owner_id,
        "damagedPart": record.damaged_part,
        "severity": record.severity,
        "estimatedCost": record.estimated_cost,
        "damageDescription": record.damage_description,
        "damageLocation": record.damage_location,
        "fileName": record.source_file_ref,
        "timestamp": record.timestamp.isoformat(),
    }
