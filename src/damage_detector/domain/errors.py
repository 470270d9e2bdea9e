"""Error taxonomy surfaced by the damage detector services."""

from fastapi import status


class DamageDetectorError(Exception):
    """Base class for errors reported to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DamageDetectorError):
    """Missing or malformed request fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateIdentityError(DamageDetectorError):
    """Username or email is already registered."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class InvalidCredentialsError(DamageDetectorError):
    """Unknown email or wrong password."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class UnauthenticatedError(DamageDetectorError):
    """No valid session accompanies the request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class NotFoundError(DamageDetectorError):
    """Record is absent or owned by someone else."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Record not found"


class PayloadTooLargeError(DamageDetectorError):
    """Uploaded file exceeds the configured limit."""

    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    default_message = "File too large"


class UnsupportedMediaTypeError(DamageDetectorError):
    """Uploaded file is not an image."""

    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    default_message = "Only image files are allowed"


class InternalFailureError(DamageDetectorError):
    """Storage or hashing backend failure; details stay server-side."""
