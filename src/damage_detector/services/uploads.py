"""Upload validation and storage interface."""

import io
from dataclasses import dataclass
from typing import Protocol

from PIL import Image, UnidentifiedImageError

from damage_detector.domain.errors import (
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    ValidationError,
)

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class UploadStorage(Protocol):
    """Storage interface for uploaded images."""

    def save(self, content: bytes, original_filename: str | None) -> str:
        """Persist the bytes and return an opaque file reference."""

    def delete(self, file_ref: str) -> None:
        """Remove a stored file; unknown references are ignored."""


@dataclass(frozen=True)
class ImageUpload:
    """Validated upload ready for storage."""

    content: bytes
    filename: str | None
    content_type: str
    image_format: str | None


def validate_image_upload(
    content: bytes | None,
    filename: str | None,
    content_type: str | None,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> ImageUpload:
    """Check presence, media type, size and decodability of an upload."""
    if content is None:
        raise ValidationError("No image file uploaded")
    if not content_type or not content_type.startswith("image/"):
        raise UnsupportedMediaTypeError
    if len(content) > max_bytes:
        raise PayloadTooLargeError(
            f"Please upload an image smaller than {max_bytes // (1024 * 1024)}MB"
        )
    if not content:
        raise ValidationError("No image file uploaded")
    return ImageUpload(
        content=content,
        filename=filename,
        content_type=content_type,
        image_format=inspect_image(content),
    )


def inspect_image(content: bytes) -> str | None:
    """Return the image format, raising ValidationError for undecodable bytes."""
    try:
        with Image.open(io.BytesIO(content)) as image:
            image_format = image.format
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValidationError("Uploaded file is not a valid image") from exc
    return image_format
