"""Filesystem-backed upload storage."""

import secrets
import time
from dataclasses import dataclass
from pathlib import Path

from damage_detector.services.uploads import UploadStorage

_FIELD_NAME = "carImage"


@dataclass
class LocalUploadStorage(UploadStorage):
    """Stores uploads as uniquely named files under a directory."""

    directory: Path

    def save(self, content: bytes, original_filename: str | None) -> str:
        """Write the upload and return its generated file name."""
        self.directory.mkdir(parents=True, exist_ok=True)
        suffix = Path(original_filename).suffix.lower() if original_filename else ""
        unique = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
        file_name = f"{_FIELD_NAME}-{unique}{suffix}"
        (self.directory / file_name).write_bytes(content)
        return file_name

    def delete(self, file_ref: str) -> None:
        """Delete a stored upload if it exists."""
        path = self.directory / Path(file_ref).name
        path.unlink(missing_ok=True)
