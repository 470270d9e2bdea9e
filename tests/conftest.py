"""Shared test fixtures."""

import io
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from damage_detector.adapters.local_upload_storage import LocalUploadStorage
from damage_detector.adapters.memory_history_repository import (
    InMemoryHistoryRepository,
)
from damage_detector.adapters.memory_session_repository import (
    InMemorySessionRepository,
)
from damage_detector.adapters.memory_user_repository import InMemoryUserRepository
from damage_detector.api.app import create_app
from damage_detector.config import Settings
from damage_detector.containers import AppContainer
from damage_detector.domain.damage import Severity
from damage_detector.services.assessment import AssessmentGenerator
from damage_detector.services.auth import AuthorizationGate
from damage_detector.services.history import HistoryService
from damage_detector.services.passwords import BcryptPasswordHasher
from damage_detector.services.sessions import SessionService
from damage_detector.services.uploads import UploadStorage
from damage_detector.services.users import UserService


@dataclass
class ScriptedRandom:
    """Random source that returns a chosen category, severity and base cost."""

    category_name: str
    severity: Severity
    base_cost: int
    ranges: list[tuple[int, int]] = field(default_factory=list)

    def choice(self, seq: Sequence[object]) -> object:
        for item in seq:
            if item is self.severity:
                return item
            if getattr(item, "name", None) == self.category_name:
                return item
        raise AssertionError(f"Nothing scripted for {seq!r}")

    def randint(self, a: int, b: int) -> int:
        self.ranges.append((a, b))
        return self.base_cost


@dataclass
class FakeUploadStorage(UploadStorage):
    """Upload storage that keeps files in memory."""

    files: dict[str, bytes] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)

    def save(self, content: bytes, original_filename: str | None) -> str:
        file_ref = f"carImage-{len(self.files) + 1}-{original_filename or 'upload'}"
        self.files[file_ref] = content
        return file_ref

    def delete(self, file_ref: str) -> None:
        self.deleted.append(file_ref)
        self.files.pop(file_ref, None)


def make_png(size: tuple[int, int] = (8, 8)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        storage_backend="memory",
        upload_dir=str(tmp_path / "uploads"),
        bcrypt_rounds=4,
    )


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def history_repository() -> InMemoryHistoryRepository:
    return InMemoryHistoryRepository()


@pytest.fixture
def user_service(
    user_repository: InMemoryUserRepository, hasher: BcryptPasswordHasher
) -> UserService:
    return UserService(repository=user_repository, hasher=hasher)


@pytest.fixture
def session_service() -> SessionService:
    return SessionService(repository=InMemorySessionRepository())


@pytest.fixture
def upload_storage(settings: Settings) -> LocalUploadStorage:
    return LocalUploadStorage(Path(settings.upload_dir))


@pytest.fixture
def container(
    settings: Settings,
    user_service: UserService,
    session_service: SessionService,
    history_repository: InMemoryHistoryRepository,
    upload_storage: UploadStorage,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        user_service=user_service,
        session_service=session_service,
        authorization_gate=AuthorizationGate(
            session_service=session_service,
            user_service=user_service,
        ),
        assessment_generator=AssessmentGenerator(rng=random.Random(1234)),
        history_service=HistoryService(history_repository),
        upload_storage=upload_storage,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()
