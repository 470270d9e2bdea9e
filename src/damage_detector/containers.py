"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from supabase import create_client

from damage_detector.adapters.local_upload_storage import LocalUploadStorage
from damage_detector.adapters.memory_history_repository import (
    InMemoryHistoryRepository,
)
from damage_detector.adapters.memory_session_repository import (
    InMemorySessionRepository,
)
from damage_detector.adapters.memory_user_repository import InMemoryUserRepository
from damage_detector.adapters.supabase_history_repository import (
    SupabaseHistoryRepository,
)
from damage_detector.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from damage_detector.adapters.supabase_user_repository import SupabaseUserRepository
from damage_detector.config import Settings
from damage_detector.services.assessment import AssessmentGenerator
from damage_detector.services.auth import AuthorizationGate
from damage_detector.services.history import HistoryRepository, HistoryService
from damage_detector.services.passwords import BcryptPasswordHasher
from damage_detector.services.sessions import SessionRepository, SessionService
from damage_detector.services.uploads import UploadStorage
from damage_detector.services.users import UserRepository, UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    session_service: SessionService
    authorization_gate: AuthorizationGate
    assessment_generator: AssessmentGenerator
    history_service: HistoryService
    upload_storage: UploadStorage


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    user_repository, session_repository, history_repository = _build_repositories(
        resolved_settings
    )
    user_service = UserService(
        repository=user_repository,
        hasher=BcryptPasswordHasher(rounds=resolved_settings.bcrypt_rounds),
    )
    session_service = SessionService(
        repository=session_repository,
        ttl=timedelta(hours=resolved_settings.session_ttl_hours),
    )
    authorization_gate = AuthorizationGate(
        session_service=session_service,
        user_service=user_service,
    )
    history_service = HistoryService(history_repository)
    upload_storage = LocalUploadStorage(Path(resolved_settings.upload_dir))

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        session_service=session_service,
        authorization_gate=authorization_gate,
        assessment_generator=AssessmentGenerator(),
        history_service=history_service,
        upload_storage=upload_storage,
    )


def _build_repositories(
    settings: Settings,
) -> tuple[UserRepository, SessionRepository, HistoryRepository]:
    """Select the persistence backend named in settings."""
    if settings.storage_backend == "memory":
        return (
            InMemoryUserRepository(),
            InMemorySessionRepository(),
            InMemoryHistoryRepository(),
        )
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
                "for the supabase storage backend"
            )
        supabase_client = create_client(
            settings.supabase_url, settings.supabase_service_key
        )
        return (
            SupabaseUserRepository(supabase_client),
            SupabaseSessionRepository(supabase_client),
            SupabaseHistoryRepository(supabase_client),
        )
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
