"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from damage_detector.api.auth import require_user
from damage_detector.api.auth import router as auth_router
from damage_detector.api.history import router as history_router
from damage_detector.api.models import record_payload
from damage_detector.app_logging import configure_logging
from damage_detector.config import parse_allowed_origins
from damage_detector.containers import AppContainer
from damage_detector.domain.errors import (
    DamageDetectorError,
    InternalFailureError,
    ValidationError,
)
from damage_detector.domain.models import UserRecord
from damage_detector.services.uploads import validate_image_upload

logger = logging.getLogger(__name__)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    allowed_origins = parse_allowed_origins(container.settings.cors_allowed_origins)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Damage detector started (storage=%s, uploads=%s)",
            container.settings.storage_backend,
            container.settings.upload_dir,
        )
        yield
        logger.info("Damage detector stopped")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    if allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials="*" not in allowed_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(DamageDetectorError, _handle_detector_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected_error)

    app.include_router(auth_router)
    app.include_router(history_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/detect-damage")
    async def detect_damage(
        request: Request,
        user: UserRecord = Depends(require_user),
        car_image: UploadFile | None = File(default=None, alias="carImage"),
    ) -> dict[str, object]:
        """Assess an uploaded car photo and store the result in history."""
        state_container: AppContainer = request.app.state.container
        max_bytes = state_container.settings.max_upload_bytes
        content = await car_image.read(max_bytes + 1) if car_image else None
        upload = await run_in_threadpool(
            validate_image_upload,
            content,
            filename=car_image.filename if car_image else None,
            content_type=car_image.content_type if car_image else None,
            max_bytes=max_bytes,
        )
        file_ref = await run_in_threadpool(
            state_container.upload_storage.save, upload.content, upload.filename
        )
        logger.info("Received file: %s", file_ref)
        result = state_container.assessment_generator.generate()
        try:
            record = await run_in_threadpool(
                state_container.history_service.record, user.id, result, file_ref
            )
        except Exception:
            await run_in_threadpool(state_container.upload_storage.delete, file_ref)
            raise
        return {**record_payload(record), "message": "Damage detected successfully!"}

    return app


async def _handle_detector_error(
    request: Request, exc: DamageDetectorError
) -> JSONResponse:
    """Render a service error as a JSON body with its status code."""
    if isinstance(exc, InternalFailureError):
        logger.error(
            "Internal failure on %s: %s",
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": InternalFailureError.default_message},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request fields as a 400 validation error."""
    return await _handle_detector_error(
        request, ValidationError(_describe_validation_errors(exc))
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide the details from the caller."""
    logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=InternalFailureError.status_code,
        content={"error": InternalFailureError.default_message},
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """Summarize the first validation error as "<field>: <message>"."""
    errors = exc.errors()
    if not errors:
        return ValidationError.default_message
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(location)
    message = str(first.get("msg", ValidationError.default_message))
    return f"{field}: {message}" if field else message
