"""Owner-scoped assessment history endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from damage_detector.api.auth import require_user
from damage_detector.api.models import record_payload
from damage_detector.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from damage_detector.containers import AppContainer

router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("")
async def list_history(
    request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's assessments, newest first."""
    container: AppContainer = request.app.state.container
    records = await run_in_threadpool(
        container.history_service.list_for_owner, user.id
    )
    return {"history": [record_payload(record) for record in records]}


@router.delete("/{record_id}")
async def delete_history(
    record_id: int, request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, str]:
    """Delete one of the caller's assessments."""
    container: AppContainer = request.app.state.container
    await run_in_threadpool(
        container.history_service.delete_for_owner, user.id, record_id
    )
    return {"message": "Record deleted successfully"}
