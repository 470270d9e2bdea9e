"""Authentication endpoints and the session dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.concurrency import run_in_threadpool

from damage_detector.api.models import LoginRequest, SignupRequest, user_summary
from damage_detector.domain.errors import UnauthenticatedError
from damage_detector.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from damage_detector.config import Settings
    from damage_detector.containers import AppContainer
    from damage_detector.domain.sessions import SessionRecord

router = APIRouter(prefix="/api", tags=["auth"])

_BEARER_PREFIX = "bearer "


def get_session_tokens(
    request: Request, authorization: str | None = Header(default=None)
) -> list[str]:
    """Collect candidate session tokens, cookie first, then bearer header."""
    container: AppContainer = request.app.state.container
    tokens: list[str] = []
    cookie_token = request.cookies.get(container.settings.session_cookie_name)
    if cookie_token:
        tokens.append(cookie_token)
    if authorization and authorization.lower().startswith(_BEARER_PREFIX):
        bearer_token = authorization[len(_BEARER_PREFIX) :].strip()
        if bearer_token and bearer_token not in tokens:
            tokens.append(bearer_token)
    return tokens


async def require_user(
    request: Request, tokens: list[str] = Depends(get_session_tokens)
) -> UserRecord:
    """Resolve the caller from the first live token.

    A stale cookie does not mask a valid bearer token.
    """
    container: AppContainer = request.app.state.container
    for token in tokens:
        try:
            return await run_in_threadpool(
                container.authorization_gate.authorize, token
            )
        except UnauthenticatedError:
            continue
    raise UnauthenticatedError


@router.post("/signup")
async def signup(
    payload: SignupRequest, request: Request, response: Response
) -> dict[str, object]:
    """Register a user and start a session."""
    container: AppContainer = request.app.state.container
    user = await run_in_threadpool(
        container.user_service.create_user,
        payload.username,
        str(payload.email),
        payload.password,
    )
    session = await run_in_threadpool(
        container.session_service.create_session, user.id
    )
    _set_session_cookie(response, container.settings, session)
    return {
        "message": "Signup successful",
        "user": user_summary(user),
        "token": session.token,
    }


@router.post("/login")
async def login(
    payload: LoginRequest, request: Request, response: Response
) -> dict[str, object]:
    """Verify credentials and start a session."""
    container: AppContainer = request.app.state.container
    user = await run_in_threadpool(
        container.user_service.verify_credentials,
        str(payload.email),
        payload.password,
    )
    session = await run_in_threadpool(
        container.session_service.create_session, user.id
    )
    _set_session_cookie(response, container.settings, session)
    return {
        "message": "Login successful",
        "user": user_summary(user),
        "token": session.token,
    }


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    tokens: list[str] = Depends(get_session_tokens),
) -> dict[str, str]:
    """End the sessions presented with the request, if any."""
    container: AppContainer = request.app.state.container
    for token in tokens:
        await run_in_threadpool(container.session_service.destroy, token)
    response.delete_cookie(container.settings.session_cookie_name)
    return {"message": "Logout successful"}


@router.get("/user")
async def current_user(user: UserRecord = Depends(require_user)) -> dict[str, object]:
    """Return the authenticated user."""
    return {"user": user_summary(user)}


def _set_session_cookie(
    response: Response, settings: Settings, session: SessionRecord
) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.token,
        max_age=int((session.expires_at - session.created_at).total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
