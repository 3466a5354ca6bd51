"""Request authentication and per-request context dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import Header, HTTPException, Query, Request, status

from foodvision.config import is_valid_timezone

if TYPE_CHECKING:
    from foodvision.containers import AppContainer

_BEARER_PREFIX = "bearer "


def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UUID:
    """Resolve the bearer token to the caller's user id."""
    container: AppContainer = request.app.state.container
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    token = authorization[len(_BEARER_PREFIX) :].strip()
    user_id = container.user_service.authenticate(token) if token else None
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return user_id


def resolve_timezone(request: Request, tz: str | None = Query(default=None)) -> str:
    """Return the caller's timezone or the configured default."""
    container: AppContainer = request.app.state.container
    timezone_name = tz or container.settings.default_timezone
    if not is_valid_timezone(timezone_name):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please send a valid timezone like America/Los_Angeles.",
        )
    return timezone_name


async def require_webhook_secret(
    request: Request, x_webhook_secret: str | None = Header(default=None)
) -> None:
    """Ensure webhook calls carry the shared secret."""
    container: AppContainer = request.app.state.container
    expected = container.settings.webhook_secret
    if not expected:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    if not x_webhook_secret or x_webhook_secret != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
