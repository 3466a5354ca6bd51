"""Database change webhooks."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Request

from foodvision.api.auth import require_webhook_secret, resolve_timezone
from foodvision.api.schemas import MealChangeEvent

if TYPE_CHECKING:
    from foodvision.containers import AppContainer

router = APIRouter(prefix="/hooks", tags=["hooks"])


@router.post("/meals", dependencies=[Depends(require_webhook_secret)])
def meals_changed(
    event: MealChangeEvent,
    request: Request,
    timezone_name: str = Depends(resolve_timezone),
) -> dict[str, object]:
    """Re-evaluate the owner's streak after a change to the meals table."""
    container: AppContainer = request.app.state.container
    user_id = event.user_id()
    if user_id is None:
        return {"status": "ignored"}
    today = datetime.now(tz=UTC).astimezone(ZoneInfo(timezone_name)).date()
    state = container.streak_service.refresh(user_id, today, timezone_name)
    return {"status": "ok", "streak_count": state.streak_count}
