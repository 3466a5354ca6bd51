"""Meal, dashboard and profile endpoints for authenticated users."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Request, status

from foodvision.api.auth import require_user, resolve_timezone
from foodvision.api.schemas import ImagePayload, ProfileUpdate
from foodvision.domain.meals import DailyTotal, MealEntry
from foodvision.domain.nutrition import NutritionRecord
from foodvision.domain.profiles import Profile
from foodvision.domain.stats import DashboardSummary
from foodvision.services.stats import HistoryPeriod, HistorySort

if TYPE_CHECKING:
    from foodvision.containers import AppContainer

router = APIRouter(tags=["meals"])


@router.post("/identify-dish")
async def identify_dish(
    payload: ImagePayload,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> NutritionRecord:
    """Identify a dish without recording it."""
    container: AppContainer = request.app.state.container
    image, media_type = payload.decode()
    return await container.identification_service.identify(image, media_type)


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def create_meal(
    payload: ImagePayload,
    request: Request,
    user_id: UUID = Depends(require_user),
    timezone_name: str = Depends(resolve_timezone),
) -> MealEntry:
    """Upload, identify and record a meal photo."""
    container: AppContainer = request.app.state.container
    image, media_type = payload.decode()
    return await container.ingestion.ingest(
        user_id,
        image,
        media_type=media_type,
        file_name=payload.file_name,
        timezone_name=timezone_name,
    )


@router.get("/meals/today")
def todays_meals(
    request: Request,
    user_id: UUID = Depends(require_user),
    timezone_name: str = Depends(resolve_timezone),
) -> list[MealEntry]:
    """Return today's meals, newest first."""
    container: AppContainer = request.app.state.container
    today = datetime.now(tz=ZoneInfo(timezone_name)).date()
    return container.ledger.meals_for_day(user_id, today, timezone_name)


@router.get("/meals/history")
def meal_history(  # noqa: PLR0913
    request: Request,
    q: str | None = None,
    period: HistoryPeriod = HistoryPeriod.ALL,
    sort: HistorySort = HistorySort.RECENT,
    user_id: UUID = Depends(require_user),
    timezone_name: str = Depends(resolve_timezone),
) -> list[MealEntry]:
    """Search, filter and sort the user's meal history."""
    container: AppContainer = request.app.state.container
    return container.stats_service.history(
        user_id,
        now=datetime.now(tz=UTC),
        timezone_name=timezone_name,
        query=q,
        period=period,
        sort=sort,
    )


@router.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal(
    meal_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> None:
    """Hard-delete one of the user's meals."""
    container: AppContainer = request.app.state.container
    container.ledger.remove(user_id, meal_id)


@router.get("/dashboard")
def dashboard(
    request: Request,
    user_id: UUID = Depends(require_user),
    timezone_name: str = Depends(resolve_timezone),
) -> DashboardSummary:
    """Load today's progress, meals and streak."""
    container: AppContainer = request.app.state.container
    return container.stats_service.dashboard(
        user_id, now=datetime.now(tz=UTC), timezone_name=timezone_name
    )


@router.get("/stats/week")
def weekly_stats(
    request: Request,
    user_id: UUID = Depends(require_user),
    timezone_name: str = Depends(resolve_timezone),
) -> list[DailyTotal]:
    """Return calorie totals for the last seven days."""
    container: AppContainer = request.app.state.container
    return container.stats_service.week(
        user_id, now=datetime.now(tz=UTC), timezone_name=timezone_name
    )


@router.get("/profile")
def get_profile(request: Request, user_id: UUID = Depends(require_user)) -> Profile:
    """Return the caller's profile."""
    container: AppContainer = request.app.state.container
    return container.profile_service.get_profile(user_id)


@router.patch("/profile")
def update_profile(
    payload: ProfileUpdate, request: Request, user_id: UUID = Depends(require_user)
) -> Profile:
    """Update editable profile fields."""
    container: AppContainer = request.app.state.container
    return container.profile_service.update_profile(
        user_id, payload.model_dump(exclude_unset=True)
    )
