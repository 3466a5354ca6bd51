"""Meal ledger: append-only per-user meal records and daily totals."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from foodvision.domain.meals import DailyTotal, MealEntry
from foodvision.domain.nutrition import NutritionRecord
from foodvision.errors import NotFound

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meal rows."""

    def create_meal(
        self, user_id: UUID, record: NutritionRecord, image_url: str
    ) -> MealEntry:
        """Insert a meal row and return it with its server-assigned fields."""

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        """Return meals with ``start <= created_at < end``, oldest first."""

    def list_all_meals(self, user_id: UUID) -> list[MealEntry]:
        """Return every meal for a user, newest first."""

    def get_meal(self, meal_id: UUID) -> MealEntry | None:
        """Return a meal by id."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Hard-delete a meal row."""


@dataclass
class MealLedgerService:
    """Service over the user's meal ledger."""

    repository: MealRepository

    def append(
        self, user_id: UUID, record: NutritionRecord, image_url: str
    ) -> MealEntry:
        """Persist a new meal for the user."""
        entry = self.repository.create_meal(user_id, record, image_url)
        _logger.info(
            "Meal appended",
            extra={"user_id": str(user_id), "meal_id": str(entry.id)},
        )
        return entry

    def daily_total(self, user_id: UUID, day: date, timezone_name: str) -> DailyTotal:
        """Sum calories for ``day`` in the given timezone."""
        meals = self.meals_for_day(user_id, day, timezone_name)
        return DailyTotal(day=day, calories=sum(meal.calories for meal in meals))

    def meals_for_day(
        self, user_id: UUID, day: date, timezone_name: str
    ) -> list[MealEntry]:
        """Return the day's meals, newest first."""
        start, end = day_bounds(day, ZoneInfo(timezone_name))
        meals = self.repository.list_meals(user_id, start, end)
        in_day = [meal for meal in meals if start <= meal.created_at < end]
        return sorted(in_day, key=lambda meal: meal.created_at, reverse=True)

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        """Return meals created in ``[start, end)``."""
        return self.repository.list_meals(user_id, start, end)

    def list_all(self, user_id: UUID) -> list[MealEntry]:
        """Return the user's full meal history, newest first."""
        return self.repository.list_all_meals(user_id)

    def remove(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete one of the user's meals.

        Already credited streak days are not revisited.
        """
        meal = self.repository.get_meal(meal_id)
        if meal is None or meal.user_id != user_id:
            raise NotFound("Meal not found")
        self.repository.delete_meal(meal_id)
        _logger.info(
            "Meal removed",
            extra={"user_id": str(user_id), "meal_id": str(meal_id)},
        )


def day_bounds(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Return the UTC half-open window covering ``day`` in ``tz``."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)
