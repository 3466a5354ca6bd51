"""Statistics service for the dashboard, weekly chart and history."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from enum import Enum
from uuid import UUID
from zoneinfo import ZoneInfo

from foodvision.domain.meals import DailyTotal, MealEntry
from foodvision.domain.stats import CalorieProgress, DashboardSummary
from foodvision.services.ledger import MealLedgerService, day_bounds
from foodvision.services.streaks import StreakService

CHART_DAYS = 7


class HistoryPeriod(str, Enum):
    """Date filter for meal history."""

    ALL = "all"
    WEEK = "week"
    MONTH = "month"


class HistorySort(str, Enum):
    """Ordering for meal history."""

    RECENT = "recent"
    OLDEST = "oldest"
    HIGHEST = "highest"
    LOWEST = "lowest"


@dataclass
class StatsService:
    """Read-side views over the meal ledger."""

    ledger: MealLedgerService
    streaks: StreakService

    def dashboard(
        self, user_id: UUID, now: datetime, timezone_name: str
    ) -> DashboardSummary:
        """Load the home screen, evaluating the streak for the current day."""
        today = now.astimezone(ZoneInfo(timezone_name)).date()
        streak = self.streaks.refresh(user_id, today, timezone_name)
        meals = self.ledger.meals_for_day(user_id, today, timezone_name)
        total = DailyTotal(day=today, calories=sum(meal.calories for meal in meals))
        return DashboardSummary(
            today=total,
            progress=calorie_progress(total.calories, streak.daily_calorie_goal),
            streak=streak,
            meals=meals,
        )

    def week(
        self, user_id: UUID, now: datetime, timezone_name: str
    ) -> list[DailyTotal]:
        """Return daily totals for the trailing seven days, oldest first."""
        tz = ZoneInfo(timezone_name)
        today = now.astimezone(tz).date()
        first_day = today - timedelta(days=CHART_DAYS - 1)
        start, _ = day_bounds(first_day, tz)
        _, end = day_bounds(today, tz)
        meals = self.ledger.list_meals(user_id, start, end)
        return [
            _aggregate_day(first_day + timedelta(days=offset), meals, tz)
            for offset in range(CHART_DAYS)
        ]

    def history(  # noqa: PLR0913
        self,
        user_id: UUID,
        now: datetime,
        timezone_name: str,
        query: str | None = None,
        period: HistoryPeriod = HistoryPeriod.ALL,
        sort: HistorySort = HistorySort.RECENT,
    ) -> list[MealEntry]:
        """Return the user's meals filtered by name and period, then sorted."""
        meals = self.ledger.list_all(user_id)
        if query:
            needle = query.lower()
            meals = [meal for meal in meals if needle in meal.dish_name.lower()]

        period_start = _period_start(period, now.astimezone(ZoneInfo(timezone_name)))
        if period_start is not None:
            meals = [meal for meal in meals if period_start <= meal.created_at <= now]

        if sort == HistorySort.HIGHEST:
            return sorted(meals, key=lambda meal: meal.calories, reverse=True)
        if sort == HistorySort.LOWEST:
            return sorted(meals, key=lambda meal: meal.calories)
        if sort == HistorySort.OLDEST:
            return sorted(meals, key=lambda meal: meal.created_at)
        return sorted(meals, key=lambda meal: meal.created_at, reverse=True)


def calorie_progress(consumed: int, goal: int) -> CalorieProgress:
    """Compute progress towards the daily goal, capped at 100 percent."""
    percentage = min(consumed / goal * 100, 100.0) if goal > 0 else 100.0
    return CalorieProgress(
        consumed=consumed,
        goal=goal,
        percentage=percentage,
        remaining=max(goal - consumed, 0),
        over_goal=consumed > goal,
        goal_reached=consumed >= goal,
    )


def _aggregate_day(day: date, meals: list[MealEntry], tz: ZoneInfo) -> DailyTotal:
    calories = sum(
        meal.calories for meal in meals if meal.created_at.astimezone(tz).date() == day
    )
    return DailyTotal(day=day, calories=calories)


def _period_start(period: HistoryPeriod, local_now: datetime) -> datetime | None:
    if period == HistoryPeriod.WEEK:
        # Weeks start on Sunday.
        days_back = (local_now.weekday() + 1) % 7
        start_day = local_now.date() - timedelta(days=days_back)
    elif period == HistoryPeriod.MONTH:
        start_day = local_now.date().replace(day=1)
    else:
        return None
    start, _ = day_bounds(start_day, local_now.tzinfo)
    return start.astimezone(UTC)
