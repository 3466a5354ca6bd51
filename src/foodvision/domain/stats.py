"""Derived statistics for dashboards and history."""

from dataclasses import dataclass

from foodvision.domain.meals import DailyTotal, MealEntry
from foodvision.domain.profiles import StreakState


@dataclass(frozen=True)
class CalorieProgress:
    """Progress of a day's intake towards the calorie goal."""

    consumed: int
    goal: int
    percentage: float
    remaining: int
    over_goal: bool
    goal_reached: bool


@dataclass(frozen=True)
class DashboardSummary:
    """Everything the home screen shows after a data load."""

    today: DailyTotal
    progress: CalorieProgress
    streak: StreakState
    meals: list[MealEntry]
