"""Domain models for user profiles and streak tracking."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

DEFAULT_DAILY_CALORIE_GOAL = 2000


@dataclass(frozen=True)
class StreakState:
    """Daily goal adherence counters stored on the profile."""

    streak_count: int = 0
    longest_streak: int = 0
    last_streak_check: date | None = None
    daily_calorie_goal: int = DEFAULT_DAILY_CALORIE_GOAL


@dataclass(frozen=True)
class Profile:
    """A user's profile row."""

    user_id: UUID
    name: str | None = None
    age: int | None = None
    gender: str | None = None
    weight: float | None = None
    height: float | None = None
    streak: StreakState = field(default_factory=StreakState)
