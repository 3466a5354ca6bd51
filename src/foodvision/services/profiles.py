"""Profile lifecycle and editable settings."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from foodvision.domain.profiles import DEFAULT_DAILY_CALORIE_GOAL, Profile, StreakState
from foodvision.errors import NotFound, ValidationError

EDITABLE_FIELDS = frozenset(
    {"name", "age", "gender", "weight", "height", "daily_calorie_goal"}
)


class ProfileRepository(Protocol):
    """Persistence interface for profile rows."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the user's profile, if present."""

    def create_profile(
        self, user_id: UUID, name: str | None, daily_calorie_goal: int
    ) -> Profile:
        """Create a profile with a zero streak."""

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> None:
        """Apply editable field changes to the profile row."""

    def save_streak(
        self, user_id: UUID, state: StreakState, expected_last_check: date | None
    ) -> bool:
        """Write streak fields if ``last_streak_check`` still matches.

        Returns False when another writer got there first.
        """


@dataclass
class ProfileService:
    """Application service for user profiles."""

    repository: ProfileRepository
    default_daily_calorie_goal: int = DEFAULT_DAILY_CALORIE_GOAL

    def ensure_profile(self, user_id: UUID, name: str | None = None) -> Profile:
        """Return the user's profile, creating it on first sight."""
        existing = self.repository.get_profile(user_id)
        if existing:
            return existing
        return self.repository.create_profile(
            user_id, name=name, daily_calorie_goal=self.default_daily_calorie_goal
        )

    def get_profile(self, user_id: UUID) -> Profile:
        """Return the user's profile or raise NotFound."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise NotFound("Profile not found")
        return profile

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> Profile:
        """Validate and persist editable profile fields."""
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            names = ", ".join(sorted(unknown))
            raise ValidationError(f"Unknown profile fields: {names}")
        goal = changes.get("daily_calorie_goal")
        if "daily_calorie_goal" in changes and (
            isinstance(goal, bool) or not isinstance(goal, int) or goal <= 0
        ):
            raise ValidationError("Daily calorie goal must be a positive integer")
        for key in ("age", "weight", "height"):
            value = changes.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise ValidationError(f"{key} must be a number")
            if value < 0:
                raise ValidationError(f"{key} must not be negative")
        self.ensure_profile(user_id)
        if changes:
            self.repository.update_profile(user_id, changes)
        return self.get_profile(user_id)
