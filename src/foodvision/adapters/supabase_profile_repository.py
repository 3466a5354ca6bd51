"""Supabase repository for profile rows."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from foodvision.domain.profiles import DEFAULT_DAILY_CALORIE_GOAL, Profile, StreakState
from foodvision.services.profiles import ProfileRepository

_COLUMNS = (
    "user_id, name, age, gender, weight, height, daily_calorie_goal, "
    "streak_count, longest_streak, last_streak_check"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the profiles table."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile row for a user."""
        response = (
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_profile(
        self, user_id: UUID, name: str | None, daily_calorie_goal: int
    ) -> Profile:
        """Insert a profile with a zero streak."""
        response = (
            self.client.table("profiles")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "daily_calorie_goal": daily_calorie_goal,
                    "streak_count": 0,
                    "longest_streak": 0,
                    "last_streak_check": None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create profile")
        return _parse_row(response.data[0])

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> None:
        """Update editable profile columns."""
        self.client.table("profiles").update(changes).eq(
            "user_id", str(user_id)
        ).execute()

    def save_streak(
        self, user_id: UUID, state: StreakState, expected_last_check: date | None
    ) -> bool:
        """Conditionally write streak columns keyed on the previous check date."""
        query = (
            self.client.table("profiles")
            .update(
                {
                    "streak_count": state.streak_count,
                    "longest_streak": state.longest_streak,
                    "last_streak_check": state.last_streak_check.isoformat()
                    if state.last_streak_check
                    else None,
                }
            )
            .eq("user_id", str(user_id))
        )
        if expected_last_check is None:
            query = query.is_("last_streak_check", "null")
        else:
            query = query.eq("last_streak_check", expected_last_check.isoformat())
        response = query.execute()
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> Profile:
    last_check_raw = row.get("last_streak_check")
    last_check = (
        date.fromisoformat(last_check_raw)
        if isinstance(last_check_raw, str) and last_check_raw
        else None
    )
    return Profile(
        user_id=UUID(str(row["user_id"])),
        name=row.get("name"),
        age=row.get("age"),
        gender=row.get("gender"),
        weight=_optional_float(row.get("weight")),
        height=_optional_float(row.get("height")),
        streak=StreakState(
            streak_count=int(row.get("streak_count") or 0),
            longest_streak=int(row.get("longest_streak") or 0),
            last_streak_check=last_check,
            daily_calorie_goal=int(
                row.get("daily_calorie_goal") or DEFAULT_DAILY_CALORIE_GOAL
            ),
        ),
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    return None
