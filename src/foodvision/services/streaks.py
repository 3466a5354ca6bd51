"""Daily calorie-goal streak evaluation."""

import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta
from uuid import UUID

from foodvision.domain.profiles import StreakState
from foodvision.services.ledger import MealLedgerService
from foodvision.services.profiles import ProfileService

_logger = logging.getLogger(__name__)


def evaluate_streak(
    state: StreakState, today_total: int, yesterday_total: int, today: date
) -> StreakState:
    """Advance the streak state machine to ``today``.

    Runs at most once per calendar day: a state already checked today (or
    later) comes back unchanged. Yesterday's total decides whether the streak
    continues; a gap of more than one day resets it no matter how many days
    were skipped. ``today_total`` never counts since the day is still open.
    """
    del today_total
    last_check = state.last_streak_check
    if last_check is not None and last_check >= today:
        return state

    if last_check is None:
        # First evaluation: no tracked day to judge yet.
        streak_count = state.streak_count
    elif last_check == today - timedelta(days=1):
        if yesterday_total >= state.daily_calorie_goal:
            streak_count = state.streak_count + 1
        else:
            streak_count = 0
    else:
        streak_count = 0

    return replace(
        state,
        streak_count=streak_count,
        longest_streak=max(state.longest_streak, streak_count),
        last_streak_check=today,
    )


@dataclass
class StreakService:
    """Loads totals, evaluates the streak and persists changes."""

    profile_service: ProfileService
    ledger: MealLedgerService

    def refresh(self, user_id: UUID, today: date, timezone_name: str) -> StreakState:
        """Evaluate the user's streak for ``today`` and return the current state."""
        profile = self.profile_service.ensure_profile(user_id)
        state = profile.streak
        if state.last_streak_check is not None and state.last_streak_check >= today:
            return state

        today_total = self.ledger.daily_total(user_id, today, timezone_name)
        yesterday_total = self.ledger.daily_total(
            user_id, today - timedelta(days=1), timezone_name
        )
        updated = evaluate_streak(
            state, today_total.calories, yesterday_total.calories, today
        )
        if updated == state:
            return state

        saved = self.profile_service.repository.save_streak(
            user_id, updated, expected_last_check=state.last_streak_check
        )
        if not saved:
            _logger.info(
                "Streak already evaluated by another session",
                extra={"user_id": str(user_id), "day": today.isoformat()},
            )
            return self.profile_service.get_profile(user_id).streak

        _logger.info(
            "Streak evaluated: %s -> %s (longest %s)",
            state.streak_count,
            updated.streak_count,
            updated.longest_streak,
            extra={"user_id": str(user_id), "day": today.isoformat()},
        )
        return updated
