"""Tests for profile and user services."""

from uuid import UUID, uuid4

import pytest

from foodvision.errors import NotFound, ValidationError
from foodvision.services.profiles import ProfileService
from foodvision.services.users import UserService
from tests.conftest import FakeIdentityProvider, InMemoryProfileRepository


def test_ensure_profile_creates_with_default_goal(user_id: UUID) -> None:
    repo = InMemoryProfileRepository()
    service = ProfileService(repo, default_daily_calorie_goal=1800)

    profile = service.ensure_profile(user_id, name="Ada")

    assert profile.name == "Ada"
    assert profile.streak.streak_count == 0
    assert profile.streak.last_streak_check is None
    assert profile.streak.daily_calorie_goal == 1800
    assert service.ensure_profile(user_id) == profile


def test_get_profile_missing() -> None:
    with pytest.raises(NotFound):
        ProfileService(InMemoryProfileRepository()).get_profile(uuid4())


def test_update_profile_applies_changes(user_id: UUID) -> None:
    service = ProfileService(InMemoryProfileRepository())

    profile = service.update_profile(
        user_id, {"name": "Grace", "weight": 61.5, "daily_calorie_goal": 2200}
    )

    assert profile.name == "Grace"
    assert profile.weight == 61.5
    assert profile.streak.daily_calorie_goal == 2200


def test_update_profile_keeps_streak_counters(user_id: UUID) -> None:
    repo = InMemoryProfileRepository()
    service = ProfileService(repo)
    service.ensure_profile(user_id)

    profile = service.update_profile(user_id, {})

    assert profile == repo.profiles[user_id]


@pytest.mark.parametrize(
    "changes",
    [
        {"daily_calorie_goal": 0},
        {"daily_calorie_goal": -100},
        {"daily_calorie_goal": None},
        {"daily_calorie_goal": True},
        {"daily_calorie_goal": "2000"},
        {"age": -1},
        {"height": "tall"},
        {"streak_count": 99},
    ],
)
def test_update_profile_rejects_invalid_changes(
    user_id: UUID, changes: dict[str, object]
) -> None:
    repo = InMemoryProfileRepository()

    with pytest.raises(ValidationError):
        ProfileService(repo).update_profile(user_id, changes)

    assert user_id not in repo.profiles


def test_authenticate_provisions_profile(user_id: UUID) -> None:
    repo = InMemoryProfileRepository()
    service = UserService(
        identity_provider=FakeIdentityProvider({"token": user_id}),
        profile_service=ProfileService(repo),
    )

    assert service.authenticate("token") == user_id
    assert user_id in repo.profiles


def test_authenticate_rejects_unknown_token() -> None:
    repo = InMemoryProfileRepository()
    service = UserService(
        identity_provider=FakeIdentityProvider(),
        profile_service=ProfileService(repo),
    )

    assert service.authenticate("nope") is None
    assert repo.profiles == {}
