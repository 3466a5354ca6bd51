"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from foodvision.adapters.openai_dish_client import OpenAIDishClient
from foodvision.adapters.supabase_identity_provider import SupabaseIdentityProvider
from foodvision.adapters.supabase_image_store import SupabaseImageStore
from foodvision.adapters.supabase_meal_repository import SupabaseMealRepository
from foodvision.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from foodvision.config import Settings
from foodvision.services.identification import DishIdentificationService
from foodvision.services.ingestion import IngestionCoordinator
from foodvision.services.ledger import MealLedgerService
from foodvision.services.profiles import ProfileService
from foodvision.services.stats import StatsService
from foodvision.services.streaks import StreakService
from foodvision.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    profile_service: ProfileService
    identification_service: DishIdentificationService
    ledger: MealLedgerService
    streak_service: StreakService
    stats_service: StatsService
    ingestion: IngestionCoordinator
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(
        SupabaseProfileRepository(supabase_client),
        default_daily_calorie_goal=resolved_settings.default_daily_calorie_goal,
    )
    user_service = UserService(
        identity_provider=SupabaseIdentityProvider(supabase_client),
        profile_service=profile_service,
    )
    dish_client = OpenAIDishClient.create(
        api_key=resolved_settings.openai_api_key,
        base_url=resolved_settings.openai_base_url,
        timeout=resolved_settings.openai_timeout_seconds,
    )
    identification_service = DishIdentificationService(
        client=dish_client,
        model=resolved_settings.openai_model,
        max_image_bytes=resolved_settings.max_image_bytes,
    )
    ledger = MealLedgerService(SupabaseMealRepository(supabase_client))
    streak_service = StreakService(profile_service=profile_service, ledger=ledger)
    stats_service = StatsService(ledger=ledger, streaks=streak_service)
    ingestion = IngestionCoordinator(
        identification=identification_service,
        image_store=SupabaseImageStore(
            supabase_client, bucket=resolved_settings.meal_images_bucket
        ),
        ledger=ledger,
        streaks=streak_service,
        max_concurrent_uploads=resolved_settings.max_concurrent_uploads,
    )

    async def close_resources() -> None:
        await dish_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        profile_service=profile_service,
        identification_service=identification_service,
        ledger=ledger,
        streak_service=streak_service,
        stats_service=stats_service,
        ingestion=ingestion,
        close_resources=close_resources,
    )
