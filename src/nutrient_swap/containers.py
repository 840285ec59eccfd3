"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrient_swap.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from nutrient_swap.adapters.supabase_nutrient_repository import (
    SupabaseNutrientRepository,
)
from nutrient_swap.config import Settings
from nutrient_swap.services.aggregation import NutrientAggregator
from nutrient_swap.services.cache import InMemoryReferenceCache
from nutrient_swap.services.meals import MealLogRepository, MealLogService
from nutrient_swap.services.optimizer import GoalOptimizer
from nutrient_swap.services.plate import PlateService
from nutrient_swap.services.profiles import NutrientProfileService, NutrientRepository
from nutrient_swap.services.swaps import SwapService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: NutrientProfileService
    swap_service: SwapService
    goal_optimizer: GoalOptimizer
    aggregator: NutrientAggregator
    plate_service: PlateService
    meal_log_service: MealLogService


def build_services(
    settings: Settings,
    nutrient_repository: NutrientRepository,
    meal_log_repository: MealLogRepository,
) -> AppContainer:
    """Wire services around the given repositories."""
    profile_service = NutrientProfileService(
        repository=nutrient_repository,
        cache=InMemoryReferenceCache(ttl_seconds=settings.reference_cache_ttl_seconds),
        debug=settings.debug,
    )
    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        swap_service=SwapService(profile_service, meal_log_repository),
        goal_optimizer=GoalOptimizer(profile_service),
        aggregator=NutrientAggregator(profile_service, meal_log_repository),
        plate_service=PlateService(profile_service, meal_log_repository),
        meal_log_service=MealLogService(profile_service, meal_log_repository),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return build_services(
        resolved_settings,
        nutrient_repository=SupabaseNutrientRepository(supabase_client),
        meal_log_repository=SupabaseMealLogRepository(supabase_client),
    )
