"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutriscan.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from nutriscan.adapters.supabase_documents import SupabaseDocumentTable
from nutriscan.adapters.supabase_goal_repository import SupabaseGoalRepository
from nutriscan.adapters.supabase_history_repository import SupabaseHistoryRepository
from nutriscan.adapters.supabase_intake_repository import SupabaseIntakeRepository
from nutriscan.adapters.supabase_profile_repository import SupabaseProfileRepository
from nutriscan.config import Settings
from nutriscan.domain.catalogs import DEFAULT_ALLERGEN_CATALOG, DEFAULT_DIET_CATALOG
from nutriscan.services.allergens import AllergenMatcher
from nutriscan.services.analysis import AnalysisService
from nutriscan.services.cache import InMemoryProductCache
from nutriscan.services.dietary import DietaryChecker
from nutriscan.services.goals import GoalTracker
from nutriscan.services.health import HealthScorer
from nutriscan.services.history import HistoryService
from nutriscan.services.products import ProductService
from nutriscan.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    product_service: ProductService
    profile_service: ProfileService
    goal_tracker: GoalTracker
    analysis_service: AnalysisService
    history_service: HistoryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    documents = SupabaseDocumentTable(
        supabase_client, table=resolved_settings.supabase_documents_table
    )
    lookup_client = HttpxOpenFoodFactsClient.create(
        resolved_settings.openfoodfacts_base_url
    )
    product_service = ProductService(
        client=lookup_client,
        cache=InMemoryProductCache(
            ttl_seconds=resolved_settings.product_cache_ttl_seconds,
            max_entries=resolved_settings.product_cache_max_entries,
        ),
    )
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(documents),
        allergen_catalog=DEFAULT_ALLERGEN_CATALOG,
        diet_catalog=DEFAULT_DIET_CATALOG,
    )
    goal_tracker = GoalTracker(
        goal_repository=SupabaseGoalRepository(documents),
        intake_repository=SupabaseIntakeRepository(documents),
        timezone_name=resolved_settings.timezone,
    )
    analysis_service = AnalysisService(
        profile_service=profile_service,
        allergen_matcher=AllergenMatcher(DEFAULT_ALLERGEN_CATALOG),
        dietary_checker=DietaryChecker(DEFAULT_DIET_CATALOG),
        goal_tracker=goal_tracker,
        health_scorer=HealthScorer(),
    )
    history_service = HistoryService(
        repository=SupabaseHistoryRepository(documents),
        max_entries=resolved_settings.history_max_entries,
    )

    async def close_resources() -> None:
        await lookup_client.close()

    return AppContainer(
        settings=resolved_settings,
        product_service=product_service,
        profile_service=profile_service,
        goal_tracker=goal_tracker,
        analysis_service=analysis_service,
        history_service=history_service,
        close_resources=close_resources,
    )
