"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from daily_menu.adapters.supabase_food_repository import SupabaseFoodRepository
from daily_menu.adapters.supabase_menu_repository import SupabaseMenuRepository
from daily_menu.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from daily_menu.config import Settings
from daily_menu.services.catalog import FoodCatalogService
from daily_menu.services.menus import MenuGeneratorService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: FoodCatalogService
    menu_service: MenuGeneratorService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    menu_repository = SupabaseMenuRepository(supabase_client)
    menu_service = MenuGeneratorService(
        food_repository=food_repository,
        profile_repository=profile_repository,
        menu_repository=menu_repository,
    )
    return AppContainer(
        settings=resolved_settings,
        catalog_service=FoodCatalogService(food_repository),
        menu_service=menu_service,
    )
