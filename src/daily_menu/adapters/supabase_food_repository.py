"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from daily_menu.domain.foods import Food, FoodCategory
from daily_menu.services.menus import FoodCatalogRepository


@dataclass
class SupabaseFoodRepository(FoodCatalogRepository):
    """Supabase-backed read access to the shared food catalog."""

    client: Client

    def list_all_foods(self) -> list[Food]:
        """Return every catalog food."""
        response = self.client.table("foods").select("*").execute()
        return [parse_food(row) for row in response.data or []]


def parse_food(row: dict[str, object]) -> Food:
    """Parse a foods row into a domain model."""
    fiber = row.get("fiber_per_100g")
    density = row.get("density_factor")
    return Food(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        category=FoodCategory(str(row["category"])),
        calories=float(row.get("calories_per_100g", 0.0)),
        protein=float(row.get("protein_per_100g", 0.0)),
        carbs=float(row.get("carbs_per_100g", 0.0)),
        fat=float(row.get("fat_per_100g", 0.0)),
        fiber=float(fiber) if fiber is not None else None,
        tags=tuple(str(tag) for tag in row.get("tags") or []),
        default_serving_grams=int(row.get("default_serving_grams") or 100),
        density_factor=float(density) if density is not None else None,
    )
