"""Food catalog queries."""

from dataclasses import dataclass

from daily_menu.domain.foods import Food
from daily_menu.services.food_selector import name_sort_key
from daily_menu.services.menus import FoodCatalogRepository


@dataclass
class FoodCatalogService:
    """Application service for browsing the food catalog."""

    repository: FoodCatalogRepository

    def list_foods(self) -> list[Food]:
        """Return all catalog foods ordered by name."""
        return sorted(
            self.repository.list_all_foods(),
            key=lambda food: name_sort_key(food.name),
        )
