"""Daily menu generation service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from daily_menu.domain.errors import (
    FoodsUnavailableError,
    MenuAlreadyExistsError,
    NutritionProfileMissingError,
)
from daily_menu.domain.foods import Bucket, Food, FoodPreference
from daily_menu.domain.menus import (
    GeneratedMenu,
    MacroVector,
    Meal,
    MealItem,
    MealType,
    MenuItemDraft,
    StoredMenu,
    sum_macros,
)
from daily_menu.domain.profiles import NutritionProfile
from daily_menu.services.food_selector import CategorizedFoods, FoodSelector
from daily_menu.services.macro_solver import item_for
from daily_menu.services.meal_builder import MealBuilder

MEAL_DISTRIBUTION = {
    MealType.BREAKFAST: 0.25,
    MealType.LUNCH: 0.35,
    MealType.DINNER: 0.30,
    MealType.SNACK: 0.10,
}

PROFILE_NOT_FOUND = "User nutrition profile not found. Complete onboarding first."
PROFILE_INCOMPLETE = "Nutrition profile is incomplete. Complete onboarding first."
NO_PROTEIN_FOODS = "No protein foods available matching your preferences"
NO_CARB_FOODS = "No carb foods available matching your preferences"
NO_PRODUCE_FOODS = "No vegetables or fruits available matching your preferences"

_logger = logging.getLogger(__name__)


class FoodCatalogRepository(Protocol):
    """Read access to the food catalog."""

    def list_all_foods(self) -> list[Food]:
        """Return every catalog food, in any order."""


class ProfileRepository(Protocol):
    """Read access to user nutrition data."""

    def get_nutrition_profile(self, user_id: UUID) -> NutritionProfile | None:
        """Return the user's nutrition profile, if present."""

    def list_food_preferences(self, user_id: UUID) -> list[FoodPreference]:
        """Return the user's liked and disliked foods."""


class MenuRepository(Protocol):
    """Persistence interface for generated menus."""

    def find_menu(self, user_id: UUID, day: date) -> StoredMenu | None:
        """Return the user's menu for a calendar day, with items."""

    def create_menu(self, user_id: UUID, day: date, totals: MacroVector) -> StoredMenu:
        """Create a menu row; raise MenuAlreadyExistsError on a duplicate day."""

    def create_menu_items(self, menu_id: UUID, items: list[MenuItemDraft]) -> None:
        """Create the item rows of an existing menu."""

    def delete_menu(self, menu_id: UUID) -> None:
        """Delete a menu row and its items."""


@dataclass
class MenuGeneratorService:
    """Generates and stores one menu per user and day."""

    food_repository: FoodCatalogRepository
    profile_repository: ProfileRepository
    menu_repository: MenuRepository

    def generate(self, user_id: UUID, day: date) -> GeneratedMenu:
        """Return the user's menu for a day, generating it if needed."""
        existing = self.menu_repository.find_menu(user_id, day)
        if existing:
            _logger.info("Menu exists: user=%s date=%s", user_id, day)
            return format_menu(existing)

        profile = self.profile_repository.get_nutrition_profile(user_id)
        if profile is None:
            raise NutritionProfileMissingError(PROFILE_NOT_FOUND)
        daily_targets = profile.daily_targets()
        if daily_targets is None:
            raise NutritionProfileMissingError(PROFILE_INCOMPLETE)

        selector = FoodSelector.create(
            self.profile_repository.list_food_preferences(user_id),
            profile.dietary_restrictions,
        )
        foods = selector.categorize(self.food_repository.list_all_foods())
        _ensure_foods_available(foods)

        meals = build_meals(MealBuilder(selector, foods), daily_targets)
        totals = sum_macros(item for meal in meals for item in meal.items)
        stored = self._save_menu(user_id, day, meals, totals)
        return format_menu(stored)

    def _save_menu(
        self, user_id: UUID, day: date, meals: list[Meal], totals: MacroVector
    ) -> StoredMenu:
        try:
            menu = self.menu_repository.create_menu(user_id, day, totals)
        except MenuAlreadyExistsError:
            _logger.info("Menu stored concurrently: user=%s date=%s", user_id, day)
            stored = self.menu_repository.find_menu(user_id, day)
            if stored is None:
                raise
            return stored

        drafts = [
            MenuItemDraft(food_id=item.food.id, grams=item.grams, meal_type=meal.type)
            for meal in meals
            for item in meal.items
        ]
        try:
            self.menu_repository.create_menu_items(menu.id, drafts)
        except Exception:
            self.menu_repository.delete_menu(menu.id)
            raise

        _logger.info(
            "Menu generated: user=%s date=%s items=%s", user_id, day, len(drafts)
        )
        stored = self.menu_repository.find_menu(user_id, day)
        if stored is None:
            raise RuntimeError("Generated menu could not be reloaded")
        return stored


def build_meals(builder: MealBuilder, daily_targets: MacroVector) -> list[Meal]:
    """Build every meal of the day from its share of the daily targets."""
    return [
        builder.build_meal(meal_type, daily_targets.scale(weight)).meal
        for meal_type, weight in MEAL_DISTRIBUTION.items()
    ]


def format_menu(menu: StoredMenu) -> GeneratedMenu:
    """Group stored items into meals, dropping meals without items."""
    grouped: dict[MealType, list[MealItem]] = {
        meal_type: [] for meal_type in MealType
    }
    for stored_item in menu.items:
        grouped[stored_item.meal_type].append(
            item_for(stored_item.food, stored_item.grams)
        )
    meals = tuple(
        Meal(type=meal_type, items=tuple(items))
        for meal_type, items in grouped.items()
        if items
    )
    return GeneratedMenu(id=menu.id, date=menu.date, meals=meals, totals=menu.totals)


def _ensure_foods_available(foods: CategorizedFoods) -> None:
    if not foods.proteins:
        raise FoodsUnavailableError(NO_PROTEIN_FOODS, (Bucket.PROTEINS,))
    if not foods.carbs:
        raise FoodsUnavailableError(NO_CARB_FOODS, (Bucket.CARBS,))
    if not foods.vegetables and not foods.fruits:
        raise FoodsUnavailableError(
            NO_PRODUCE_FOODS, (Bucket.VEGETABLES, Bucket.FRUITS)
        )
