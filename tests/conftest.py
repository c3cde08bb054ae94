"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import pytest

from daily_menu.config import Settings
from daily_menu.containers import AppContainer
from daily_menu.domain.errors import MenuAlreadyExistsError
from daily_menu.domain.foods import Food, FoodCategory, FoodPreference
from daily_menu.domain.menus import (
    MacroVector,
    MenuItemDraft,
    StoredMenu,
    StoredMenuItem,
)
from daily_menu.domain.profiles import NutritionProfile
from daily_menu.services.catalog import FoodCatalogService
from daily_menu.services.menus import (
    FoodCatalogRepository,
    MenuGeneratorService,
    MenuRepository,
    ProfileRepository,
)

DAILY_TARGETS = MacroVector(calories=2000, protein=150, carbs=200, fat=70)
MENU_DATE = date(2024, 3, 15)


def make_food(  # noqa: PLR0913
    name: str,
    category: FoodCategory,
    calories: float,
    protein: float,
    carbs: float,
    fat: float,
    tags: tuple[str, ...] = (),
) -> Food:
    return Food(
        id=uuid4(),
        name=name,
        category=category,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        tags=tags,
    )


def build_catalog() -> list[Food]:
    """A small catalog covering every bucket."""
    vegan = ("vegan", "vegetarian", "gluten-free")
    return [
        make_food("Chicken breast", FoodCategory.PROTEIN, 165, 31, 0, 3.6),
        make_food("Eggs", FoodCategory.PROTEIN, 155, 13, 1.1, 11, ("vegetarian",)),
        make_food("Salmon", FoodCategory.PROTEIN, 208, 20, 0, 13),
        make_food("Tofu", FoodCategory.PROTEIN, 76, 8, 1.9, 4.8, vegan),
        make_food("Veggie burger", FoodCategory.MIXED, 177, 15, 14, 6, ("vegetarian",)),
        make_food("Oats", FoodCategory.CARB, 389, 16.9, 66.3, 6.9, vegan),
        make_food("Pasta", FoodCategory.CARB, 131, 5, 25, 1.1, ("vegan",)),
        make_food("Quinoa", FoodCategory.CARB, 120, 4.4, 21.3, 1.9, vegan),
        make_food("Sweet potato", FoodCategory.CARB, 86, 1.6, 20, 0.1, vegan),
        make_food("Apple", FoodCategory.FRUIT, 52, 0.3, 14, 0.2, vegan),
        make_food("Banana", FoodCategory.FRUIT, 89, 1.1, 22.8, 0.3, vegan),
        make_food("Broccoli", FoodCategory.VEGETABLE, 34, 2.8, 7, 0.4, vegan),
        make_food("Spinach", FoodCategory.VEGETABLE, 23, 2.9, 3.6, 0.4, vegan),
        make_food("Olive oil", FoodCategory.FAT, 884, 0, 0, 100, vegan),
    ]


def food_named(foods: list[Food], name: str) -> Food:
    return next(food for food in foods if food.name == name)


@dataclass
class InMemoryFoodRepository(FoodCatalogRepository):
    """In-memory food catalog for tests."""

    foods: list[Food] = field(default_factory=list)

    def list_all_foods(self) -> list[Food]:
        return list(self.foods)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory nutrition profiles and preferences for tests."""

    profiles: dict[UUID, NutritionProfile] = field(default_factory=dict)
    preferences: dict[UUID, list[FoodPreference]] = field(default_factory=dict)

    def add_profile(
        self,
        user_id: UUID,
        targets: MacroVector = DAILY_TARGETS,
        dietary_restrictions: tuple[str, ...] = (),
    ) -> NutritionProfile:
        profile = NutritionProfile(
            user_id=user_id,
            daily_calories=targets.calories,
            protein_intake=targets.protein,
            carbs_intake=targets.carbs,
            fat_intake=targets.fat,
            dietary_restrictions=dietary_restrictions,
        )
        self.profiles[user_id] = profile
        return profile

    def get_nutrition_profile(self, user_id: UUID) -> NutritionProfile | None:
        return self.profiles.get(user_id)

    def list_food_preferences(self, user_id: UUID) -> list[FoodPreference]:
        return list(self.preferences.get(user_id, []))


@dataclass
class InMemoryMenuRepository(MenuRepository):
    """In-memory menu store enforcing one menu per user and day."""

    foods: dict[UUID, Food] = field(default_factory=dict)
    menus: dict[tuple[UUID, date], StoredMenu] = field(default_factory=dict)
    conflicting_menu: StoredMenu | None = None
    fail_items: bool = False
    created: list[UUID] = field(default_factory=list)
    deleted: list[UUID] = field(default_factory=list)

    def find_menu(self, user_id: UUID, day: date) -> StoredMenu | None:
        return self.menus.get((user_id, day))

    def create_menu(self, user_id: UUID, day: date, totals: MacroVector) -> StoredMenu:
        if self.conflicting_menu is not None:
            self.menus[(user_id, day)] = self.conflicting_menu
        if (user_id, day) in self.menus:
            raise MenuAlreadyExistsError(f"Menu already exists for {user_id}")
        menu = StoredMenu(id=uuid4(), user_id=user_id, date=day, totals=totals)
        self.menus[(user_id, day)] = menu
        self.created.append(menu.id)
        return menu

    def create_menu_items(self, menu_id: UUID, items: list[MenuItemDraft]) -> None:
        if self.fail_items:
            raise RuntimeError("menu_items insert failed")
        key, menu = next(
            (key, menu) for key, menu in self.menus.items() if menu.id == menu_id
        )
        stored = tuple(
            StoredMenuItem(
                food=self.foods[item.food_id],
                grams=item.grams,
                meal_type=item.meal_type,
            )
            for item in items
        )
        self.menus[key] = StoredMenu(
            id=menu.id,
            user_id=menu.user_id,
            date=menu.date,
            totals=menu.totals,
            items=menu.items + stored,
        )

    def delete_menu(self, menu_id: UUID) -> None:
        self.deleted.append(menu_id)
        self.menus = {
            key: menu for key, menu in self.menus.items() if menu.id != menu_id
        }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_token="test-token",
    )


@pytest.fixture
def catalog() -> list[Food]:
    return build_catalog()


@pytest.fixture
def food_repository(catalog: list[Food]) -> InMemoryFoodRepository:
    return InMemoryFoodRepository(foods=catalog)


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def menu_repository(catalog: list[Food]) -> InMemoryMenuRepository:
    return InMemoryMenuRepository(foods={food.id: food for food in catalog})


@pytest.fixture
def menu_service(
    food_repository: InMemoryFoodRepository,
    profile_repository: InMemoryProfileRepository,
    menu_repository: InMemoryMenuRepository,
) -> MenuGeneratorService:
    return MenuGeneratorService(
        food_repository=food_repository,
        profile_repository=profile_repository,
        menu_repository=menu_repository,
    )


@pytest.fixture
def container(
    settings: Settings,
    food_repository: InMemoryFoodRepository,
    menu_service: MenuGeneratorService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        catalog_service=FoodCatalogService(food_repository),
        menu_service=menu_service,
    )
