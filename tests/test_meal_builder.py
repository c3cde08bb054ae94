"""Tests for meal construction and the portion fitting loop."""

import pytest

from daily_menu.domain.foods import Food
from daily_menu.domain.menus import MacroVector, MealType
from daily_menu.services.food_selector import FoodSelector
from daily_menu.services.macro_solver import item_for
from daily_menu.services.meal_builder import (
    SLOT_WEIGHTS,
    MealBuilder,
    fit_portions,
)
from tests.conftest import food_named

BREAKFAST_TARGETS = MacroVector(calories=500, protein=37.5, carbs=50, fat=17.5)
SNACK_TARGETS = MacroVector(calories=200, protein=15, carbs=20, fat=7)


def _builder(foods: list[Food]) -> MealBuilder:
    selector = FoodSelector.create([])
    return MealBuilder(selector, selector.categorize(foods))


def test_slot_weights_sum_to_one() -> None:
    assert sum(SLOT_WEIGHTS.values()) == pytest.approx(1.0)


def test_build_breakfast_fills_every_slot(catalog: list[Food]) -> None:
    result = _builder(catalog).build_meal(MealType.BREAKFAST, BREAKFAST_TARGETS)

    names_and_grams = [(item.food.name, item.grams) for item in result.meal.items]
    assert names_and_grams == [
        ("Chicken breast", 105),
        ("Oats", 50),
        ("Apple", 145),
        ("Olive oil", 10),
    ]
    assert result.converged
    assert result.iterations == 0


def test_build_snack_skips_fat_and_reports_non_convergence(
    catalog: list[Food],
) -> None:
    foods = [
        food_named(catalog, name)
        for name in ("Tofu", "Sweet potato", "Banana", "Olive oil")
    ]

    result = _builder(foods).build_meal(MealType.SNACK, SNACK_TARGETS)

    assert [item.food.name for item in result.meal.items] == [
        "Tofu",
        "Sweet potato",
        "Banana",
    ]
    assert [item.grams for item in result.meal.items] == [80, 85, 80]
    assert not result.converged
    assert result.iterations == 5


def test_lunch_prefers_vegetables_and_breakfast_prefers_fruit(
    catalog: list[Food],
) -> None:
    builder = _builder(catalog)

    breakfast = builder.build_meal(MealType.BREAKFAST, BREAKFAST_TARGETS)
    lunch = builder.build_meal(MealType.LUNCH, BREAKFAST_TARGETS)

    assert breakfast.meal.items[2].food.name == "Apple"
    assert lunch.meal.items[2].food.name == "Broccoli"


def test_build_meal_falls_back_to_other_produce(catalog: list[Food]) -> None:
    foods = [food for food in catalog if food.category != "vegetable"]

    lunch = _builder(foods).build_meal(MealType.LUNCH, BREAKFAST_TARGETS)

    assert lunch.meal.items[2].food.name == "Apple"


def test_build_meal_without_foods_is_empty() -> None:
    result = _builder([]).build_meal(MealType.DINNER, BREAKFAST_TARGETS)

    assert result.meal.items == ()
    assert not result.converged


def test_fit_portions_scales_toward_calorie_target(catalog: list[Food]) -> None:
    chicken = food_named(catalog, "Chicken breast")
    pasta = food_named(catalog, "Pasta")
    targets = MacroVector(calories=592, protein=72, carbs=50, fat=9.4)

    fit = fit_portions([item_for(chicken, 100), item_for(pasta, 100)], targets)

    assert [item.grams for item in fit.items] == [200, 200]
    assert fit.converged
    assert fit.iterations == 1
