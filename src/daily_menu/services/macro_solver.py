"""Macro arithmetic for food portions."""

from enum import StrEnum

from daily_menu.domain.foods import Food
from daily_menu.domain.menus import MacroVector, MealItem, round_half_up

DEVIATION_WEIGHTS = {
    "calories": 0.4,
    "protein": 0.3,
    "carbs": 0.15,
    "fat": 0.15,
}


class MacroField(StrEnum):
    """Per-100 g field of a food."""

    CALORIES = "calories"
    PROTEIN = "protein"
    CARBS = "carbs"
    FAT = "fat"


def macros_for(food: Food, grams: float) -> MacroVector:
    """Return the macros of a portion, each rounded to one decimal."""
    multiplier = grams / 100
    return MacroVector(
        calories=round_half_up(food.calories * multiplier, 1),
        protein=round_half_up(food.protein * multiplier, 1),
        carbs=round_half_up(food.carbs * multiplier, 1),
        fat=round_half_up(food.fat * multiplier, 1),
    )


def item_for(food: Food, grams: float) -> MealItem:
    """Build a meal item for a food portion."""
    return MealItem(food=food, grams=grams, macros=macros_for(food, grams))


def grams_for_target(
    food: Food, target: float, field: MacroField = MacroField.CALORIES
) -> float:
    """Return the grams of a food that provide a target amount of one field."""
    per_100g = getattr(food, field.value)
    if per_100g <= 0:
        return 0
    return (target / per_100g) * 100


def deviation(actual: MacroVector, target: MacroVector) -> float:
    """Weighted relative error of actual against target.

    Calories and protein weigh most. Every target field must be non-zero.
    """
    return (
        abs(actual.calories - target.calories) / target.calories
        * DEVIATION_WEIGHTS["calories"]
        + abs(actual.protein - target.protein) / target.protein
        * DEVIATION_WEIGHTS["protein"]
        + abs(actual.carbs - target.carbs) / target.carbs * DEVIATION_WEIGHTS["carbs"]
        + abs(actual.fat - target.fat) / target.fat * DEVIATION_WEIGHTS["fat"]
    )


def within_tolerance(
    actual: MacroVector, target: MacroVector, tolerance: float = 0.10
) -> bool:
    """Return True when the weighted deviation is at most the tolerance."""
    return deviation(actual, target) <= tolerance
