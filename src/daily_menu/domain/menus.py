"""Domain models for generated menus."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID

from daily_menu.domain.foods import Food


class MealType(StrEnum):
    """Meals of a day, in serving order."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class MacroVector:
    """Calories and macronutrients, used for targets and measured totals."""

    calories: float
    protein: float
    carbs: float
    fat: float

    def scale(self, factor: float) -> "MacroVector":
        """Return the vector multiplied by a factor on every field."""
        return MacroVector(
            calories=self.calories * factor,
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fat=self.fat * factor,
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


ZERO_MACROS = MacroVector(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class MealItem:
    """A food portion with the macros derived from it."""

    food: Food
    grams: float
    macros: MacroVector


@dataclass(frozen=True)
class Meal:
    """A meal of a given type; totals always derive from its items."""

    type: MealType
    items: tuple[MealItem, ...]

    @property
    def totals(self) -> MacroVector:
        return sum_macros(self.items)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves going up (0.05 -> 0.1), unlike built-in round()."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def sum_macros(values: Iterable[MacroVector | MealItem]) -> MacroVector:
    """Sum macros, rounding every running total to one decimal."""
    total = ZERO_MACROS
    for value in values:
        macros = value.macros if isinstance(value, MealItem) else value
        total = MacroVector(
            calories=round_half_up(total.calories + macros.calories, 1),
            protein=round_half_up(total.protein + macros.protein, 1),
            carbs=round_half_up(total.carbs + macros.carbs, 1),
            fat=round_half_up(total.fat + macros.fat, 1),
        )
    return total


@dataclass(frozen=True)
class GeneratedMenu:
    """A full day menu as returned to callers."""

    id: UUID
    date: date
    meals: tuple[Meal, ...]
    totals: MacroVector


@dataclass(frozen=True)
class StoredMenuItem:
    """Persisted menu item with its food loaded."""

    food: Food
    grams: float
    meal_type: MealType


@dataclass(frozen=True)
class StoredMenu:
    """Persisted menu row with its items."""

    id: UUID
    user_id: UUID
    date: date
    totals: MacroVector
    items: tuple[StoredMenuItem, ...] = ()


@dataclass(frozen=True)
class MenuItemDraft:
    """Menu item payload written after its parent menu exists."""

    food_id: UUID
    grams: float
    meal_type: MealType
