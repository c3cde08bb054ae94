"""Meal construction from selected foods and calorie-split portions."""

import logging
from dataclasses import dataclass

from daily_menu.domain.foods import Bucket, Food
from daily_menu.domain.menus import (
    MacroVector,
    Meal,
    MealItem,
    MealType,
    sum_macros,
)
from daily_menu.services import portions
from daily_menu.services.food_selector import CategorizedFoods, FoodSelector
from daily_menu.services.macro_solver import (
    grams_for_target,
    item_for,
    within_tolerance,
)

SLOT_WEIGHTS = {
    "protein": 0.35,
    "carb": 0.40,
    "produce": 0.15,
    "fat": 0.10,
}
MEAL_TOLERANCE = 0.15
MAX_FIT_ITERATIONS = 5

_PRODUCE_ORDER = {
    MealType.BREAKFAST: (Bucket.FRUITS, Bucket.VEGETABLES),
    MealType.SNACK: (Bucket.FRUITS, Bucket.VEGETABLES),
    MealType.LUNCH: (Bucket.VEGETABLES, Bucket.FRUITS),
    MealType.DINNER: (Bucket.VEGETABLES, Bucket.FRUITS),
}

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortionFit:
    """Outcome of the proportional scaling loop."""

    items: list[MealItem]
    converged: bool
    iterations: int


@dataclass(frozen=True)
class MealBuildResult:
    """A built meal and whether its portions reached tolerance."""

    meal: Meal
    converged: bool
    iterations: int


def fit_portions(
    items: list[MealItem],
    targets: MacroVector,
    tolerance: float = MEAL_TOLERANCE,
    max_iterations: int = MAX_FIT_ITERATIONS,
) -> PortionFit:
    """Scale all portions by the calorie ratio until within tolerance.

    Runs at most ``max_iterations`` passes and accepts the result either way.
    """
    if not items:
        return PortionFit(items=items, converged=False, iterations=0)

    current = sum_macros(items)
    iterations = 0
    for _ in range(max_iterations):
        if within_tolerance(current, targets, tolerance):
            break
        if current.calories <= 0:
            break
        ratio = targets.calories / current.calories
        items = [
            item_for(item.food, portions.clamp(item.food, item.grams * ratio))
            for item in items
        ]
        current = sum_macros(items)
        iterations += 1

    return PortionFit(
        items=items,
        converged=within_tolerance(current, targets, tolerance),
        iterations=iterations,
    )


@dataclass
class MealBuilder:
    """Builds the meals of one generation run."""

    selector: FoodSelector
    foods: CategorizedFoods

    def build_meal(self, meal_type: MealType, targets: MacroVector) -> MealBuildResult:
        """Build a meal of protein, carb, produce and optional fat slots."""
        protein = self.selector.select_food(self.foods[Bucket.PROTEINS])
        carb = self.selector.select_food(self.foods[Bucket.CARBS])
        produce = self._select_produce(meal_type)
        fat = (
            self.selector.select_food(self.foods[Bucket.FATS])
            if meal_type != MealType.SNACK
            else None
        )

        # Weights are not renormalised when a slot stays empty.
        slots = [
            (protein, SLOT_WEIGHTS["protein"]),
            (carb, SLOT_WEIGHTS["carb"]),
            (produce, SLOT_WEIGHTS["produce"]),
            (fat, SLOT_WEIGHTS["fat"]),
        ]
        items = [
            self._initial_item(food, targets.calories * weight)
            for food, weight in slots
            if food is not None
        ]

        fit = fit_portions(items, targets)
        if items and not fit.converged:
            _logger.debug(
                "Meal %s outside tolerance after %s iterations",
                meal_type,
                fit.iterations,
            )
        return MealBuildResult(
            meal=Meal(type=meal_type, items=tuple(fit.items)),
            converged=fit.converged,
            iterations=fit.iterations,
        )

    def _select_produce(self, meal_type: MealType) -> Food | None:
        for bucket in _PRODUCE_ORDER[meal_type]:
            food = self.selector.select_food(self.foods[bucket])
            if food is not None:
                return food
        return None

    @staticmethod
    def _initial_item(food: Food, calories: float) -> MealItem:
        grams = grams_for_target(food, calories)
        return item_for(food, portions.clamp(food, grams))
