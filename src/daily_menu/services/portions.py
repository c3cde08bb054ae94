"""Realistic portion bounds and calorie-driven rescaling."""

from dataclasses import dataclass

from daily_menu.domain.foods import Food, FoodCategory
from daily_menu.domain.menus import round_half_up

PORTION_STEP_GRAMS = 5


@dataclass(frozen=True)
class PortionBounds:
    """Inclusive gram range for one serving."""

    min_grams: float
    max_grams: float


PORTION_BOUNDS: dict[FoodCategory, PortionBounds] = {
    FoodCategory.PROTEIN: PortionBounds(80, 300),
    FoodCategory.CARB: PortionBounds(50, 250),
    FoodCategory.FAT: PortionBounds(10, 50),
    FoodCategory.VEGETABLE: PortionBounds(80, 300),
    FoodCategory.FRUIT: PortionBounds(80, 200),
    FoodCategory.MIXED: PortionBounds(100, 400),
}
DEFAULT_PORTION_BOUNDS = PortionBounds(50, 400)


def portion_bounds(food: Food) -> PortionBounds:
    """Return the portion bounds for the food's category."""
    return PORTION_BOUNDS.get(food.category, DEFAULT_PORTION_BOUNDS)


def clamp(food: Food, grams: float) -> float:
    """Clamp grams into the category range and round to a 5 g step."""
    bounds = portion_bounds(food)
    clamped = max(bounds.min_grams, min(bounds.max_grams, grams))
    return round_half_up(clamped / PORTION_STEP_GRAMS) * PORTION_STEP_GRAMS


def is_realistic_portion(food: Food, grams: float) -> bool:
    """Return True when grams fall inside the category range."""
    bounds = portion_bounds(food)
    return bounds.min_grams <= grams <= bounds.max_grams


def rescale_for_calorie_target(
    portions: list[tuple[Food, float]], target_calories: float
) -> list[tuple[Food, float]]:
    """Scale all portions by one factor toward a calorie target, then clamp.

    This is a single linear correction, not a converging solve.
    """
    if not portions:
        return []

    current = sum(food.calories * grams / 100 for food, grams in portions)
    if current == 0:
        return [(food, 100) for food, _ in portions]

    factor = target_calories / current
    return [(food, clamp(food, grams * factor)) for food, grams in portions]


def distribute_remaining_calories(
    portions: list[tuple[Food, float]], remaining_calories: float
) -> list[tuple[Food, float]]:
    """Spread leftover calories evenly over portions, clamping each."""
    if not portions or remaining_calories <= 0:
        return portions

    calories_per_food = remaining_calories / len(portions)
    adjusted: list[tuple[Food, float]] = []
    for food, grams in portions:
        if food.calories <= 0:
            adjusted.append((food, grams))
            continue
        extra_grams = calories_per_food / food.calories * 100
        adjusted.append((food, clamp(food, grams + extra_grams)))
    return adjusted
