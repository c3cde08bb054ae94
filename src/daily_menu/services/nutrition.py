"""Daily energy and macro targets from body data."""

from daily_menu.domain.profiles import (
    ActivityLevel,
    Gender,
    Goal,
    NutritionMetrics,
    NutritionProfileInput,
)
from daily_menu.domain.menus import round_half_up

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

GOAL_ADJUSTMENTS: dict[Goal, int] = {
    "cut": -400,
    "maintain": 0,
    "bulk": 400,
}

PROTEIN_CALORIE_SHARE = 0.25
FAT_CALORIE_SHARE = 0.25
CARBS_CALORIE_SHARE = 0.5
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


def calculate_bmr(gender: Gender | None, age: int, weight: float, height: float) -> int:
    """Basal metabolic rate (Mifflin-St Jeor); unset gender uses the female term."""
    base = 10 * weight + 6.25 * height - 5 * age
    adjustment = 5 if gender == "male" else -161
    return int(round_half_up(base + adjustment))


def calculate_tdee(bmr: int, activity_level: ActivityLevel) -> int:
    """Total daily energy expenditure, rounded to the nearest 100 kcal."""
    return int(round_half_up(bmr * ACTIVITY_MULTIPLIERS[activity_level] / 100) * 100)


def calculate_daily_calories(tdee: int, goal: Goal) -> int:
    return int(round_half_up(tdee + GOAL_ADJUSTMENTS[goal]))


def calculate_macros(daily_calories: int) -> tuple[int, int, int]:
    """Return (protein, carbs, fat) grams for a daily calorie target."""
    protein = round_half_up(
        daily_calories * PROTEIN_CALORIE_SHARE / KCAL_PER_GRAM_PROTEIN
    )
    carbs = round_half_up(daily_calories * CARBS_CALORIE_SHARE / KCAL_PER_GRAM_CARBS)
    fat = round_half_up(daily_calories * FAT_CALORIE_SHARE / KCAL_PER_GRAM_FAT)
    return int(protein), int(carbs), int(fat)


def calculate_all(profile: NutritionProfileInput) -> NutritionMetrics:
    """Compute BMR, TDEE and the four daily targets."""
    bmr = calculate_bmr(profile.gender, profile.age, profile.weight, profile.height)
    tdee = calculate_tdee(bmr, profile.activity_level)
    daily_calories = calculate_daily_calories(tdee, profile.goal)
    protein, carbs, fat = calculate_macros(daily_calories)
    return NutritionMetrics(
        bmr=bmr,
        tdee=tdee,
        daily_calories=daily_calories,
        protein_intake=protein,
        carbs_intake=carbs,
        fat_intake=fat,
    )
