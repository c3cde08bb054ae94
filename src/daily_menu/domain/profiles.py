"""Domain models for nutrition profiles."""

from dataclasses import dataclass
from typing import Literal
from uuid import UUID

from daily_menu.domain.menus import MacroVector

Gender = Literal["male", "female"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
Goal = Literal["cut", "maintain", "bulk"]


@dataclass(frozen=True)
class NutritionProfile:
    """Daily targets and restrictions stored for a user."""

    user_id: UUID
    daily_calories: float | None
    protein_intake: float | None
    carbs_intake: float | None
    fat_intake: float | None
    dietary_restrictions: tuple[str, ...] = ()

    def daily_targets(self) -> MacroVector | None:
        """Return the daily target vector, or None if any target is unset."""
        values = (
            self.daily_calories,
            self.protein_intake,
            self.carbs_intake,
            self.fat_intake,
        )
        if any(value is None or value <= 0 for value in values):
            return None
        return MacroVector(
            calories=float(self.daily_calories),
            protein=float(self.protein_intake),
            carbs=float(self.carbs_intake),
            fat=float(self.fat_intake),
        )


@dataclass(frozen=True)
class NutritionProfileInput:
    """Body data used to derive daily targets."""

    gender: Gender | None
    age: int
    weight: float
    height: float
    activity_level: ActivityLevel
    goal: Goal


@dataclass(frozen=True)
class NutritionMetrics:
    """Derived energy expenditure and daily targets."""

    bmr: int
    tdee: int
    daily_calories: int
    protein_intake: int
    carbs_intake: int
    fat_intake: int
