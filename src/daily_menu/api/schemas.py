"""Pydantic models for API request payloads."""

from typing import Literal

from pydantic import BaseModel, Field

from daily_menu.domain.profiles import NutritionProfileInput


class GenerateMenuRequest(BaseModel):
    """Menu generation request; the date defaults to today."""

    date: str | None = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$")


class NutritionMetricsRequest(BaseModel):
    """Body data used to compute daily targets."""

    gender: Literal["male", "female"] | None = None
    age: int = Field(ge=10, le=120)
    weight: float = Field(gt=0, le=500)
    height: float = Field(gt=0, le=300)
    activity_level: Literal["sedentary", "light", "moderate", "active", "very_active"]
    goal: Literal["cut", "maintain", "bulk"]

    def to_domain(self) -> NutritionProfileInput:
        return NutritionProfileInput(
            gender=self.gender,
            age=self.age,
            weight=self.weight,
            height=self.height,
            activity_level=self.activity_level,
            goal=self.goal,
        )
