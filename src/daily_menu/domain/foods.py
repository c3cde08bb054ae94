"""Domain models for the food catalog."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class FoodCategory(StrEnum):
    """Catalog category of a food."""

    PROTEIN = "protein"
    CARB = "carb"
    FAT = "fat"
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    MIXED = "mixed"


class Bucket(StrEnum):
    """Selection bucket a food is routed into during a generation run."""

    PROTEINS = "proteins"
    CARBS = "carbs"
    FATS = "fats"
    VEGETABLES = "vegetables"
    FRUITS = "fruits"


@dataclass(frozen=True)
class Food:
    """Catalog entry with macros per 100 g."""

    id: UUID
    name: str
    category: FoodCategory
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    tags: tuple[str, ...] = ()
    default_serving_grams: int = 100
    density_factor: float | None = None


@dataclass(frozen=True)
class FoodPreference:
    """A user's like or dislike for a food, by name."""

    food_name: str
    liked: bool
