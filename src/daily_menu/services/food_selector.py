"""Preference-aware food filtering and selection for one generation run."""

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass, field
from uuid import UUID

from daily_menu.domain.foods import Bucket, Food, FoodCategory, FoodPreference

MIXED_PROTEIN_THRESHOLD = 10

RESTRICTION_TAGS = {
    "vegan": "vegan",
    "plant-based": "vegan",
    "plant based": "vegan",
    "vegetarian": "vegetarian",
    "veggie": "vegetarian",
    "gluten-free": "gluten-free",
    "gluten free": "gluten-free",
    "gluten_free": "gluten-free",
    "dairy-free": "dairy-free",
    "dairy free": "dairy-free",
    "dairy_free": "dairy-free",
    "halal": "halal",
    "kosher": "kosher",
    "nut-free": "nut-free",
    "nut free": "nut-free",
    "nut_free": "nut-free",
}

_CATEGORY_BUCKETS = {
    FoodCategory.PROTEIN: Bucket.PROTEINS,
    FoodCategory.CARB: Bucket.CARBS,
    FoodCategory.FAT: Bucket.FATS,
    FoodCategory.VEGETABLE: Bucket.VEGETABLES,
    FoodCategory.FRUIT: Bucket.FRUITS,
}


def bucket_for(food: Food) -> Bucket:
    """Route a food to its selection bucket.

    Mixed foods count as proteins when they carry at least 10 g of protein
    per 100 g, otherwise as carbs.
    """
    if food.category == FoodCategory.MIXED:
        if food.protein >= MIXED_PROTEIN_THRESHOLD:
            return Bucket.PROTEINS
        return Bucket.CARBS
    return _CATEGORY_BUCKETS[food.category]


def name_sort_key(name: str) -> tuple[str, str, str]:
    """Order names ignoring accents and case; the raw name breaks ties."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), name.casefold(), name


def restriction_tag(restriction: str) -> str:
    """Map a restriction name to the tag a food must carry."""
    normalized = restriction.strip().lower()
    return RESTRICTION_TAGS.get(normalized, normalized)


@dataclass(frozen=True)
class CategorizedFoods:
    """Filtered catalog split into ordered selection buckets."""

    proteins: list[Food]
    carbs: list[Food]
    fats: list[Food]
    vegetables: list[Food]
    fruits: list[Food]

    def __getitem__(self, bucket: Bucket) -> list[Food]:
        return getattr(self, bucket.value)


@dataclass
class FoodSelector:
    """Filters the catalog and hands out foods without repeats when possible.

    An instance belongs to a single generation run; the used-food set is
    never shared between runs or users.
    """

    liked_foods: set[str]
    disliked_foods: set[str]
    required_tags: list[str]
    used_food_ids: set[UUID] = field(default_factory=set)

    @classmethod
    def create(
        cls,
        preferences: Iterable[FoodPreference],
        dietary_restrictions: Iterable[str] = (),
    ) -> "FoodSelector":
        """Build a selector from stored preferences and restrictions."""
        preferences = list(preferences)
        return cls(
            liked_foods={p.food_name.lower() for p in preferences if p.liked},
            disliked_foods={p.food_name.lower() for p in preferences if not p.liked},
            required_tags=[restriction_tag(r) for r in dietary_restrictions],
        )

    def is_liked(self, food: Food) -> bool:
        return food.name.lower() in self.liked_foods

    def meets_restrictions(self, food: Food) -> bool:
        """Return True when the food carries every required tag."""
        tags = {tag.lower() for tag in food.tags}
        return all(tag in tags for tag in self.required_tags)

    def filter_foods(self, foods: Iterable[Food]) -> list[Food]:
        """Drop disliked foods and foods failing any restriction."""
        return [
            food
            for food in foods
            if food.name.lower() not in self.disliked_foods
            and self.meets_restrictions(food)
        ]

    def categorize(self, foods: Iterable[Food]) -> CategorizedFoods:
        """Filter, bucket and order the catalog."""
        buckets: dict[Bucket, list[Food]] = {bucket: [] for bucket in Bucket}
        for food in self.filter_foods(foods):
            buckets[bucket_for(food)].append(food)
        return CategorizedFoods(
            **{
                bucket.value: self._sort_by_preference(items)
                for bucket, items in buckets.items()
            }
        )

    def select_food(self, foods: list[Food]) -> Food | None:
        """Return the next food to use from an ordered bucket.

        Unused foods come first. Once all are used, a liked food is repeated,
        and failing that the first food in the bucket.
        """
        for food in foods:
            if food.id not in self.used_food_ids:
                self.used_food_ids.add(food.id)
                return food
        for food in foods:
            if self.is_liked(food):
                return food
        return foods[0] if foods else None

    def reset(self) -> None:
        """Forget used foods before a new run."""
        self.used_food_ids.clear()

    def _sort_by_preference(self, foods: list[Food]) -> list[Food]:
        return sorted(
            foods,
            key=lambda food: (not self.is_liked(food), name_sort_key(food.name)),
        )
