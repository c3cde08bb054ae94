"""Supabase repository for nutrition profiles and food preferences."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from daily_menu.domain.foods import FoodPreference
from daily_menu.domain.profiles import NutritionProfile
from daily_menu.services.menus import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user nutrition data."""

    client: Client

    def get_nutrition_profile(self, user_id: UUID) -> NutritionProfile | None:
        """Return the user's nutrition profile, if present."""
        response = (
            self.client.table("user_nutrition_profiles")
            .select(
                "user_id, daily_calories_consumption, protein_intake, "
                "carbs_intake, fat_intake, dietary_restrictions"
            )
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return NutritionProfile(
            user_id=UUID(str(row["user_id"])),
            daily_calories=_optional_float(row.get("daily_calories_consumption")),
            protein_intake=_optional_float(row.get("protein_intake")),
            carbs_intake=_optional_float(row.get("carbs_intake")),
            fat_intake=_optional_float(row.get("fat_intake")),
            dietary_restrictions=tuple(row.get("dietary_restrictions") or []),
        )

    def list_food_preferences(self, user_id: UUID) -> list[FoodPreference]:
        """Return the user's liked and disliked foods."""
        response = (
            self.client.table("user_food_preferences")
            .select("food_name, liked")
            .eq("user_id", str(user_id))
            .execute()
        )
        return [
            FoodPreference(
                food_name=str(row.get("food_name", "")),
                liked=bool(row.get("liked", True)),
            )
            for row in response.data or []
        ]


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
