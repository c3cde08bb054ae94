"""Supabase repository for generated menus."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from daily_menu.adapters.supabase_food_repository import parse_food
from daily_menu.domain.errors import MenuAlreadyExistsError
from daily_menu.domain.menus import (
    MacroVector,
    MealType,
    MenuItemDraft,
    StoredMenu,
    StoredMenuItem,
)
from daily_menu.services.menus import MenuRepository

UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseMenuRepository(MenuRepository):
    """Supabase implementation for menus and menu items."""

    client: Client

    def find_menu(self, user_id: UUID, day: date) -> StoredMenu | None:
        """Return the user's menu for a calendar day, with items."""
        response = (
            self.client.table("menus")
            .select(
                "id, user_id, date, total_calories, protein_total, carbs_total, "
                "fat_total"
            )
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        menu = _parse_menu(response.data[0])
        items_response = (
            self.client.table("menu_items")
            .select("grams, meal_type, food:foods(*)")
            .eq("menu_id", str(menu.id))
            .order("id", desc=False)
            .execute()
        )
        items = tuple(
            StoredMenuItem(
                food=parse_food(row["food"]),
                grams=float(row.get("grams", 0.0)),
                meal_type=MealType(str(row["meal_type"])),
            )
            for row in items_response.data or []
        )
        return StoredMenu(
            id=menu.id,
            user_id=menu.user_id,
            date=menu.date,
            totals=menu.totals,
            items=items,
        )

    def create_menu(self, user_id: UUID, day: date, totals: MacroVector) -> StoredMenu:
        """Create a menu row; a duplicate (user, date) raises."""
        try:
            response = (
                self.client.table("menus")
                .insert(
                    {
                        "user_id": str(user_id),
                        "date": day.isoformat(),
                        "total_calories": totals.calories,
                        "protein_total": totals.protein,
                        "carbs_total": totals.carbs,
                        "fat_total": totals.fat,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise MenuAlreadyExistsError(
                    f"Menu already exists for {user_id} on {day.isoformat()}"
                ) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create menu")
        return _parse_menu(response.data[0])

    def create_menu_items(self, menu_id: UUID, items: list[MenuItemDraft]) -> None:
        """Create menu item rows."""
        payload = [
            {
                "menu_id": str(menu_id),
                "food_id": str(item.food_id),
                "grams": item.grams,
                "meal_type": item.meal_type.value,
            }
            for item in items
        ]
        if payload:
            self.client.table("menu_items").insert(payload).execute()

    def delete_menu(self, menu_id: UUID) -> None:
        """Delete a menu row; items cascade."""
        self.client.table("menus").delete().eq("id", str(menu_id)).execute()


def _parse_menu(row: dict[str, object]) -> StoredMenu:
    return StoredMenu(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=date.fromisoformat(str(row["date"])[:10]),
        totals=MacroVector(
            calories=float(row.get("total_calories", 0.0)),
            protein=float(row.get("protein_total", 0.0)),
            carbs=float(row.get("carbs_total", 0.0)),
            fat=float(row.get("fat_total", 0.0)),
        ),
    )
