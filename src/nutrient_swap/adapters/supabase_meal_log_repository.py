"""Supabase repository for logged meals."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from nutrient_swap.adapters.supabase_paging import DEFAULT_PAGE_SIZE, select_all
from nutrient_swap.domain.meals import LoggedIngredient, Meal, MealType
from nutrient_swap.services.meals import MealLogRepository


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation over logged_meal and meal_ingredient."""

    client: Client
    page_size: int = DEFAULT_PAGE_SIZE

    def create_meal(self, meal: Meal) -> int:
        """Create a meal row and its ingredient rows."""
        response = (
            self.client.table("logged_meal")
            .insert(
                {
                    "user_id": meal.user_id,
                    "meal_type": str(meal.meal_type),
                    "meal_date": meal.day.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal log")
        meal_id = int(response.data[0]["id"])
        payload = [
            {
                "meal_id": meal_id,
                "food_id": ingredient.food_id,
                "quantity_grams": ingredient.quantity_grams,
                "was_swapped": False,
            }
            for ingredient in meal.ingredients
        ]
        if payload:
            self.client.table("meal_ingredient").insert(payload).execute()
        return meal_id

    def find_meal_id(self, user_id: str, meal_type: MealType, day: date) -> int | None:
        """Return the id of a meal by user, type and date."""
        response = (
            self.client.table("logged_meal")
            .select("id")
            .eq("user_id", user_id)
            .eq("meal_type", str(meal_type))
            .eq("meal_date", day.isoformat())
            .order("id", desc=False)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return int(response.data[0]["id"])

    def list_meal_ingredients(self, meal_id: int) -> list[LoggedIngredient]:
        """Return ingredients of one meal."""
        meal_response = (
            self.client.table("logged_meal")
            .select("id, meal_date")
            .eq("id", meal_id)
            .limit(1)
            .execute()
        )
        if not meal_response.data:
            return []
        days = {meal_id: _parse_date(meal_response.data[0]["meal_date"])}
        response = (
            self.client.table("meal_ingredient")
            .select("id, meal_id, food_id, quantity_grams, was_swapped")
            .eq("meal_id", meal_id)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_ingredient(row, days) for row in response.data or []]

    def list_ingredients(
        self, user_id: str, start: date, end: date
    ) -> list[LoggedIngredient]:
        """Return ingredients logged by a user between two dates inclusive."""
        meal_rows = select_all(
            lambda: (
                self.client.table("logged_meal")
                .select("id, meal_date")
                .eq("user_id", user_id)
                .gte("meal_date", start.isoformat())
                .lte("meal_date", end.isoformat())
                .order("id", desc=False)
            ),
            self.page_size,
        )
        days = {int(row["id"]): _parse_date(row["meal_date"]) for row in meal_rows}
        if not days:
            return []
        rows = select_all(
            lambda: (
                self.client.table("meal_ingredient")
                .select("id, meal_id, food_id, quantity_grams, was_swapped")
                .in_("meal_id", list(days))
                .order("id", desc=False)
            ),
            self.page_size,
        )
        return [_parse_ingredient(row, days) for row in rows]

    def replace_ingredient_food(self, ingredient_id: int, food_id: int) -> None:
        """Point an ingredient at another food and flag it as swapped."""
        self.client.table("meal_ingredient").update(
            {"food_id": food_id, "was_swapped": True}
        ).eq("id", ingredient_id).execute()


def _parse_date(value: object) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _parse_ingredient(
    row: dict[str, object], days: dict[int, date]
) -> LoggedIngredient:
    return LoggedIngredient(
        id=int(row["id"]),
        day=days[int(row["meal_id"])],
        food_id=int(row["food_id"]),
        quantity_grams=float(row.get("quantity_grams", 0.0)),
        was_swapped=bool(row.get("was_swapped", False)),
    )
