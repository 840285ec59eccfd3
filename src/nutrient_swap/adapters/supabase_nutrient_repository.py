"""Supabase repository for the nutrient reference tables."""

from dataclasses import dataclass

from supabase import Client

from nutrient_swap.adapters.supabase_paging import DEFAULT_PAGE_SIZE, select_all
from nutrient_swap.domain.foods import FoodRecord
from nutrient_swap.services.profiles import NutrientRepository


@dataclass
class SupabaseNutrientRepository(NutrientRepository):
    """Supabase implementation over food_name and nutrient_amount."""

    client: Client
    page_size: int = DEFAULT_PAGE_SIZE

    def get_nutrient_value(self, food_id: int, nutrient_id: int) -> float | None:
        """Return a food's amount of a nutrient."""
        response = (
            self.client.table("nutrient_amount")
            .select("value")
            .eq("food_id", food_id)
            .eq("nutrient_id", nutrient_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return float(response.data[0]["value"])

    def get_nutrient_values(
        self, nutrient_id: int, food_ids: list[int]
    ) -> dict[int, float]:
        """Return amounts of a nutrient for a set of foods."""
        if not food_ids:
            return {}
        rows = select_all(
            lambda: (
                self.client.table("nutrient_amount")
                .select("food_id, value")
                .eq("nutrient_id", nutrient_id)
                .in_("food_id", food_ids)
                .order("food_id", desc=False)
            ),
            self.page_size,
        )
        return {int(row["food_id"]): float(row["value"]) for row in rows}

    def get_food_group(self, food_id: int) -> int | None:
        """Return the group id of a food."""
        response = (
            self.client.table("food_name")
            .select("food_group_id")
            .eq("id", food_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return int(response.data[0]["food_group_id"])

    def list_foods_in_group(self, group_id: int) -> list[int]:
        """Return ids of foods in a group."""
        rows = select_all(
            lambda: (
                self.client.table("food_name")
                .select("id")
                .eq("food_group_id", group_id)
                .order("id", desc=False)
            ),
            self.page_size,
        )
        return [int(row["id"]) for row in rows]

    def list_all_foods_with_nutrient(self, nutrient_id: int) -> list[tuple[int, float]]:
        """Return (food id, amount) pairs for a nutrient across the catalog."""
        rows = select_all(
            lambda: (
                self.client.table("nutrient_amount")
                .select("food_id, value")
                .eq("nutrient_id", nutrient_id)
                .order("food_id", desc=False)
            ),
            self.page_size,
        )
        return [(int(row["food_id"]), float(row["value"])) for row in rows]

    def get_food(self, food_id: int) -> FoodRecord | None:
        """Return a food record by id."""
        response = (
            self.client.table("food_name")
            .select("id, food_group_id, description")
            .eq("id", food_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_foods(self, food_ids: list[int]) -> list[FoodRecord]:
        """Return food records for a set of ids."""
        if not food_ids:
            return []
        rows = select_all(
            lambda: (
                self.client.table("food_name")
                .select("id, food_group_id, description")
                .in_("id", food_ids)
                .order("id", desc=False)
            ),
            self.page_size,
        )
        return [_parse_food(row) for row in rows]

    def get_nutrient_vector(self, food_id: int) -> dict[int, float]:
        """Return every nutrient amount recorded for a food."""
        response = (
            self.client.table("nutrient_amount")
            .select("nutrient_id, value")
            .eq("food_id", food_id)
            .execute()
        )
        return {
            int(row["nutrient_id"]): float(row["value"])
            for row in response.data or []
        }


def _parse_food(row: dict[str, object]) -> FoodRecord:
    return FoodRecord(
        id=int(row["id"]),
        group_id=int(row["food_group_id"]),
        name=str(row.get("description") or ""),
    )
