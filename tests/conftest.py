"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from nutrient_swap.config import Settings
from nutrient_swap.containers import AppContainer, build_services
from nutrient_swap.domain.foods import FoodRecord
from nutrient_swap.domain.meals import LoggedIngredient, Meal, MealType
from nutrient_swap.domain.nutrients import Nutrient
from nutrient_swap.services.meals import MealLogRepository
from nutrient_swap.services.profiles import NutrientRepository


@dataclass
class InMemoryNutrientRepository(NutrientRepository):
    """In-memory nutrient catalog for tests."""

    foods: dict[int, FoodRecord] = field(default_factory=dict)
    amounts: dict[tuple[int, int], float] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    def add_food(
        self, food_id: int, group_id: int, name: str, **nutrients: float
    ) -> FoodRecord:
        food = FoodRecord(id=food_id, group_id=group_id, name=name)
        self.foods[food_id] = food
        for key, value in nutrients.items():
            self.amounts[(food_id, int(Nutrient[key.upper()]))] = value
        return food

    def get_nutrient_value(self, food_id: int, nutrient_id: int) -> float | None:
        self.calls.append("get_nutrient_value")
        return self.amounts.get((food_id, nutrient_id))

    def get_nutrient_values(
        self, nutrient_id: int, food_ids: list[int]
    ) -> dict[int, float]:
        self.calls.append("get_nutrient_values")
        return {
            food_id: self.amounts[(food_id, nutrient_id)]
            for food_id in food_ids
            if (food_id, nutrient_id) in self.amounts
        }

    def get_food_group(self, food_id: int) -> int | None:
        self.calls.append("get_food_group")
        food = self.foods.get(food_id)
        return food.group_id if food else None

    def list_foods_in_group(self, group_id: int) -> list[int]:
        self.calls.append("list_foods_in_group")
        return [food.id for food in self.foods.values() if food.group_id == group_id]

    def list_all_foods_with_nutrient(self, nutrient_id: int) -> list[tuple[int, float]]:
        self.calls.append("list_all_foods_with_nutrient")
        return [
            (food_id, value)
            for (food_id, key), value in self.amounts.items()
            if key == nutrient_id
        ]

    def get_food(self, food_id: int) -> FoodRecord | None:
        self.calls.append("get_food")
        return self.foods.get(food_id)

    def get_foods(self, food_ids: list[int]) -> list[FoodRecord]:
        self.calls.append("get_foods")
        return [self.foods[food_id] for food_id in food_ids if food_id in self.foods]

    def get_nutrient_vector(self, food_id: int) -> dict[int, float]:
        self.calls.append("get_nutrient_vector")
        return {
            nutrient_id: value
            for (key, nutrient_id), value in self.amounts.items()
            if key == food_id
        }


@dataclass
class InMemoryMealLogRepository(MealLogRepository):
    """In-memory meal log for tests."""

    meals: dict[int, Meal] = field(default_factory=dict)
    rows: dict[int, tuple[int, LoggedIngredient]] = field(default_factory=dict)

    def create_meal(self, meal: Meal) -> int:
        meal_id = len(self.meals) + 1
        self.meals[meal_id] = meal
        for ingredient in meal.ingredients:
            row_id = len(self.rows) + 1
            self.rows[row_id] = (
                meal_id,
                LoggedIngredient(
                    id=row_id,
                    day=meal.day,
                    food_id=ingredient.food_id,
                    quantity_grams=ingredient.quantity_grams,
                ),
            )
        return meal_id

    def find_meal_id(self, user_id: str, meal_type: MealType, day: date) -> int | None:
        for meal_id, meal in self.meals.items():
            if meal.user_id == user_id and meal.meal_type == meal_type and meal.day == day:
                return meal_id
        return None

    def list_meal_ingredients(self, meal_id: int) -> list[LoggedIngredient]:
        return [row for owner, row in self.rows.values() if owner == meal_id]

    def list_ingredients(
        self, user_id: str, start: date, end: date
    ) -> list[LoggedIngredient]:
        return [
            row
            for meal_id, row in self.rows.values()
            if self.meals[meal_id].user_id == user_id and start <= row.day <= end
        ]

    def replace_ingredient_food(self, ingredient_id: int, food_id: int) -> None:
        meal_id, row = self.rows[ingredient_id]
        self.rows[ingredient_id] = (
            meal_id,
            LoggedIngredient(
                id=row.id,
                day=row.day,
                food_id=food_id,
                quantity_grams=row.quantity_grams,
                was_swapped=True,
            ),
        )


@dataclass
class FailingNutrientRepository(InMemoryNutrientRepository):
    """Nutrient repository whose store is unreachable."""

    def get_nutrient_value(self, food_id: int, nutrient_id: int) -> float | None:
        raise ConnectionError("store unreachable")

    def list_all_foods_with_nutrient(self, nutrient_id: int) -> list[tuple[int, float]]:
        raise ConnectionError("store unreachable")


def build_catalog() -> InMemoryNutrientRepository:
    """Small catalog used across service and API tests."""
    repository = InMemoryNutrientRepository()
    repository.add_food(1, 5, "Food A", protein=10, sugar=2, energy=150)
    repository.add_food(2, 5, "Food B", protein=15, sugar=1, energy=180)
    repository.add_food(3, 5, "Food C", protein=9, sugar=12, energy=200)
    repository.add_food(10, 1, "Apple", protein=0.3, sugar=10.4, energy=52, fiber=2.4)
    repository.add_food(11, 1, "Carrot", protein=0.9, sugar=4.7, energy=41, fiber=2.8)
    repository.add_food(20, 4, "Oats", protein=13, sugar=1, energy=380, fiber=10)
    repository.add_food(30, 14, "Cola", sugar=10.6, energy=42)
    return repository


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def nutrient_repository() -> InMemoryNutrientRepository:
    return build_catalog()


@pytest.fixture
def meal_log_repository() -> InMemoryMealLogRepository:
    return InMemoryMealLogRepository()


@pytest.fixture
def container(
    settings: Settings,
    nutrient_repository: InMemoryNutrientRepository,
    meal_log_repository: InMemoryMealLogRepository,
) -> AppContainer:
    return build_services(settings, nutrient_repository, meal_log_repository)
