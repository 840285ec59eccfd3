"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class MealType(StrEnum):
    """Kinds of meals a user can log."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


@dataclass(frozen=True)
class Ingredient:
    """A food and the grams eaten of it."""

    food_id: int
    quantity_grams: float


@dataclass(frozen=True)
class Meal:
    """A meal eaten by a user on a given day."""

    user_id: str
    meal_type: MealType
    day: date
    ingredients: tuple[Ingredient, ...]


@dataclass(frozen=True)
class LoggedIngredient:
    """Ingredient row read back from the meal log."""

    id: int
    day: date
    food_id: int
    quantity_grams: float
    was_swapped: bool = False

    def as_ingredient(self) -> Ingredient:
        """Return the plain ingredient for nutrient aggregation."""
        return Ingredient(food_id=self.food_id, quantity_grams=self.quantity_grams)
