"""Meal logging service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from nutrient_swap.domain.errors import FoodNotFoundError, InvalidMealError
from nutrient_swap.domain.meals import Ingredient, LoggedIngredient, Meal, MealType
from nutrient_swap.services.aggregation import MealLogReader
from nutrient_swap.services.profiles import NutrientProfileService
from nutrient_swap.services.store import call_store

_logger = logging.getLogger(__name__)


class MealLogRepository(MealLogReader, Protocol):
    """Persistence interface for logged meals."""

    def create_meal(self, meal: Meal) -> int:
        """Create a meal with its ingredients and return the meal id."""

    def find_meal_id(self, user_id: str, meal_type: MealType, day: date) -> int | None:
        """Return the id of the first matching meal, if any."""

    def list_meal_ingredients(self, meal_id: int) -> list[LoggedIngredient]:
        """Return ingredients of a meal."""

    def replace_ingredient_food(self, ingredient_id: int, food_id: int) -> None:
        """Point an ingredient at another food and mark it swapped."""


@dataclass
class MealLogService:
    """Service that validates and persists meals."""

    profiles: NutrientProfileService
    repository: MealLogRepository

    def log_meal(self, meal: Meal) -> int:
        """Validate a meal and persist it, returning its id."""
        if not meal.ingredients:
            raise InvalidMealError("A meal needs at least one ingredient")
        for ingredient in meal.ingredients:
            if ingredient.quantity_grams <= 0:
                raise InvalidMealError(
                    f"Quantity must be positive for food {ingredient.food_id}"
                )
            if self.profiles.get_food(ingredient.food_id) is None:
                raise FoodNotFoundError(ingredient.food_id)
        if meal.meal_type is not MealType.SNACK:
            existing = self._call(
                lambda: self.repository.find_meal_id(
                    meal.user_id, meal.meal_type, meal.day
                ),
                action="find_meal_id",
            )
            if existing is not None:
                raise InvalidMealError(
                    f"{meal.meal_type} already logged for {meal.day.isoformat()}"
                )
        meal_id = self._call(
            lambda: self.repository.create_meal(meal), action="create_meal"
        )
        _logger.info(
            "Logged %s for user=%s day=%s items=%s",
            meal.meal_type,
            meal.user_id,
            meal.day.isoformat(),
            len(meal.ingredients),
        )
        return meal_id

    def get_meal(self, user_id: str, meal_type: MealType, day: date) -> Meal | None:
        """Return a logged meal with its ingredients."""
        meal_id = self._call(
            lambda: self.repository.find_meal_id(user_id, meal_type, day),
            action="find_meal_id",
        )
        if meal_id is None:
            return None
        rows = self._call(
            lambda: self.repository.list_meal_ingredients(meal_id),
            action="list_meal_ingredients",
        )
        return Meal(
            user_id=user_id,
            meal_type=meal_type,
            day=day,
            ingredients=tuple(
                Ingredient(food_id=row.food_id, quantity_grams=row.quantity_grams)
                for row in rows
            ),
        )

    def _call(self, func, *, action: str):  # type: ignore[no-untyped-def]
        return call_store(func, store="Meal log", action=action)
