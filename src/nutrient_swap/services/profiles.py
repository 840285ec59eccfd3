"""Nutrient profile access over the reference data store."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Protocol, TypeVar

from nutrient_swap.domain.foods import FoodRecord
from nutrient_swap.domain.nutrients import Nutrient, nutrient_from_id
from nutrient_swap.services.cache import NoCache, ReferenceCache
from nutrient_swap.services.store import call_store

T = TypeVar("T")


class NutrientRepository(Protocol):
    """Read-only access to foods, groups and per-100g nutrient amounts."""

    def get_nutrient_value(self, food_id: int, nutrient_id: int) -> float | None:
        """Return a food's amount of a nutrient, or None if not recorded."""

    def get_nutrient_values(
        self, nutrient_id: int, food_ids: list[int]
    ) -> dict[int, float]:
        """Return amounts of a nutrient for the given foods that record it."""

    def get_food_group(self, food_id: int) -> int | None:
        """Return the group id of a food, or None if the food is unknown."""

    def list_foods_in_group(self, group_id: int) -> list[int]:
        """Return ids of every food in a group."""

    def list_all_foods_with_nutrient(self, nutrient_id: int) -> list[tuple[int, float]]:
        """Return (food id, amount) for every food that records a nutrient."""

    def get_food(self, food_id: int) -> FoodRecord | None:
        """Return a food record by id."""

    def get_foods(self, food_ids: list[int]) -> list[FoodRecord]:
        """Return food records for the given ids, skipping unknown ones."""

    def get_nutrient_vector(self, food_id: int) -> dict[int, float]:
        """Return every recorded nutrient amount of a food keyed by nutrient id."""


@dataclass
class NutrientProfileService:
    """Accessor over the nutrient store for the swap and intake services."""

    repository: NutrientRepository
    cache: ReferenceCache = field(default_factory=NoCache)
    debug: bool = False

    def get_value(self, food_id: int, nutrient: Nutrient) -> float | None:
        """Return a food's per-100g amount of a nutrient."""
        return self._call(
            lambda: self.repository.get_nutrient_value(food_id, int(nutrient)),
            action=f"get_nutrient_value:{food_id}:{nutrient.label}",
        )

    def get_values(self, nutrient: Nutrient, food_ids: Iterable[int]) -> dict[int, float]:
        """Return per-100g amounts of a nutrient for a set of foods."""
        ids = sorted(set(food_ids))
        if not ids:
            return {}
        values = self._call(
            lambda: self.repository.get_nutrient_values(int(nutrient), ids),
            action=f"get_nutrient_values:{nutrient.label}:{len(ids)}",
        )
        return {food_id: float(value) for food_id, value in values.items()}

    def get_group(self, food_id: int) -> int | None:
        """Return the group id of a food."""
        return self._call(
            lambda: self.repository.get_food_group(food_id),
            action=f"get_food_group:{food_id}",
        )

    def list_group(self, group_id: int) -> list[int]:
        """Return ids of foods in a group."""
        return self._call(
            lambda: self.repository.list_foods_in_group(group_id),
            action=f"list_foods_in_group:{group_id}",
        )

    def list_amounts(self, nutrient: Nutrient) -> dict[int, float]:
        """Return food id to per-100g amount for every food recording nutrient."""
        rows = self._call(
            lambda: self.repository.list_all_foods_with_nutrient(int(nutrient)),
            action=f"list_all_foods_with_nutrient:{nutrient.label}",
        )
        return {food_id: float(value) for food_id, value in rows}

    def get_food(self, food_id: int) -> FoodRecord | None:
        """Return a food record."""
        return self.cache.get_or_load(
            f"food:{food_id}",
            lambda: self._call(
                lambda: self.repository.get_food(food_id),
                action=f"get_food:{food_id}",
            ),
        )

    def get_foods(self, food_ids: Iterable[int]) -> list[FoodRecord]:
        """Return food records ordered by id."""
        ids = sorted(set(food_ids))
        if not ids:
            return []
        foods = self._call(
            lambda: self.repository.get_foods(ids),
            action=f"get_foods:{len(ids)}",
        )
        return sorted(foods, key=lambda food: food.id)

    def get_profile(self, food_id: int) -> dict[Nutrient, float]:
        """Return the tracked per-100g nutrient amounts of a food.

        Amounts for nutrients outside the vocabulary are dropped.
        """
        return self.cache.get_or_load(
            f"profile:{food_id}",
            lambda: self._load_profile(food_id),
        )

    def _load_profile(self, food_id: int) -> dict[Nutrient, float]:
        vector = self._call(
            lambda: self.repository.get_nutrient_vector(food_id),
            action=f"get_nutrient_vector:{food_id}",
        )
        profile: dict[Nutrient, float] = {}
        for nutrient_id, value in vector.items():
            nutrient = nutrient_from_id(nutrient_id)
            if nutrient is not None:
                profile[nutrient] = float(value)
        return profile

    def _call(self, func: Callable[[], T], *, action: str) -> T:
        return call_store(func, store="Nutrient store", action=action, debug=self.debug)
