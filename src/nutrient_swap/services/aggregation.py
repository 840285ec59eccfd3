"""Nutrient intake aggregation over logged meals."""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from nutrient_swap.domain.errors import DataAccessError, InvalidRangeError
from nutrient_swap.domain.intake import NutrientTotals, SwapImpactDay
from nutrient_swap.domain.meals import Ingredient, LoggedIngredient
from nutrient_swap.domain.nutrients import (
    Nutrient,
    percent_of_recommended,
    resolve_nutrient,
)
from nutrient_swap.services.profiles import NutrientProfileService
from nutrient_swap.services.store import call_store


class MealLogReader(Protocol):
    """Read access to logged ingredients."""

    def list_ingredients(
        self, user_id: str, start: date, end: date
    ) -> list[LoggedIngredient]:
        """Return ingredients logged by a user between two dates inclusive."""


@dataclass
class NutrientAggregator:
    """Service that sums nutrient intake across ingredients and dates.

    Per-100g amounts are always scaled by ``quantity_grams / 100``. Meal log
    queries are repeated on every call so concurrent appends are picked up.
    """

    profiles: NutrientProfileService
    meal_log: MealLogReader

    def totals_for_ingredients(self, ingredients: Iterable[Ingredient]) -> NutrientTotals:
        """Return nutrient totals for a set of ingredients keyed by label."""
        totals: dict[Nutrient, float] = defaultdict(float)
        for ingredient in ingredients:
            for nutrient, amount in self._scaled(ingredient).items():
                totals[nutrient] += amount
        return _labelled(totals)

    def daily_totals(
        self,
        user_id: str,
        start: date,
        end: date,
        nutrient_label: str | None = None,
    ) -> dict[date, NutrientTotals]:
        """Return per-date nutrient totals for days that have logged data."""
        nutrient = (
            resolve_nutrient(nutrient_label) if nutrient_label is not None else None
        )
        rows = self._load(user_id, start, end)
        by_day = self._sum_by_day(rows, nutrient)
        return {day: _labelled(by_day[day]) for day in sorted(by_day)}

    def daily_averages(
        self, user_id: str, nutrient_label: str, start: date, end: date
    ) -> dict[date, float]:
        """Return the date series of one nutrient's daily intake."""
        nutrient = resolve_nutrient(nutrient_label)
        rows = self._load(user_id, start, end)
        by_day = self._sum_by_day(rows, nutrient)
        return {
            day: by_day[day][nutrient] for day in sorted(by_day) if nutrient in by_day[day]
        }

    def period_averages(
        self,
        user_id: str,
        start: date,
        end: date,
        nutrient_label: str | None = None,
    ) -> NutrientTotals:
        """Return average daily intake per nutrient.

        Each nutrient is averaged over the distinct dates on which it has data,
        not over the calendar span of the range.
        """
        nutrient = (
            resolve_nutrient(nutrient_label) if nutrient_label is not None else None
        )
        rows = self._load(user_id, start, end)
        by_day = self._sum_by_day(rows, nutrient)
        sums: dict[Nutrient, float] = defaultdict(float)
        days: dict[Nutrient, int] = defaultdict(int)
        for day_totals in by_day.values():
            for item, value in day_totals.items():
                sums[item] += value
                days[item] += 1
        return _labelled({item: sums[item] / days[item] for item in sums})

    @staticmethod
    def percent_of_recommended(averages: NutrientTotals) -> dict[str, float]:
        """Return each average as a percentage of its recommended daily value."""
        progress: dict[str, float] = {}
        for label, value in averages.items():
            percent = percent_of_recommended(resolve_nutrient(label), value)
            if percent is not None:
                progress[label] = percent
        return progress

    def swap_impact(
        self, user_id: str, nutrient_label: str, start: date, end: date
    ) -> list[SwapImpactDay]:
        """Return daily totals of a nutrient split by swapped and original foods."""
        nutrient = resolve_nutrient(nutrient_label)
        rows = self._load(user_id, start, end)
        original: dict[date, float] = defaultdict(float)
        swapped: dict[date, float] = defaultdict(float)
        vectors: dict[int, dict[Nutrient, float]] = {}
        for row in rows:
            amount = self._scaled(row.as_ingredient(), vectors).get(nutrient)
            if amount is None:
                continue
            bucket = swapped if row.was_swapped else original
            bucket[row.day] += amount
        return [
            SwapImpactDay(
                day=day,
                original=original.get(day, 0.0),
                swapped=swapped.get(day, 0.0),
            )
            for day in sorted(set(original) | set(swapped))
        ]

    def _load(self, user_id: str, start: date, end: date) -> list[LoggedIngredient]:
        return load_ingredients(self.meal_log, user_id, start, end)

    def _sum_by_day(
        self, rows: list[LoggedIngredient], nutrient: Nutrient | None
    ) -> dict[date, dict[Nutrient, float]]:
        by_day: dict[date, dict[Nutrient, float]] = defaultdict(dict)
        vectors: dict[int, dict[Nutrient, float]] = {}
        for row in rows:
            for item, amount in self._scaled(row.as_ingredient(), vectors).items():
                if nutrient is not None and item is not nutrient:
                    continue
                day_totals = by_day[row.day]
                day_totals[item] = day_totals.get(item, 0.0) + amount
        return dict(by_day)

    def _scaled(
        self,
        ingredient: Ingredient,
        vectors: dict[int, dict[Nutrient, float]] | None = None,
    ) -> dict[Nutrient, float]:
        if vectors is not None and ingredient.food_id in vectors:
            profile = vectors[ingredient.food_id]
        else:
            profile = self.profiles.get_profile(ingredient.food_id)
            if vectors is not None:
                vectors[ingredient.food_id] = profile
        factor = ingredient.quantity_grams / 100.0
        return {nutrient: value * factor for nutrient, value in profile.items()}


def validate_range(start: date, end: date) -> None:
    """Reject inverted date ranges."""
    if start > end:
        raise InvalidRangeError(f"Start date {start} is after end date {end}")


def load_ingredients(
    meal_log: MealLogReader, user_id: str, start: date, end: date
) -> list[LoggedIngredient]:
    """Return a user's logged ingredients for a validated date range.

    Rows with a negative quantity are malformed and fail the whole read.
    """
    validate_range(start, end)
    rows = call_store(
        lambda: meal_log.list_ingredients(user_id, start, end),
        store="Meal log",
        action=f"list_ingredients:{user_id}",
    )
    for row in rows:
        if row.quantity_grams < 0:
            raise DataAccessError(
                f"Meal log row {row.id} has negative quantity {row.quantity_grams}"
            )
    return rows


def _labelled(totals: dict[Nutrient, float]) -> NutrientTotals:
    return {
        nutrient.label: totals[nutrient]
        for nutrient in sorted(totals, key=lambda item: item.label)
    }
