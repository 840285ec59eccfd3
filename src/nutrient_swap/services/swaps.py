"""Single-goal food swap suggestions."""

import logging
from dataclasses import dataclass
from datetime import date

from nutrient_swap.domain.errors import FoodNotFoundError, NutrientSwapError
from nutrient_swap.domain.foods import FoodRecord
from nutrient_swap.domain.goals import SwapGoal
from nutrient_swap.domain.intake import AppliedSwap, NutrientComparison
from nutrient_swap.domain.nutrients import COMPARISON_NUTRIENTS, Nutrient
from nutrient_swap.services.aggregation import load_ingredients
from nutrient_swap.services.meals import MealLogRepository
from nutrient_swap.services.profiles import NutrientProfileService
from nutrient_swap.services.store import call_store

_logger = logging.getLogger(__name__)


@dataclass
class SwapService:
    """Finds same-group replacements that move one nutrient toward a goal."""

    profiles: NutrientProfileService
    meal_log: MealLogRepository

    def suggest_swap(self, food_id: int, goal: SwapGoal) -> FoodRecord | None:
        """Return the same-group food closest to the goal's target.

        The target is the original food's amount moved by the goal's magnitude.
        Candidates must lie strictly beyond the target; the closest one wins and
        ties go to the lowest food id. Returns None when the original food or its
        amount is unknown, or when no candidate qualifies.
        """
        nutrient = goal.resolve()
        original_amount = self.profiles.get_value(food_id, nutrient)
        if original_amount is None:
            return None
        group_id = self.profiles.get_group(food_id)
        if group_id is None:
            return None

        target = goal.target_from(original_amount)
        members = [
            member for member in self.profiles.list_group(group_id) if member != food_id
        ]
        amounts = self.profiles.get_values(nutrient, members)
        candidates = [
            (abs(value - target), candidate_id)
            for candidate_id, value in amounts.items()
            if candidate_id != food_id and goal.crosses(value, target)
        ]
        if not candidates:
            _logger.info(
                "No swap for food=%s goal=%s target=%.2f", food_id, goal, target
            )
            return None
        _, best_id = min(candidates)
        return self.profiles.get_food(best_id)

    def compare_foods(self, original_id: int, swap_id: int) -> list[NutrientComparison]:
        """Return per-100g values of the main nutrients for two foods."""
        for food_id in (original_id, swap_id):
            if self.profiles.get_food(food_id) is None:
                raise FoodNotFoundError(food_id)
        original = self.profiles.get_profile(original_id)
        swapped = self.profiles.get_profile(swap_id)
        return [
            NutrientComparison(
                nutrient_label=nutrient.label,
                original=original.get(nutrient, 0.0),
                swapped=swapped.get(nutrient, 0.0),
            )
            for nutrient in COMPARISON_NUTRIENTS
            if nutrient in original or nutrient in swapped
        ]

    def apply_swaps(
        self, user_id: str, goal: SwapGoal, start: date, end: date
    ) -> list[AppliedSwap]:
        """Replace logged ingredients with their suggested swaps.

        Ingredients that were already swapped are left alone, so applying the
        same goal twice does not chain replacements. Each applied swap carries
        the goal nutrient's amount for the logged quantity before and after.
        Replacements made before a store failure stay committed and are logged.
        """
        nutrient = goal.resolve()
        rows = load_ingredients(self.meal_log, user_id, start, end)
        suggestions: dict[int, FoodRecord | None] = {}
        amounts: dict[int, float] = {}
        applied: list[AppliedSwap] = []
        try:
            for row in rows:
                if row.was_swapped:
                    continue
                if row.food_id not in suggestions:
                    suggestions[row.food_id] = self.suggest_swap(row.food_id, goal)
                suggestion = suggestions[row.food_id]
                if suggestion is None:
                    continue
                call_store(
                    lambda row=row, suggestion=suggestion: (
                        self.meal_log.replace_ingredient_food(row.id, suggestion.id)
                    ),
                    store="Meal log",
                    action=f"replace_ingredient_food:{row.id}",
                )
                factor = row.quantity_grams / 100.0
                applied.append(
                    AppliedSwap(
                        ingredient_id=row.id,
                        day=row.day,
                        original_food_id=row.food_id,
                        swapped_food=suggestion,
                        before=self._amount(row.food_id, nutrient, amounts) * factor,
                        after=self._amount(suggestion.id, nutrient, amounts) * factor,
                    )
                )
        except NutrientSwapError:
            _logger.error(
                "Swap run for user=%s stopped; already applied ingredients=%s",
                user_id,
                [swap.ingredient_id for swap in applied],
            )
            raise
        _logger.info(
            "Applied %s swaps for user=%s goal=%s", len(applied), user_id, goal
        )
        return applied

    def _amount(
        self, food_id: int, nutrient: Nutrient, amounts: dict[int, float]
    ) -> float:
        if food_id not in amounts:
            amounts[food_id] = self.profiles.get_value(food_id, nutrient) or 0.0
        return amounts[food_id]
