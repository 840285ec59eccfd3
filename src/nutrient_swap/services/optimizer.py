"""Catalog-wide search for foods that satisfy several goals at once."""

import logging
from dataclasses import dataclass

from nutrient_swap.domain.goals import SwapGoal
from nutrient_swap.domain.intake import OptimizationResult, OptimizationStatus
from nutrient_swap.services.profiles import NutrientProfileService

_logger = logging.getLogger(__name__)


@dataclass
class GoalOptimizer:
    """Intersects per-goal qualifying sets across the whole catalog."""

    profiles: NutrientProfileService

    def optimize_goals(self, goals: list[SwapGoal]) -> OptimizationResult:
        """Return every food that satisfies all goals, ordered by id.

        Each goal's magnitude is an absolute per-100g threshold: a food
        qualifies for an increase goal when its amount is above the magnitude
        and for a decrease goal when it is below. Every label is resolved
        before the store is queried, so one unknown nutrient aborts the run.
        """
        if not goals:
            return OptimizationResult(status=OptimizationStatus.NO_GOALS, foods=[])
        nutrients = [goal.resolve() for goal in goals]

        matching: set[int] | None = None
        for goal, nutrient in zip(goals, nutrients, strict=True):
            amounts = self.profiles.list_amounts(nutrient)
            qualifying = {
                food_id
                for food_id, value in amounts.items()
                if goal.crosses(value, goal.magnitude)
            }
            matching = qualifying if matching is None else matching & qualifying
            if not matching:
                break

        if not matching:
            _logger.info("No food satisfies goals: %s", ", ".join(map(str, goals)))
            return OptimizationResult(status=OptimizationStatus.NO_MATCH, foods=[])
        foods = self.profiles.get_foods(matching)
        return OptimizationResult(
            status=OptimizationStatus.MATCHED if foods else OptimizationStatus.NO_MATCH,
            foods=foods,
        )
