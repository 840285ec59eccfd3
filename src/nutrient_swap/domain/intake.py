"""Result models for swaps, optimization and intake aggregation."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from nutrient_swap.domain.foods import FoodRecord

NutrientTotals = dict[str, float]


class OptimizationStatus(StrEnum):
    """Outcome of a multi-goal optimization."""

    MATCHED = "matched"
    NO_MATCH = "no_match"
    NO_GOALS = "no_goals"


@dataclass(frozen=True)
class OptimizationResult:
    """Foods that satisfy every requested goal."""

    status: OptimizationStatus
    foods: list[FoodRecord]


@dataclass(frozen=True)
class NutrientComparison:
    """Per-100g values of one nutrient in an original food and its swap."""

    nutrient_label: str
    original: float
    swapped: float

    @property
    def difference(self) -> float:
        return self.swapped - self.original


@dataclass(frozen=True)
class AppliedSwap:
    """A logged ingredient whose food was replaced.

    ``before`` and ``after`` hold the goal nutrient for the logged quantity.
    """

    ingredient_id: int
    day: date
    original_food_id: int
    swapped_food: FoodRecord
    before: float = 0.0
    after: float = 0.0

    @property
    def change(self) -> float:
        return self.after - self.before


@dataclass(frozen=True)
class SwapImpactDay:
    """Daily nutrient total split into original and swapped ingredients."""

    day: date
    original: float
    swapped: float
