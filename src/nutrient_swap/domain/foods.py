"""Reference food models."""

from dataclasses import dataclass

from nutrient_swap.domain.nutrients import Nutrient


@dataclass(frozen=True)
class FoodRecord:
    """Food entry from the nutrient catalog."""

    id: int
    group_id: int
    name: str


@dataclass(frozen=True)
class NutrientAmount:
    """Amount of a nutrient per 100 g of a food."""

    food_id: int
    nutrient: Nutrient
    value_per_100g: float
