"""Plate composition against the food guide."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date

from nutrient_swap.domain.food_guide import (
    CategoryComparison,
    FoodGuideCategory,
    classify,
    compare_to_targets,
)
from nutrient_swap.services.aggregation import MealLogReader, load_ingredients
from nutrient_swap.services.profiles import NutrientProfileService


@dataclass
class PlateService:
    """Groups logged grams into food guide categories."""

    profiles: NutrientProfileService
    meal_log: MealLogReader

    def plate_composition(
        self, user_id: str, start: date, end: date
    ) -> dict[FoodGuideCategory, float]:
        """Return each category's share of logged grams as a percentage."""
        rows = load_ingredients(self.meal_log, user_id, start, end)
        grams: dict[FoodGuideCategory, float] = defaultdict(float)
        groups: dict[int, int | None] = {}
        for row in rows:
            if row.food_id not in groups:
                groups[row.food_id] = self.profiles.get_group(row.food_id)
            group_id = groups[row.food_id]
            category = (
                classify(group_id) if group_id is not None else FoodGuideCategory.OTHER
            )
            grams[category] += row.quantity_grams

        total = sum(grams.values())
        if total <= 0:
            return {}
        return {category: 100.0 * value / total for category, value in grams.items()}

    def compare_plate(
        self, user_id: str, start: date, end: date
    ) -> dict[FoodGuideCategory, CategoryComparison]:
        """Return the plate composition compared with the ideal proportions."""
        return compare_to_targets(self.plate_composition(user_id, start, end))
