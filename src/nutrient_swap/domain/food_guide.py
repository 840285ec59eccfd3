"""Canada's Food Guide categories and plate targets."""

from dataclasses import dataclass
from enum import StrEnum


class FoodGuideCategory(StrEnum):
    """Macro categories of the food guide plate."""

    VEGETABLES_AND_FRUITS = "Vegetables & Fruits"
    WHOLE_GRAINS = "Whole Grains"
    PROTEIN_FOODS = "Protein Foods"
    OTHER = "Other"


_GROUP_CATEGORIES = {
    **dict.fromkeys((1, 2, 3, 9, 12), FoodGuideCategory.VEGETABLES_AND_FRUITS),
    **dict.fromkeys((4, 10), FoodGuideCategory.WHOLE_GRAINS),
    **dict.fromkeys((5, 6, 7, 8), FoodGuideCategory.PROTEIN_FOODS),
}

IDEAL_PROPORTIONS: dict[FoodGuideCategory, float] = {
    FoodGuideCategory.VEGETABLES_AND_FRUITS: 50.0,
    FoodGuideCategory.WHOLE_GRAINS: 25.0,
    FoodGuideCategory.PROTEIN_FOODS: 25.0,
}


@dataclass(frozen=True)
class CategoryComparison:
    """Observed plate share against the ideal share."""

    category: FoodGuideCategory
    observed_percent: float
    ideal_percent: float | None
    percent_of_target: float | None


def classify(group_id: int) -> FoodGuideCategory:
    """Map a food group id to its food guide category."""
    return _GROUP_CATEGORIES.get(group_id, FoodGuideCategory.OTHER)


def compare_to_targets(
    observed: dict[FoodGuideCategory, float],
) -> dict[FoodGuideCategory, CategoryComparison]:
    """Compare observed category percentages with the ideal plate.

    Every named category is reported even when it was not observed. Categories
    without a fixed ideal are reported as observed-only.
    """
    categories = list(IDEAL_PROPORTIONS)
    categories.extend(category for category in observed if category not in categories)
    result: dict[FoodGuideCategory, CategoryComparison] = {}
    for category in categories:
        observed_percent = observed.get(category, 0.0)
        ideal = IDEAL_PROPORTIONS.get(category)
        result[category] = CategoryComparison(
            category=category,
            observed_percent=observed_percent,
            ideal_percent=ideal,
            percent_of_target=100.0 * observed_percent / ideal if ideal else None,
        )
    return result
