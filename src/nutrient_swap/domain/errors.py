"""Error taxonomy for the substitution and aggregation engine."""


class NutrientSwapError(Exception):
    """Base class for engine errors."""


class UnknownNutrientError(NutrientSwapError):
    """Raised when a nutrient label is not part of the vocabulary."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Unknown nutrient: {label}")
        self.label = label


class FoodNotFoundError(NutrientSwapError):
    """Raised when a referenced food id does not exist in the catalog."""

    def __init__(self, food_id: int) -> None:
        super().__init__(f"Food not found: {food_id}")
        self.food_id = food_id


class InvalidRangeError(NutrientSwapError):
    """Raised for inverted date ranges."""


class InvalidGoalError(NutrientSwapError):
    """Raised for goals that cannot be evaluated."""


class InvalidMealError(NutrientSwapError):
    """Raised when a meal cannot be logged."""


class DataAccessError(NutrientSwapError):
    """Raised when a data store fails or returns malformed data."""
