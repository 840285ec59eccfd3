"""Nutrient goal models."""

from dataclasses import dataclass
from enum import StrEnum

from nutrient_swap.domain.errors import InvalidGoalError
from nutrient_swap.domain.nutrients import Nutrient, resolve_nutrient


class GoalDirection(StrEnum):
    """Direction in which a goal moves a nutrient."""

    INCREASE = "increase"
    DECREASE = "decrease"


@dataclass(frozen=True)
class SwapGoal:
    """Request to move a nutrient up or down by a magnitude."""

    nutrient_label: str
    direction: GoalDirection
    magnitude: float

    def __post_init__(self) -> None:
        try:
            direction = GoalDirection(self.direction)
        except ValueError as exc:
            raise InvalidGoalError(f"Unknown goal direction: {self.direction}") from exc
        object.__setattr__(self, "direction", direction)
        if self.magnitude < 0:
            raise InvalidGoalError(
                f"Goal magnitude must not be negative: {self.magnitude}"
            )

    def resolve(self) -> Nutrient:
        """Return the goal's nutrient, raising for unknown labels."""
        return resolve_nutrient(self.nutrient_label)

    def target_from(self, original_amount: float) -> float:
        """Return the target value relative to an original amount."""
        if self.direction is GoalDirection.INCREASE:
            return original_amount + self.magnitude
        return original_amount - self.magnitude

    def crosses(self, value: float, threshold: float) -> bool:
        """Return True when value lies strictly beyond threshold."""
        if self.direction is GoalDirection.INCREASE:
            return value > threshold
        return value < threshold

    def __str__(self) -> str:
        return f"{self.direction} {self.nutrient_label} by {self.magnitude:g}"
