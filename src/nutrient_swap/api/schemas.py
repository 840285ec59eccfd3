"""Pydantic models for the HTTP API."""

from datetime import date

from pydantic import BaseModel, Field

from nutrient_swap.domain.goals import GoalDirection
from nutrient_swap.domain.meals import MealType


class GoalPayload(BaseModel):
    """Nutrient goal payload."""

    nutrient: str
    direction: GoalDirection
    magnitude: float = Field(ge=0)


class SuggestSwapRequest(BaseModel):
    """Request for a single-goal swap."""

    food_id: int
    goal: GoalPayload


class OptimizeGoalsRequest(BaseModel):
    """Request for foods satisfying several goals."""

    goals: list[GoalPayload]


class ApplySwapsRequest(BaseModel):
    """Request to apply a goal's swaps to logged meals."""

    user_id: str
    goal: GoalPayload
    start: date
    end: date


class IngredientPayload(BaseModel):
    """Ingredient payload."""

    food_id: int
    quantity_grams: float = Field(gt=0)


class LogMealRequest(BaseModel):
    """Request to log a meal."""

    user_id: str
    meal_type: MealType
    day: date
    ingredients: list[IngredientPayload]


class FoodOut(BaseModel):
    """Food record in responses."""

    id: int
    group_id: int
    name: str


class SwapResponse(BaseModel):
    """Single-goal swap outcome."""

    status: str
    food: FoodOut | None = None


class OptimizeResponse(BaseModel):
    """Multi-goal optimization outcome."""

    status: str
    foods: list[FoodOut]
