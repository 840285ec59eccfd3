"""FastAPI application factory."""

import logging
from dataclasses import asdict
from datetime import date

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from nutrient_swap.api.schemas import (
    ApplySwapsRequest,
    FoodOut,
    GoalPayload,
    LogMealRequest,
    OptimizeGoalsRequest,
    OptimizeResponse,
    SuggestSwapRequest,
    SwapResponse,
)
from nutrient_swap.app_logging import configure_logging
from nutrient_swap.containers import AppContainer
from nutrient_swap.domain.errors import (
    DataAccessError,
    FoodNotFoundError,
    InvalidGoalError,
    InvalidMealError,
    InvalidRangeError,
    UnknownNutrientError,
)
from nutrient_swap.domain.foods import FoodRecord
from nutrient_swap.domain.goals import SwapGoal
from nutrient_swap.domain.meals import Ingredient, Meal

_UNPROCESSABLE = 422

_ERROR_STATUS = {
    UnknownNutrientError: _UNPROCESSABLE,
    InvalidGoalError: _UNPROCESSABLE,
    InvalidMealError: _UNPROCESSABLE,
    InvalidRangeError: _UNPROCESSABLE,
    FoodNotFoundError: status.HTTP_404_NOT_FOUND,
    DataAccessError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    for error_type, status_code in _ERROR_STATUS.items():

        async def handle_error(
            request: Request, exc: Exception, status_code: int = status_code
        ) -> JSONResponse:
            if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                logger.warning("Request %s failed: %s", request.url.path, exc)
            return JSONResponse(
                status_code=status_code,
                content={"error": type(exc).__name__, "detail": str(exc)},
            )

        app.add_exception_handler(error_type, handle_error)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/swaps/suggest")
    async def suggest_swap(payload: SuggestSwapRequest, request: Request) -> SwapResponse:
        """Suggest a same-group swap for one goal."""
        state_container: AppContainer = request.app.state.container
        food = state_container.swap_service.suggest_swap(
            payload.food_id, _to_goal(payload.goal)
        )
        if food is None:
            return SwapResponse(status="no_match")
        return SwapResponse(status="matched", food=_food_out(food))

    @app.get("/swaps/compare")
    async def compare_foods(
        original_id: int, swap_id: int, request: Request
    ) -> dict[str, object]:
        """Compare the main nutrients of a food and its swap."""
        state_container: AppContainer = request.app.state.container
        rows = state_container.swap_service.compare_foods(original_id, swap_id)
        return {
            "nutrients": [
                {
                    "nutrient": row.nutrient_label,
                    "original": row.original,
                    "swapped": row.swapped,
                    "difference": row.difference,
                }
                for row in rows
            ]
        }

    @app.post("/swaps/apply")
    async def apply_swaps(payload: ApplySwapsRequest, request: Request) -> dict[str, object]:
        """Apply a goal's swaps to a user's logged ingredients."""
        state_container: AppContainer = request.app.state.container
        applied = state_container.swap_service.apply_swaps(
            payload.user_id, _to_goal(payload.goal), payload.start, payload.end
        )
        return {
            "nutrient": payload.goal.nutrient,
            "applied": [
                {
                    "ingredient_id": swap.ingredient_id,
                    "day": swap.day.isoformat(),
                    "original_food_id": swap.original_food_id,
                    "swapped_food": asdict(swap.swapped_food),
                    "before": swap.before,
                    "after": swap.after,
                }
                for swap in applied
            ],
            "before_total": sum(swap.before for swap in applied),
            "after_total": sum(swap.after for swap in applied),
        }

    @app.post("/goals/optimize")
    async def optimize_goals(
        payload: OptimizeGoalsRequest, request: Request
    ) -> OptimizeResponse:
        """Return foods satisfying every goal."""
        state_container: AppContainer = request.app.state.container
        result = state_container.goal_optimizer.optimize_goals(
            [_to_goal(goal) for goal in payload.goals]
        )
        return OptimizeResponse(
            status=str(result.status), foods=[_food_out(food) for food in result.foods]
        )

    @app.get("/intake/daily")
    async def daily_intake(
        user_id: str, nutrient: str, start: date, end: date, request: Request
    ) -> dict[str, object]:
        """Return a nutrient's daily intake series."""
        state_container: AppContainer = request.app.state.container
        series = state_container.aggregator.daily_averages(user_id, nutrient, start, end)
        return {
            "nutrient": nutrient,
            "days": [
                {"day": day.isoformat(), "value": value} for day, value in series.items()
            ],
        }

    @app.get("/intake/averages")
    async def intake_averages(
        user_id: str,
        start: date,
        end: date,
        request: Request,
        nutrient: str | None = None,
    ) -> dict[str, object]:
        """Return average daily intake and progress against recommendations."""
        state_container: AppContainer = request.app.state.container
        aggregator = state_container.aggregator
        averages = aggregator.period_averages(user_id, start, end, nutrient)
        return {
            "averages": averages,
            "percent_of_recommended": aggregator.percent_of_recommended(averages),
        }

    @app.get("/intake/swap-impact")
    async def swap_impact(
        user_id: str, nutrient: str, start: date, end: date, request: Request
    ) -> dict[str, object]:
        """Return daily totals split into original and swapped foods."""
        state_container: AppContainer = request.app.state.container
        days = state_container.aggregator.swap_impact(user_id, nutrient, start, end)
        return {
            "nutrient": nutrient,
            "days": [
                {
                    "day": day.day.isoformat(),
                    "original": day.original,
                    "swapped": day.swapped,
                }
                for day in days
            ],
        }

    @app.get("/food-guide/plate")
    async def food_guide_plate(
        user_id: str, start: date, end: date, request: Request
    ) -> dict[str, object]:
        """Return plate composition compared with the food guide targets."""
        state_container: AppContainer = request.app.state.container
        comparison = state_container.plate_service.compare_plate(user_id, start, end)
        return {
            "categories": [
                {
                    "category": str(row.category),
                    "observed_percent": row.observed_percent,
                    "ideal_percent": row.ideal_percent,
                    "percent_of_target": row.percent_of_target,
                }
                for row in comparison.values()
            ]
        }

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    async def log_meal(payload: LogMealRequest, request: Request) -> dict[str, int]:
        """Log a meal."""
        state_container: AppContainer = request.app.state.container
        meal_id = state_container.meal_log_service.log_meal(
            Meal(
                user_id=payload.user_id,
                meal_type=payload.meal_type,
                day=payload.day,
                ingredients=tuple(
                    Ingredient(
                        food_id=item.food_id, quantity_grams=item.quantity_grams
                    )
                    for item in payload.ingredients
                ),
            )
        )
        return {"meal_id": meal_id}

    return app


def _to_goal(payload: GoalPayload) -> SwapGoal:
    return SwapGoal(
        nutrient_label=payload.nutrient,
        direction=payload.direction,
        magnitude=payload.magnitude,
    )


def _food_out(food: FoodRecord) -> FoodOut:
    return FoodOut(id=food.id, group_id=food.group_id, name=food.name)
