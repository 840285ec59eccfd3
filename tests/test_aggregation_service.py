"""Tests for nutrient intake aggregation."""

from dataclasses import dataclass
from datetime import date

import pytest

from nutrient_swap.domain.errors import (
    DataAccessError,
    InvalidRangeError,
    UnknownNutrientError,
)
from nutrient_swap.domain.meals import Ingredient, LoggedIngredient, Meal, MealType
from nutrient_swap.domain.nutrients import Nutrient, percent_of_recommended
from nutrient_swap.services.aggregation import NutrientAggregator
from nutrient_swap.services.profiles import NutrientProfileService
from tests.conftest import InMemoryMealLogRepository, build_catalog


@dataclass
class ExplodingMealLog:
    """Meal log that must never be queried."""

    def list_ingredients(
        self, user_id: str, start: date, end: date
    ) -> list[LoggedIngredient]:
        raise AssertionError("meal log should not be queried")


def _aggregator(meal_log) -> NutrientAggregator:  # type: ignore[no-untyped-def]
    return NutrientAggregator(NutrientProfileService(build_catalog()), meal_log)


def _log(meal_log: InMemoryMealLogRepository, day: date, *items: Ingredient) -> None:
    meal_log.create_meal(
        Meal(user_id="alice", meal_type=MealType.SNACK, day=day, ingredients=items)
    )


def test_totals_for_ingredients_scales_by_quantity() -> None:
    aggregator = _aggregator(InMemoryMealLogRepository())

    totals = aggregator.totals_for_ingredients(
        [Ingredient(1, 200), Ingredient(10, 50)]
    )

    assert totals["Protein"] == pytest.approx(20 + 0.15)
    assert totals["Sugar"] == pytest.approx(4 + 5.2)
    assert totals["Energy"] == pytest.approx(300 + 26)
    assert totals["Fiber"] == pytest.approx(1.2)


def test_single_ingredient_percent_of_recommended_round_trip() -> None:
    aggregator = _aggregator(InMemoryMealLogRepository())

    energy = aggregator.totals_for_ingredients([Ingredient(20, 100)])["Energy"]

    assert percent_of_recommended(Nutrient.ENERGY, energy) == pytest.approx(
        100 * energy / 2500
    )
    assert aggregator.percent_of_recommended({"Energy": energy}) == {
        "Energy": pytest.approx(100 * 380 / 2500)
    }


def test_period_averages_divide_by_days_with_data() -> None:
    meal_log = InMemoryMealLogRepository()
    _log(meal_log, date(2024, 3, 1), Ingredient(1, 100))
    _log(meal_log, date(2024, 3, 3), Ingredient(2, 100), Ingredient(10, 100))
    aggregator = _aggregator(meal_log)

    averages = aggregator.period_averages("alice", date(2024, 3, 1), date(2024, 3, 5))

    assert averages["Protein"] == pytest.approx((10 + 15 + 0.3) / 2)
    assert averages["Fiber"] == pytest.approx(2.4)


def test_period_averages_for_one_nutrient() -> None:
    meal_log = InMemoryMealLogRepository()
    _log(meal_log, date(2024, 3, 1), Ingredient(1, 100))
    _log(meal_log, date(2024, 3, 3), Ingredient(2, 100))
    aggregator = _aggregator(meal_log)

    averages = aggregator.period_averages(
        "alice", date(2024, 3, 1), date(2024, 3, 5), nutrient_label="Protein"
    )

    assert averages == {"Protein": pytest.approx(12.5)}


def test_daily_averages_returns_dated_series() -> None:
    meal_log = InMemoryMealLogRepository()
    _log(meal_log, date(2024, 3, 3), Ingredient(1, 50), Ingredient(1, 50))
    _log(meal_log, date(2024, 3, 1), Ingredient(2, 200))
    _log(meal_log, date(2024, 3, 2), Ingredient(30, 330))
    aggregator = _aggregator(meal_log)

    series = aggregator.daily_averages(
        "alice", "Protein", date(2024, 3, 1), date(2024, 3, 3)
    )

    assert list(series) == [date(2024, 3, 1), date(2024, 3, 3)]
    assert series[date(2024, 3, 1)] == pytest.approx(30)
    assert series[date(2024, 3, 3)] == pytest.approx(10)


def test_daily_totals_groups_all_nutrients_by_date() -> None:
    meal_log = InMemoryMealLogRepository()
    _log(meal_log, date(2024, 3, 1), Ingredient(30, 100))
    aggregator = _aggregator(meal_log)

    totals = aggregator.daily_totals("alice", date(2024, 3, 1), date(2024, 3, 1))

    assert totals == {
        date(2024, 3, 1): {"Energy": pytest.approx(42), "Sugar": pytest.approx(10.6)}
    }


def test_inverted_range_is_rejected_before_querying() -> None:
    aggregator = _aggregator(ExplodingMealLog())

    with pytest.raises(InvalidRangeError):
        aggregator.period_averages("alice", date(2024, 3, 5), date(2024, 3, 1))
    with pytest.raises(InvalidRangeError):
        aggregator.daily_averages("alice", "Protein", date(2024, 3, 5), date(2024, 3, 1))


def test_unknown_nutrient_is_rejected() -> None:
    aggregator = _aggregator(InMemoryMealLogRepository())

    with pytest.raises(UnknownNutrientError):
        aggregator.daily_averages("alice", "Vitamin Q", date(2024, 3, 1), date(2024, 3, 2))


def test_empty_nutrient_label_is_not_treated_as_all_nutrients() -> None:
    meal_log = InMemoryMealLogRepository()
    _log(meal_log, date(2024, 3, 1), Ingredient(1, 100))
    aggregator = _aggregator(meal_log)

    with pytest.raises(UnknownNutrientError):
        aggregator.period_averages(
            "alice", date(2024, 3, 1), date(2024, 3, 2), nutrient_label=""
        )
    with pytest.raises(UnknownNutrientError):
        aggregator.daily_totals(
            "alice", date(2024, 3, 1), date(2024, 3, 2), nutrient_label=""
        )


def test_negative_logged_quantity_is_a_data_error() -> None:
    meal_log = InMemoryMealLogRepository()
    _log(meal_log, date(2024, 3, 1), Ingredient(1, 100), Ingredient(2, -50))
    aggregator = _aggregator(meal_log)

    with pytest.raises(DataAccessError):
        aggregator.period_averages("alice", date(2024, 3, 1), date(2024, 3, 1))


def test_swap_impact_splits_original_and_swapped_rows() -> None:
    meal_log = InMemoryMealLogRepository()
    _log(meal_log, date(2024, 3, 1), Ingredient(1, 100), Ingredient(1, 100))
    meal_log.replace_ingredient_food(2, 2)
    aggregator = _aggregator(meal_log)

    days = aggregator.swap_impact("alice", "Protein", date(2024, 3, 1), date(2024, 3, 2))

    assert len(days) == 1
    assert days[0].original == pytest.approx(10)
    assert days[0].swapped == pytest.approx(15)
