"""Nutrient vocabulary and recommended daily values."""

from enum import IntEnum

from nutrient_swap.domain.errors import UnknownNutrientError


class Nutrient(IntEnum):
    """Tracked nutrients keyed by their Canadian Nutrient File id."""

    ENERGY = 208
    PROTEIN = 203
    FAT = 204
    CARBOHYDRATE = 205
    FIBER = 291
    SUGAR = 269
    CALCIUM = 301
    IRON = 303
    POTASSIUM = 306
    SODIUM = 307
    ZINC = 309

    @property
    def label(self) -> str:
        """Human-facing label used by goals and reports."""
        return _LABELS[self]

    @property
    def db_name(self) -> str:
        """Nutrient name as stored in the reference tables."""
        return _DB_NAMES[self]


_LABELS = {
    Nutrient.ENERGY: "Energy",
    Nutrient.PROTEIN: "Protein",
    Nutrient.FAT: "Fat",
    Nutrient.CARBOHYDRATE: "Carbohydrate",
    Nutrient.FIBER: "Fiber",
    Nutrient.SUGAR: "Sugar",
    Nutrient.CALCIUM: "Calcium",
    Nutrient.IRON: "Iron",
    Nutrient.POTASSIUM: "Potassium",
    Nutrient.SODIUM: "Sodium",
    Nutrient.ZINC: "Zinc",
}

_DB_NAMES = {
    Nutrient.ENERGY: "ENERGY (KILOCALORIES)",
    Nutrient.PROTEIN: "PROTEIN",
    Nutrient.FAT: "FAT (TOTAL LIPIDS)",
    Nutrient.CARBOHYDRATE: "CARBOHYDRATE, TOTAL (BY DIFFERENCE)",
    Nutrient.FIBER: "FIBRE, TOTAL DIETARY",
    Nutrient.SUGAR: "SUGARS, TOTAL",
    Nutrient.CALCIUM: "CALCIUM",
    Nutrient.IRON: "IRON",
    Nutrient.POTASSIUM: "POTASSIUM",
    Nutrient.SODIUM: "SODIUM",
    Nutrient.ZINC: "ZINC",
}

_BY_LABEL = {label: nutrient for nutrient, label in _LABELS.items()}

RECOMMENDED_DAILY: dict[Nutrient, float] = {
    Nutrient.ENERGY: 2500.0,
    Nutrient.PROTEIN: 50.0,
    Nutrient.FAT: 60.0,
    Nutrient.CARBOHYDRATE: 130.0,
    Nutrient.FIBER: 30.0,
    Nutrient.SUGAR: 50.0,
}

COMPARISON_NUTRIENTS: tuple[Nutrient, ...] = (
    Nutrient.PROTEIN,
    Nutrient.FAT,
    Nutrient.CARBOHYDRATE,
    Nutrient.FIBER,
    Nutrient.SUGAR,
    Nutrient.SODIUM,
    Nutrient.POTASSIUM,
    Nutrient.ZINC,
    Nutrient.ENERGY,
    Nutrient.CALCIUM,
    Nutrient.IRON,
)


def resolve_nutrient(label: str) -> Nutrient:
    """Resolve a case-sensitive display label to a nutrient."""
    nutrient = _BY_LABEL.get(label)
    if nutrient is None:
        raise UnknownNutrientError(label)
    return nutrient


def nutrient_from_id(nutrient_id: int) -> Nutrient | None:
    """Return the nutrient for a store id, or None if it is not tracked."""
    try:
        return Nutrient(nutrient_id)
    except ValueError:
        return None


def percent_of_recommended(nutrient: Nutrient, value: float) -> float | None:
    """Express a daily value as a percentage of the fixed recommendation."""
    recommended = RECOMMENDED_DAILY.get(nutrient)
    if recommended is None:
        return None
    return 100.0 * value / recommended
