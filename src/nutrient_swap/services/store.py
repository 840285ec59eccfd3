"""Guarded calls into external data stores."""

import logging
from collections.abc import Callable
from typing import TypeVar

from nutrient_swap.domain.errors import DataAccessError, NutrientSwapError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def call_store(
    func: Callable[[], T], *, store: str, action: str, debug: bool = False
) -> T:
    """Call a store once, surfacing failures as DataAccessError.

    Engine errors pass through untouched. Nothing is retried.
    """
    try:
        result = func()
    except NutrientSwapError:
        raise
    except Exception as exc:
        _logger.exception("%s %s failed", store, action)
        raise DataAccessError(f"{store} {action} failed") from exc
    if debug:
        _logger.info("%s %s ok", store, action)
    return result
