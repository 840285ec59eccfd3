"""Paged reads over Supabase queries capped by the server's row limit."""

from collections.abc import Callable
from typing import Any

# PostgREST returns at most max_rows per request, 1000 by default.
DEFAULT_PAGE_SIZE = 1000


def select_all(
    build_query: Callable[[], Any], page_size: int = DEFAULT_PAGE_SIZE
) -> list[dict[str, Any]]:
    """Run an ordered select page by page until a short page comes back.

    ``build_query`` must return a fresh, ordered query builder on every call.
    """
    rows: list[dict[str, Any]] = []
    offset = 0
    while True:
        response = build_query().range(offset, offset + page_size - 1).execute()
        page = response.data or []
        rows.extend(page)
        if len(page) < page_size:
            return rows
        offset += page_size
