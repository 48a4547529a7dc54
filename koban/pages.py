"""Row limiting and multi-page collection for list responses."""

from __future__ import annotations

import copy
from typing import Any, Callable

FETCH_ALL_PAGE_CAP = 100


def _response_rows(value: Any) -> list[Any]:
    """Return the rows of a list response: its ``data`` array or the array itself."""
    if isinstance(value, dict):
        data = value.get("data")
        return list(data) if isinstance(data, list) else []
    if isinstance(value, list):
        return list(value)
    return []


def apply_limit_to_response(value: Any, limit: int | None) -> Any:
    """Truncate the rows of a list response to at most ``limit`` entries.

    The ``data`` array of an object response is truncated, or the response
    itself when it is a bare array. Anything else is returned unchanged.
    """
    if limit is None:
        return value
    if isinstance(value, dict) and isinstance(value.get("data"), list):
        limited = copy.copy(value)
        limited["data"] = value["data"][:limit]
        return limited
    if isinstance(value, list):
        return value[:limit]
    return value


def collect_pages(
    fetch_page: Callable[[int], Any],
    start_page: int,
    per_page: int,
    limit: int | None,
) -> dict[str, Any]:
    """Fetch pages from ``start_page`` until a short page, the limit or the page cap.

    ``fetch_page`` is called with each page number and returns that page's
    JSON response. The collected rows come back under ``data`` with a
    ``meta`` object describing how the walk ended.
    """
    page = start_page
    pages_fetched = 0
    page_cap_reached = False
    rows: list[Any] = []

    def limit_reached() -> bool:
        return limit is not None and len(rows) >= limit

    while True:
        page_rows = _response_rows(fetch_page(page))
        pages_fetched += 1

        for row in page_rows:
            if limit_reached():
                break
            rows.append(row)

        if len(page_rows) < per_page or limit_reached():
            break
        if pages_fetched >= FETCH_ALL_PAGE_CAP:
            page_cap_reached = True
            break
        page += 1

    return {
        "data": rows,
        "meta": {
            "pages_fetched": pages_fetched,
            "page_cap": FETCH_ALL_PAGE_CAP,
            "page_cap_reached": page_cap_reached,
            "limit": limit,
        },
    }