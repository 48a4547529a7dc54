"""Query-string helpers for list and show requests."""

from __future__ import annotations

from typing import Iterable

from koban.errors import InvalidFilterError
from koban.invoice import validate_path_segment

VALID_INVOICE_CLIENT_STATUSES = ("all", "draft", "paid", "unpaid", "overdue")


def include_query(include: Iterable[str] | None) -> list[tuple[str, str]]:
    """Join non-empty include names into a single ``include`` pair."""
    parts = [part.strip() for part in include or () if part.strip()]
    return [("include", ",".join(parts))] if parts else []


def sort_query(sort: str | None) -> list[tuple[str, str]]:
    """Return a ``sort`` pair for a non-blank sort expression."""
    if sort is None or not sort.strip():
        return []
    return [("sort", sort.strip())]


def filter_query(filters: Iterable[str]) -> list[tuple[str, str]]:
    """Turn ``key=value`` filters into query pairs."""
    query = []
    for item in filters:
        key, separator, value = item.partition("=")
        key = key.strip()
        if not separator or not key:
            raise InvalidFilterError(item)
        query.append((key, value.strip()))
    return query


def unrecognized_client_status_warning(
    resource_path: str, filters: Iterable[str]
) -> str | None:
    """Warn about invoice ``client_status`` filter values the API ignores.

    Invoice Ninja returns every row for an unknown value, so such a filter
    looks applied but is not. Only invoices are checked.
    """
    if resource_path != "invoices":
        return None
    unknown: list[str] = []
    for item in filters:
        key, separator, value = item.partition("=")
        if not separator or key.strip() != "client_status":
            continue
        for candidate in (part.strip() for part in value.split(",")):
            if (
                candidate
                and candidate not in VALID_INVOICE_CLIENT_STATUSES
                and candidate not in unknown
            ):
                unknown.append(candidate)
    if not unknown:
        return None
    return (
        f"warning: --filter client_status={','.join(unknown)} is not a recognized "
        f"invoice status (use one of: {', '.join(VALID_INVOICE_CLIENT_STATUSES)}); "
        "Invoice Ninja silently ignores unknown values and returns all rows."
    )


def validate_path_ids(label: str, ids: Iterable[str]) -> None:
    """Validate every id as a safe single path segment."""
    for item in ids:
        validate_path_segment(label, item)