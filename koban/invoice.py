"""Invoice trigger flags, write-safety checks and dry-run previews."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, fields
from typing import Any, Iterable, Sequence

from koban.errors import (
    ConfirmationRequiredError,
    DecodeError,
    InvalidPayloadError,
)

_SEGMENT_CHARS = re.compile(r"[A-Za-z0-9_-]+")

_BOOL_TRIGGERS_BEFORE_AMOUNT = ("send_email", "mark_sent", "paid")
_BOOL_TRIGGERS_AFTER_AMOUNT = (
    "cancel",
    "save_default_footer",
    "save_default_terms",
    "retry_e_send",
)


@dataclass(frozen=True)
class WriteSafety:
    """Flags that guard a mutating request."""

    dry_run: bool = False
    yes: bool = False


@dataclass(frozen=True)
class InvoiceTriggers:
    """State-changing query flags sent along with an invoice save."""

    send_email: bool = False
    mark_sent: bool = False
    paid: bool = False
    amount_paid: str | None = None
    cancel: bool = False
    save_default_footer: bool = False
    save_default_terms: bool = False
    retry_e_send: bool = False

    def has_any(self) -> bool:
        """True when at least one trigger is set."""
        return any(
            getattr(self, item.name) is not None
            if item.name == "amount_paid"
            else bool(getattr(self, item.name))
            for item in fields(self)
        )

    def requires_confirmation(self) -> bool:
        """Every trigger changes invoice state, so any trigger needs confirmation."""
        return self.has_any()


def require_confirmation(operation: str, safety: WriteSafety) -> None:
    """Raise unless the mutation is a dry run or was confirmed with --yes."""
    if not (safety.dry_run or safety.yes):
        raise ConfirmationRequiredError(operation)


def validate_invoice_triggers(triggers: InvoiceTriggers) -> None:
    """Reject trigger combinations the API cannot honour."""
    if triggers.amount_paid is not None and not triggers.paid:
        raise InvalidPayloadError("--amount-paid requires --paid")


def validate_path_segment(label: str, value: str) -> None:
    """Raise unless ``value`` is a single safe URL path segment."""
    is_safe = (
        bool(value)
        and value not in (".", "..")
        and _SEGMENT_CHARS.fullmatch(value) is not None
    )
    if not is_safe:
        raise InvalidPayloadError(f"{label} must be a safe single path segment")


def invoice_trigger_query(triggers: InvoiceTriggers) -> list[tuple[str, str]]:
    """Return the query pairs that carry the set triggers, in API order."""
    query = [
        (name, "true") for name in _BOOL_TRIGGERS_BEFORE_AMOUNT if getattr(triggers, name)
    ]
    if triggers.amount_paid is not None:
        query.append(("amount_paid", triggers.amount_paid))
    query.extend(
        (name, "true") for name in _BOOL_TRIGGERS_AFTER_AMOUNT if getattr(triggers, name)
    )
    return query


def render_dry_run(
    method: str,
    path: str,
    query: Iterable[tuple[str, str]],
    body: Any,
    files: Sequence[str | os.PathLike[str]] | None,
) -> str:
    """Render a pretty JSON preview of a request without sending it."""
    preview = {
        "dry_run": True,
        "method": method,
        "path": path,
        "query": [{"key": key, "value": value} for key, value in query],
        "body": body,
        "files": None if files is None else [os.fspath(file) for file in files],
    }
    try:
        return json.dumps(preview, indent=2, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError) as error:
        raise DecodeError(str(error)) from error