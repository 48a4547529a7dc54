"""Request paths and bodies for invoice and bulk operations."""

from __future__ import annotations

from typing import Any, Iterable

from koban.invoice import validate_path_segment


def bulk_action_body(
    action: str, ids: Iterable[str], email_type: str | None
) -> dict[str, Any]:
    """Build the JSON body for a bulk action request."""
    body: dict[str, Any] = {"action": action, "ids": list(ids)}
    if email_type is not None:
        body["email_type"] = email_type
    return body


def invoice_action_path(invoice_id: str, action: str) -> str:
    """Path for a single-invoice action, after validating both segments."""
    validate_path_segment("invoice id", invoice_id)
    validate_path_segment("invoice action", action)
    return f"api/v1/invoices/{invoice_id}/{action}"


def invoice_upload_path(invoice_id: str) -> str:
    """Path for uploading documents to an invoice."""
    validate_path_segment("invoice id", invoice_id)
    return f"api/v1/invoices/{invoice_id}/upload"


def download_path(base_path: str, download_id: str, action: str) -> str:
    """Path for a PDF download such as ``download`` or ``delivery_note``."""
    validate_path_segment("download id", download_id)
    return f"{base_path}/{download_id}/{action}"