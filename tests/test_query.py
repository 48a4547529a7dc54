import pytest

from koban.errors import InvalidFilterError, InvalidPayloadError
from koban.query import (
    filter_query,
    include_query,
    sort_query,
    unrecognized_client_status_warning,
    validate_path_ids,
)


def test_include_joins_trimmed_parts():
    assert include_query([" client ", "", "payments"]) == [("include", "client,payments")]


def test_include_empty_gives_nothing():
    assert include_query([]) == []
    assert include_query(["  ", ""]) == []
    assert include_query(None) == []


def test_sort_trimmed():
    assert sort_query("  date|desc ") == [("sort", "date|desc")]


def test_sort_blank_or_missing():
    assert sort_query(None) == []
    assert sort_query("   ") == []


def test_filters_split_on_first_equals():
    assert filter_query(["status_id=gt:1", " name = a=b "]) == [
        ("status_id", "gt:1"),
        ("name", "a=b"),
    ]


@pytest.mark.parametrize("bad", ["novalue", "=x", "  =x"])
def test_invalid_filters(bad):
    with pytest.raises(InvalidFilterError) as info:
        filter_query([bad])
    assert info.value.value == bad


def test_warning_only_for_invoices():
    assert unrecognized_client_status_warning("clients", ["client_status=outstanding"]) is None


def test_no_warning_for_valid_statuses():
    filters = ["client_status=paid,unpaid", "client_status=overdue", "status_id=1"]
    assert unrecognized_client_status_warning("invoices", filters) is None


def test_warning_lists_unknown_values_once():
    warning = unrecognized_client_status_warning(
        "invoices",
        ["client_status=outstanding,paid", " client_status =outstanding,sent", "bogus"],
    )
    assert warning.startswith("warning: --filter client_status=outstanding,sent ")
    assert "all, draft, paid, unpaid, overdue" in warning
    assert warning.endswith("returns all rows.")


def test_validate_path_ids_accepts_safe_ids():
    assert validate_path_ids("invoice id", ["inv_1", "inv-2"]) is None


def test_validate_path_ids_rejects_any_bad_id():
    with pytest.raises(InvalidPayloadError, match="invoice id must be a safe"):
        validate_path_ids("invoice id", ["inv_1", "../etc"])