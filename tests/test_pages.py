import pytest

from koban.pages import FETCH_ALL_PAGE_CAP, apply_limit_to_response, collect_pages


def make_fetcher(pages):
    requested = []

    def fetch(page):
        requested.append(page)
        index = page - 1
        rows = pages[index] if index < len(pages) else []
        return {"data": rows}

    return fetch, requested


def test_apply_limit_truncates_data_array():
    value = {"data": [1, 2, 3, 4], "meta": {"x": 1}}
    limited = apply_limit_to_response(value, 2)
    assert limited["data"] == [1, 2]
    assert limited["meta"] == {"x": 1}


def test_apply_limit_truncates_bare_array():
    assert apply_limit_to_response(["a", "b", "c"], 1) == ["a"]


def test_apply_limit_none_returns_value_unchanged():
    value = {"data": [1, 2, 3]}
    assert apply_limit_to_response(value, None) == {"data": [1, 2, 3]}


def test_apply_limit_larger_than_rows_keeps_all():
    assert apply_limit_to_response({"data": [1, 2]}, 10) == {"data": [1, 2]}


def test_apply_limit_leaves_non_list_data_alone():
    value = {"data": {"id": "x"}}
    assert apply_limit_to_response(value, 1) == {"data": {"id": "x"}}


def test_collect_stops_on_short_page():
    pages = [[1, 2], [3, 4], [5]]
    fetch, requested = make_fetcher(pages)
    result = collect_pages(fetch, 1, 2, None)
    assert result["data"] == [1, 2, 3, 4, 5]
    assert requested == [1, 2, 3]
    assert result["meta"]["pages_fetched"] == len(requested)
    assert result["meta"]["page_cap_reached"] is False
    assert result["meta"]["limit"] is None
    assert result["meta"]["page_cap"] == FETCH_ALL_PAGE_CAP


def test_collect_starts_at_given_page():
    pages = [[1, 2], [3, 4], [5]]
    fetch, requested = make_fetcher(pages)
    result = collect_pages(fetch, 2, 2, None)
    assert requested[0] == 2
    assert result["data"] == [3, 4, 5]


def test_collect_stops_when_limit_reached():
    pages = [[1, 2], [3, 4], [5, 6], [7]]
    fetch, requested = make_fetcher(pages)
    result = collect_pages(fetch, 1, 2, 3)
    assert result["data"] == [1, 2, 3]
    assert requested == [1, 2]
    assert result["meta"]["limit"] == 3


def test_collect_limit_exactly_page_boundary():
    pages = [[1, 2], [3, 4], [5]]
    fetch, requested = make_fetcher(pages)
    result = collect_pages(fetch, 1, 2, 2)
    assert result["data"] == [1, 2]
    assert requested == [1]


def test_collect_hits_page_cap():
    def fetch(page):
        return {"data": [page]}

    result = collect_pages(fetch, 1, 1, None)
    assert result["meta"]["pages_fetched"] == FETCH_ALL_PAGE_CAP
    assert result["meta"]["page_cap_reached"] is True
    assert len(result["data"]) == FETCH_ALL_PAGE_CAP


def test_collect_empty_first_page():
    fetch, requested = make_fetcher([])
    result = collect_pages(fetch, 1, 20, None)
    assert result["data"] == []
    assert requested == [1]


def test_collect_accepts_bare_array_pages():
    def fetch(page):
        return ["a"] if page == 1 else []

    result = collect_pages(fetch, 1, 1, None)
    assert result["data"] == ["a"]


def test_collect_propagates_fetch_errors():
    def fetch(page):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        collect_pages(fetch, 1, 20, None)