import pytest

from koban.endpoints import (
    EndpointRequest,
    HttpMethod,
    default_method,
    is_scoped_query_endpoint,
    plan_endpoint_request,
    validate_endpoint_path,
)
from koban.errors import InvalidRequestError


@pytest.mark.parametrize("path", ["search", "reports/profit_loss", "health-check", "a_b/c-d"])
def test_safe_endpoint_paths(path):
    assert validate_endpoint_path(path) is None
    assert plan_endpoint_request("ping", path, HttpMethod.GET, None, None).path == f"api/v1/{path}"


@pytest.mark.parametrize("path", ["", "/ping", "reports/../users", "ping?x=1", "pïng", "a b"])
def test_unsafe_endpoint_paths(path):
    with pytest.raises(InvalidRequestError, match="relative /api/v1 path"):
        validate_endpoint_path(path)


@pytest.mark.parametrize(
    "method, label",
    [
        (HttpMethod.GET, "GET"),
        (HttpMethod.POST, "POST"),
        (HttpMethod.PUT, "PUT"),
        (HttpMethod.DELETE, "DELETE"),
    ],
)
def test_method_labels(method, label):
    request = plan_endpoint_request("search", None, method, {}, None)
    assert request.method.label() == label
    assert request.path == "api/v1/search"


def test_default_method():
    assert default_method("ping") is HttpMethod.GET
    assert default_method("search") is HttpMethod.POST
    assert default_method("reports") is HttpMethod.POST


@pytest.mark.parametrize(
    "default, endpoint, expected",
    [
        ("reports", "reports/clients", True),
        ("charts", "charts/totals", True),
        ("reports", "charts/totals", False),
        ("search", "search/more", False),
        ("reports", "reports", False),
    ],
)
def test_scoped_query_endpoint(default, endpoint, expected):
    assert is_scoped_query_endpoint(default, endpoint) is expected


def test_default_search_posts_body():
    request = plan_endpoint_request("search", None, None, {"query": "acme"}, None)
    assert request == EndpointRequest(
        method=HttpMethod.POST, path="api/v1/search", query=[], body={"query": "acme"}
    )
    assert request.preview_body == {"query": "acme"}
    assert request.confirmation_operation == "endpoint post"


def test_ping_defaults_to_get_without_confirmation():
    request = plan_endpoint_request("ping", None, None, {}, None)
    assert request.method is HttpMethod.GET
    assert request.path == "api/v1/ping"
    assert request.confirmation_operation is None
    assert request.preview_body is None


def test_custom_endpoint_must_be_read_only():
    with pytest.raises(InvalidRequestError, match="read-only"):
        plan_endpoint_request("ping", "users", HttpMethod.POST, {}, None)


def test_scoped_custom_endpoint_may_post():
    request = plan_endpoint_request("reports", "reports/clients", None, {"a": 1}, None)
    assert request.method is HttpMethod.POST
    assert request.path == "api/v1/reports/clients"


@pytest.mark.parametrize("method", [HttpMethod.GET, HttpMethod.DELETE])
def test_body_rejected_for_get_and_delete(method):
    with pytest.raises(InvalidRequestError, match=f"{method.label()} endpoint commands"):
        plan_endpoint_request("search", None, method, {"query": "acme"}, None)


def test_include_is_trimmed_and_joined():
    request = plan_endpoint_request("ping", None, None, None, [" client ", "", "invoices"])
    assert request.query == [("include", "client,invoices")]


def test_empty_post_body_is_kept_but_not_previewed():
    request = plan_endpoint_request("charts", None, HttpMethod.PUT, {}, None)
    assert request.body == {}
    assert request.has_body is False
    assert request.confirmation_operation == "endpoint put"