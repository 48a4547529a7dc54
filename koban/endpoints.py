"""Planning of requests to named /api/v1 endpoints."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Iterable

from koban.errors import InvalidRequestError

_ENDPOINT_CHARS = re.compile(r"[A-Za-z0-9_/-]+")


class HttpMethod(enum.Enum):
    """HTTP method used for an endpoint request."""

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"

    def label(self) -> str:
        return self.name


def validate_endpoint_path(path: str) -> None:
    """Raise InvalidRequestError unless ``path`` is a safe relative path."""
    is_safe = (
        bool(path)
        and not path.startswith("/")
        and ".." not in path
        and _ENDPOINT_CHARS.fullmatch(path) is not None
    )
    if not is_safe:
        raise InvalidRequestError("endpoint must be a relative /api/v1 path")


def default_method(default_endpoint: str) -> HttpMethod:
    return HttpMethod.GET if default_endpoint == "ping" else HttpMethod.POST


def is_scoped_query_endpoint(default_endpoint: str, endpoint: str) -> bool:
    """True when a custom endpoint stays inside the reports or charts family."""
    return (default_endpoint == "reports" and endpoint.startswith("reports/")) or (
        default_endpoint == "charts" and endpoint.startswith("charts/")
    )


@dataclass(frozen=True)
class EndpointRequest:
    """A validated endpoint request ready to send or preview."""

    method: HttpMethod
    path: str
    query: list[tuple[str, str]] = field(default_factory=list)
    body: Any = field(default_factory=dict)

    @property
    def has_body(self) -> bool:
        return isinstance(self.body, dict) and bool(self.body)

    @property
    def preview_body(self) -> Any:
        """The body to show in a dry-run preview, or None when empty."""
        return self.body if self.has_body else None

    @property
    def confirmation_operation(self) -> str | None:
        """Operation name needing confirmation, or None for reads."""
        if self.method is HttpMethod.GET:
            return None
        return f"endpoint {self.method.label().lower()}"


def _include_query(include: Iterable[str] | None) -> list[tuple[str, str]]:
    parts = [part.strip() for part in include or () if part.strip()]
    return [("include", ",".join(parts))] if parts else []


def plan_endpoint_request(
    default_endpoint: str,
    endpoint: str | None,
    method: HttpMethod | None,
    body: Any,
    include: Iterable[str] | None,
) -> EndpointRequest:
    """Validate an endpoint run and return the request to make."""
    custom_endpoint = endpoint is not None
    target = endpoint if endpoint is not None else default_endpoint
    validate_endpoint_path(target)
    chosen = method if method is not None else default_method(default_endpoint)

    if (
        custom_endpoint
        and not is_scoped_query_endpoint(default_endpoint, target)
        and chosen is not HttpMethod.GET
    ):
        raise InvalidRequestError(
            "custom and utility endpoint runners are read-only; use --method get"
        )

    request = EndpointRequest(
        method=chosen,
        path=f"api/v1/{target}",
        query=_include_query(include),
        body={} if body is None else body,
    )
    if request.has_body and chosen in (HttpMethod.GET, HttpMethod.DELETE):
        raise InvalidRequestError(
            f"{chosen.label()} endpoint commands do not send request bodies; "
            "use --method post or --method put for payload fields"
        )
    return request