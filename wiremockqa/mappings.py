"""Builders for WireMock stub mappings and request patterns.

Pure functions: nothing here performs I/O. The admin client sends what these
return.

Example:
    >>> build_request_pattern("get", "/api/weather", {"queryParameters": {"q": {"equalTo": "x"}}})
    {'method': 'GET', 'urlPath': '/api/weather', 'queryParameters': {'q': {'equalTo': 'x'}}}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

URL_MATCHER_KEYS = ("url", "urlPath", "urlPattern", "urlPathPattern")

JSON_CONTENT_TYPE = "application/json"


def has_explicit_url_key(matchers: Mapping[str, Any]) -> bool:
    """Whether the caller already chose one of the URL matcher keys."""
    return any(key in matchers for key in URL_MATCHER_KEYS)


def determine_url_key(matchers: Mapping[str, Any]) -> str:
    """Choose the URL matcher key to use when the caller did not pick one.

    An exact ``url`` match includes the query string, which would conflict
    with separate ``queryParameters`` matchers, so those get ``urlPath``.

    Args:
        matchers: Request matchers supplied by the caller.

    Returns:
        ``"url"`` or ``"urlPath"``. Always ``"url"`` when the caller already
        supplied one of the URL matcher keys.
    """
    if "queryParameters" in matchers and not has_explicit_url_key(matchers):
        return "urlPath"
    return "url"


def build_request_pattern(
    method: str,
    url: str,
    matchers: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a request pattern for stubbing or verification.

    The caller's matchers are merged over the defaults. When they contain a
    URL matcher key it is used verbatim and ``url`` is not added.

    Args:
        method: HTTP method, any case.
        url: URL (or path) to match.
        matchers: Extra matchers such as bodyPatterns, headers,
            queryParameters or an explicit urlPath.

    Returns:
        The request pattern as a new dict.
    """
    matchers = matchers or {}
    pattern: dict[str, Any] = {"method": method.upper()}
    if not has_explicit_url_key(matchers):
        pattern[determine_url_key(matchers)] = url
    pattern.update(matchers)
    return pattern


def build_response_definition(
    status: int = 200,
    body: Any = "",
    headers: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Build the response half of a stub mapping.

    A structured body (anything but a string) becomes ``jsonBody`` and gets a
    JSON Content-Type unless one was given. A non-empty string becomes
    ``body``. An empty string or None leaves the response body empty.
    """
    response_headers = dict(headers or {})
    response: dict[str, Any] = {
        "status": status,
        "headers": response_headers,
    }

    if body is None or body == "":
        return response

    if isinstance(body, str):
        response["body"] = body
    else:
        if "Content-Type" not in response_headers:
            response_headers["Content-Type"] = JSON_CONTENT_TYPE
        response["jsonBody"] = body

    return response


def build_stub_mapping(
    method: str,
    url: str,
    status: int = 200,
    body: Any = "",
    headers: Mapping[str, str] | None = None,
    request_matchers: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a complete stub mapping ready for ``POST mappings``."""
    return {
        "request": build_request_pattern(method, url, request_matchers),
        "response": build_response_definition(status, body, headers),
    }
