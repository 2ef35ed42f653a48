"""WireMock test adapter.

Drives a running WireMock server through its admin API: create stubs, verify
recorded requests and clean up state between tests.

Installation:
    Run WireMock via Docker:
    docker run -d -p 8080:8080 wiremock/wiremock

Example:
    >>> from wiremockqa import WireMock, WireMockSettings
    >>> wiremock = WireMock.connect(WireMockSettings(host="localhost", port=8080))
    >>> wiremock.create_stub("GET", "/api/users", body={"users": []})
    >>> # ... exercise the system under test ...
    >>> wiremock.see_request("GET", "/api/users")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from wiremockqa.adapters.httpx_transport import create_default_transport
from wiremockqa.client import AdminClient
from wiremockqa.config.settings import CleanupPolicy, WireMockSettings
from wiremockqa.errors import (
    ConnectivityError,
    ErrorCode,
    ProtocolError,
    VerificationError,
)
from wiremockqa.mappings import build_request_pattern, build_stub_mapping
from wiremockqa.near_misses import format_near_misses
from wiremockqa.ports.transport import AdminTransport

logger = logging.getLogger(__name__)


class WireMock:
    """Adapter for a WireMock mock server.

    Nothing is sent until initialize() has confirmed the server is healthy;
    operations called before that raise ConnectivityError.

    Attributes:
        settings: Validated connection and cleanup settings.
        client: Admin API client built from the settings and transport.
    """

    def __init__(self, settings: WireMockSettings, transport: AdminTransport) -> None:
        """Initialize the adapter without contacting the server.

        Args:
            settings: Connection and cleanup settings.
            transport: Transport used for every admin call.
        """
        self.settings = settings
        self.client = AdminClient(settings.admin_url, transport)
        self._initialized = False

    @classmethod
    def connect(
        cls,
        settings: WireMockSettings,
        transport: AdminTransport | None = None,
    ) -> WireMock:
        """Create an adapter and verify the server is reachable.

        Args:
            settings: Connection and cleanup settings.
            transport: Transport to use. Defaults to the httpx transport from
                create_default_transport().

        Raises:
            ConnectivityError: If the health check fails.
        """
        wiremock = cls(settings, transport or create_default_transport(settings))
        try:
            wiremock.initialize()
        except ConnectivityError:
            wiremock.close()
            raise
        return wiremock

    def initialize(self) -> None:
        """Run the health check and make the adapter usable.

        Raises:
            ConnectivityError: If WireMock is unreachable or unhealthy.
        """
        self._initialized = False
        self.client.health_check()
        self._initialized = True
        logger.info("Connected to WireMock at %s", self.settings.admin_url)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _admin(self) -> AdminClient:
        if not self._initialized:
            raise ConnectivityError(
                "WireMock adapter is not initialized; call initialize() first",
                error_code=ErrorCode.NOT_INITIALIZED,
                admin_url=self.settings.admin_url,
            )
        return self.client

    # Lifecycle hooks

    def before_suite(self) -> None:
        if self.settings.cleanup_before == CleanupPolicy.SUITE:
            self.cleanup()

    def before_test(self) -> None:
        if self.settings.cleanup_before == CleanupPolicy.TEST:
            self.cleanup()

    def cleanup(self) -> None:
        """Clean WireMock state according to ``preserve_file_mappings``."""
        if self.settings.preserve_file_mappings:
            self.reset()
        else:
            self.full_reset()

    # Stubbing

    def create_stub(
        self,
        method: str,
        url: str,
        status: int = 200,
        body: Any = "",
        headers: Mapping[str, str] | None = None,
        request_matchers: Mapping[str, Any] | None = None,
    ) -> str:
        """Create a stub mapping.

        Args:
            method: HTTP method to match.
            url: URL to match. Keyed as ``urlPath`` when ``request_matchers``
                has queryParameters and no explicit URL matcher.
            status: Response status code.
            body: Response body. Strings are sent verbatim, anything else as
                JSON.
            headers: Response headers.
            request_matchers: Extra request matchers (bodyPatterns, headers,
                queryParameters, urlPath, ...). These win over the defaults.

        Returns:
            ID of the created stub mapping.

        Raises:
            ProtocolError: If WireMock did not return a mapping ID.
        """
        mapping = build_stub_mapping(method, url, status, body, headers, request_matchers)
        response = self._admin().perform("POST", "mappings", mapping)

        stub_id = response.get("id")
        if not isinstance(stub_id, str):
            raise ProtocolError(
                "Failed to create stub mapping: no ID returned",
                method=method.upper(),
                url=url,
            )

        logger.debug("Created stub: %s %s -> %d (%s)", method.upper(), url, status, stub_id)
        return stub_id

    have_http_stub_for = create_stub

    # Verification

    def see_request(
        self,
        method: str,
        url: str,
        extra_matchers: Mapping[str, Any] | None = None,
    ) -> None:
        """Assert that at least one matching request was received.

        The failure message lists up to three near misses when WireMock can
        provide them.

        Raises:
            VerificationError: If no matching request was recorded.
        """
        pattern = build_request_pattern(method, url, extra_matchers)
        count = self.grab_request_count(pattern)

        if count == 0:
            message = f"Expected request not found: {method.upper()} {url}"
            lookup = self._admin().fetch_near_misses(pattern)
            if lookup.has_suggestions:
                message = f"{message}\n\nNear misses found:\n{format_near_misses(lookup.near_misses)}"
            raise VerificationError(
                message,
                expected="at least 1",
                actual=0,
                near_misses=lookup.near_misses,
                pattern=pattern,
            )

        logger.debug("Request verified: %s %s (found %d match(es))", method.upper(), url, count)

    def dont_see_request(
        self,
        method: str,
        url: str,
        extra_matchers: Mapping[str, Any] | None = None,
    ) -> None:
        """Assert that no matching request was received.

        Raises:
            VerificationError: If a matching request was recorded.
        """
        pattern = build_request_pattern(method, url, extra_matchers)
        count = self.grab_request_count(pattern)

        if count > 0:
            raise VerificationError(
                f"Unexpected request found: {method.upper()} {url} (found {count} match(es))",
                error_code=ErrorCode.UNEXPECTED_REQUEST,
                expected=0,
                actual=count,
                pattern=pattern,
            )

        logger.debug("Request not found (as expected): %s %s", method.upper(), url)

    see_http_request = see_request
    dont_see_http_request = dont_see_request

    def see_request_count(self, expected_count: int, request_pattern: Mapping[str, Any]) -> None:
        """Assert the exact number of requests matching ``request_pattern``.

        Raises:
            VerificationError: If the recorded count differs.
        """
        actual_count = self.grab_request_count(request_pattern)

        if actual_count != expected_count:
            raise VerificationError(
                f"Expected {expected_count} request(s), but found {actual_count}",
                error_code=ErrorCode.COUNT_MISMATCH,
                expected=expected_count,
                actual=actual_count,
                pattern=dict(request_pattern),
            )

        logger.debug("Request count verified: %d match(es)", actual_count)

    def grab_request_count(self, request_pattern: Mapping[str, Any]) -> int:
        """Count recorded requests matching ``request_pattern``.

        Returns 0 when WireMock's answer has no integer ``count``.
        """
        response = self._admin().perform("POST", "requests/count", dict(request_pattern))
        count = response.get("count", 0)
        if isinstance(count, bool) or not isinstance(count, int):
            return 0
        return count

    # Request journal

    def grab_all_requests(self) -> list[dict[str, Any]]:
        """Get every request in WireMock's journal."""
        return self._requests_from(self._admin().perform("GET", "requests"))

    def grab_unmatched_requests(self) -> list[dict[str, Any]]:
        """Get the journaled requests that matched no stub."""
        return self._requests_from(self._admin().perform("GET", "requests/unmatched"))

    @staticmethod
    def _requests_from(response: dict[str, Any]) -> list[dict[str, Any]]:
        requests = response.get("requests", [])
        if not isinstance(requests, list):
            return []
        return requests

    # State management

    def reset(self) -> None:
        """Restore the default stub mappings, keeping file-based ones."""
        self._admin().perform("POST", "mappings/reset")
        logger.debug("Reset to default state")

    def full_reset(self) -> None:
        """Drop all stub mappings and clear the request journal."""
        self._admin().perform("POST", "reset")
        logger.debug("Full reset: mappings and request journal cleared")

    def clear_requests(self) -> None:
        """Clear the request journal without touching stub mappings."""
        self._admin().perform("DELETE", "requests")
        logger.debug("Cleared request journal")

    send_reset = reset
    send_clear_requests = clear_requests

    def close(self) -> None:
        """Close the transport."""
        self.client.transport.close()
        self._initialized = False

    def __enter__(self) -> WireMock:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
