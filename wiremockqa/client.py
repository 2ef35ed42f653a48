"""Client for the WireMock admin REST API.

AdminClient turns one admin operation into exactly one HTTP round trip through
an injected AdminTransport and decodes the JSON answer.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from wiremockqa.errors import (
    ConnectivityError,
    ErrorCode,
    GatewayError,
    SerializationError,
)
from wiremockqa.near_misses import NearMissLookup
from wiremockqa.ports.transport import (
    AdminTransport,
    TransportError,
    TransportRequest,
    TransportResponse,
)

logger = logging.getLogger(__name__)


class AdminClient:
    """Performs calls against a WireMock admin root.

    Attributes:
        admin_url: Admin root, e.g. ``http://localhost:8080/__admin``.
        transport: Transport used to send every request.
    """

    def __init__(self, admin_url: str, transport: AdminTransport) -> None:
        self.admin_url = admin_url.rstrip("/")
        self.transport = transport

    def url_for(self, endpoint: str) -> str:
        return f"{self.admin_url}/{endpoint.lstrip('/')}"

    def perform(
        self,
        method: str,
        endpoint: str,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Perform one admin call and decode its JSON response.

        Args:
            method: HTTP method (GET, POST, DELETE).
            endpoint: Endpoint relative to the admin root, e.g. ``mappings``.
            data: JSON payload. Only sent when non-empty.

        Returns:
            The decoded response object. Empty when the body is empty, not
            JSON, or not a JSON object.

        Raises:
            SerializationError: If ``data`` cannot be encoded as JSON.
            GatewayError: If the response status is >= 400 or the transport
                failed.
        """
        request = TransportRequest(method=method.upper(), url=self.url_for(endpoint))
        if data:
            request.body = self._encode(data, endpoint)
            request.headers["Content-Type"] = "application/json"

        try:
            response = self.transport.send(request)
        except TransportError as e:
            raise GatewayError(
                f"Failed to communicate with WireMock: {e}",
                cause=e,
                method=request.method,
                endpoint=endpoint,
            ) from e

        logger.debug("%s %s -> %d", request.method, endpoint, response.status_code)

        if response.is_error:
            raise GatewayError(
                f"WireMock request failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
                method=request.method,
                endpoint=endpoint,
            )

        return self._decode(response)

    def health_check(self) -> None:
        """Check that WireMock answers ``GET health`` with status < 400.

        Raises:
            ConnectivityError: If WireMock is unreachable or unhealthy.
        """
        request = TransportRequest(method="GET", url=self.url_for("health"))
        try:
            response = self.transport.send(request)
        except TransportError as e:
            raise ConnectivityError(
                f"Cannot connect to WireMock at {self.admin_url}: {e}",
                cause=e,
                admin_url=self.admin_url,
            ) from e

        if response.is_error:
            raise ConnectivityError(
                f"WireMock health check failed at {request.url}",
                error_code=ErrorCode.HEALTH_CHECK_FAILED,
                admin_url=self.admin_url,
                status_code=response.status_code,
            )

        logger.debug("WireMock healthy at %s", self.admin_url)

    def fetch_near_misses(self, pattern: dict[str, Any]) -> NearMissLookup:
        """Ask WireMock for requests that nearly matched ``pattern``.

        A failed lookup is reported as an unavailable result rather than
        raised.
        """
        try:
            data = self.perform("POST", "near-misses/request", pattern)
        except GatewayError as e:
            logger.debug("Near-miss lookup unavailable: %s", e.message)
            return NearMissLookup.unavailable(e.message)
        return NearMissLookup.from_response(data)

    def _encode(self, data: dict[str, Any], endpoint: str) -> bytes:
        try:
            return json.dumps(data, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Failed to encode request body for {endpoint}: {e}",
                cause=e,
                endpoint=endpoint,
            ) from e

    def _decode(self, response: TransportResponse) -> dict[str, Any]:
        if response.text == "":
            return {}
        try:
            decoded = json.loads(response.text)
        except ValueError:
            logger.debug("Ignoring non-JSON admin response body")
            return {}
        if not isinstance(decoded, dict):
            return {}
        return decoded
