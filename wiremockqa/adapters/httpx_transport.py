"""httpx-backed transport for the WireMock admin API.

Example:
    >>> from wiremockqa.adapters import HttpxTransport
    >>> from wiremockqa.ports import TransportRequest
    >>> transport = HttpxTransport(timeout=5.0)
    >>> response = transport.send(
    ...     TransportRequest("GET", "http://localhost:8080/__admin/health")
    ... )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from wiremockqa.ports.transport import (
    AdminTransport,
    TransportError,
    TransportRequest,
    TransportResponse,
)

if TYPE_CHECKING:
    from wiremockqa.config.settings import WireMockSettings

logger = logging.getLogger(__name__)


class HttpxTransport(AdminTransport):
    """Transport that sends admin requests with an httpx.Client.

    Attributes:
        timeout: Request timeout in seconds, used when the client is created
            here.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
        verify: bool = True,
    ) -> None:
        """Initialize the transport.

        Args:
            client: Existing client to send requests with. It is not closed
                by close(); the caller keeps ownership.
            timeout: Request timeout in seconds for a client created here.
            verify: Whether a client created here verifies TLS certificates.
        """
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, verify=verify)

    def send(self, request: TransportRequest) -> TransportResponse:
        try:
            resp = self._client.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.HTTPError as e:
            logger.debug("Transport failure for %s %s: %s", request.method, request.url, e)
            raise TransportError(str(e) or type(e).__name__) from e

        return TransportResponse(
            status_code=resp.status_code,
            text=resp.text,
            headers=dict(resp.headers),
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


def create_default_transport(settings: WireMockSettings) -> HttpxTransport:
    """Build the reference transport for the given settings."""
    return HttpxTransport(timeout=settings.timeout, verify=settings.verify_tls)
