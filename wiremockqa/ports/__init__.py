"""Ports (abstract interfaces) for WireMockQA."""

from wiremockqa.ports.transport import (
    AdminTransport,
    TransportError,
    TransportRequest,
    TransportResponse,
)

__all__ = [
    "AdminTransport",
    "TransportError",
    "TransportRequest",
    "TransportResponse",
]
