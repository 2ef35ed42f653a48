"""Transport adapters for WireMockQA."""

from wiremockqa.adapters.httpx_transport import HttpxTransport, create_default_transport

__all__ = ["HttpxTransport", "create_default_transport"]
