"""WireMockQA - drive and verify a WireMock server from your tests.

WireMockQA is a thin adapter over WireMock's admin REST API. It creates stub
mappings, verifies recorded requests against match patterns and cleans up
state between tests. All request matching happens inside WireMock.

Example:
    >>> from wiremockqa import WireMock, load_settings
    >>>
    >>> wiremock = WireMock.connect(load_settings(host="localhost", port=8080))
    >>> wiremock.create_stub("GET", "/api/test", 200, "Hello World")
    >>> # ... call the system under test ...
    >>> wiremock.see_request("GET", "/api/test")
    >>> wiremock.see_request_count(1, {"method": "GET", "url": "/api/test"})
    >>> wiremock.clear_requests()
    >>> wiremock.dont_see_request("GET", "/api/test")

With pytest, request the ``wiremock`` fixture instead; it connects once per
session and cleans up according to ``cleanup_before``.
"""

from wiremockqa.adapters import HttpxTransport, create_default_transport
from wiremockqa.client import AdminClient
from wiremockqa.config import CleanupPolicy, WireMockSettings, load_settings
from wiremockqa.errors import (
    ConfigurationError,
    ConnectivityError,
    ErrorCode,
    GatewayError,
    ProtocolError,
    SerializationError,
    VerificationError,
    WireMockQAError,
)
from wiremockqa.mappings import (
    URL_MATCHER_KEYS,
    build_request_pattern,
    build_response_definition,
    build_stub_mapping,
    determine_url_key,
)
from wiremockqa.module import WireMock
from wiremockqa.near_misses import NearMissLookup, format_near_misses
from wiremockqa.ports import (
    AdminTransport,
    TransportError,
    TransportRequest,
    TransportResponse,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Adapter
    "WireMock",
    "AdminClient",
    # Configuration
    "CleanupPolicy",
    "WireMockSettings",
    "load_settings",
    # Transport
    "AdminTransport",
    "HttpxTransport",
    "TransportError",
    "TransportRequest",
    "TransportResponse",
    "create_default_transport",
    # Builders
    "URL_MATCHER_KEYS",
    "build_request_pattern",
    "build_response_definition",
    "build_stub_mapping",
    "determine_url_key",
    # Diagnostics
    "NearMissLookup",
    "format_near_misses",
    # Errors
    "ErrorCode",
    "WireMockQAError",
    "ConfigurationError",
    "ConnectivityError",
    "GatewayError",
    "ProtocolError",
    "SerializationError",
    "VerificationError",
]
