"""Error types for WireMockQA."""

from wiremockqa.errors.base import (
    ConfigurationError,
    ConnectivityError,
    ErrorCode,
    GatewayError,
    ProtocolError,
    SerializationError,
    VerificationError,
    WireMockQAError,
)

__all__ = [
    "ErrorCode",
    "WireMockQAError",
    "ConnectivityError",
    "GatewayError",
    "SerializationError",
    "ProtocolError",
    "ConfigurationError",
    "VerificationError",
]
