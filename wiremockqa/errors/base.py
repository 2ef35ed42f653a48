"""Exception hierarchy for WireMockQA.

Every error raised by the package inherits from WireMockQAError and carries:
- error_code: An ErrorCode enum for programmatic handling
- context: Free-form details about the failing admin call
- suggestions: Actionable steps to resolve the issue
- cause: The underlying exception, when there is one

Example:
    try:
        wiremock.see_request("GET", "/api/users")
    except VerificationError as e:
        print(e.format_verbose())
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for WireMockQA.

    Error codes are organized by category:
    - E0xx: Connectivity errors
    - E1xx: Admin API gateway errors
    - E2xx: Payload errors (serialization, protocol)
    - E3xx: Configuration errors
    - E4xx: Verification failures
    """

    # Connectivity errors (E0xx)
    CONNECTION_FAILED = "E001"
    HEALTH_CHECK_FAILED = "E002"
    NOT_INITIALIZED = "E003"

    # Gateway errors (E1xx)
    ADMIN_REQUEST_FAILED = "E101"
    TRANSPORT_FAILED = "E102"

    # Payload errors (E2xx)
    SERIALIZATION_FAILED = "E201"
    PROTOCOL_VIOLATION = "E202"

    # Configuration errors (E3xx)
    INVALID_CONFIG = "E301"

    # Verification errors (E4xx)
    REQUEST_NOT_FOUND = "E401"
    UNEXPECTED_REQUEST = "E402"
    COUNT_MISMATCH = "E403"

    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 100:
            return "connectivity"
        elif code_num < 200:
            return "gateway"
        elif code_num < 300:
            return "payload"
        elif code_num < 400:
            return "configuration"
        elif code_num < 500:
            return "verification"
        else:
            return "unknown"


class WireMockQAError(Exception):
    """Base exception for all WireMockQA errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: Extra details (endpoint, status code, pattern, ...)
        suggestions: List of actionable steps to resolve the issue
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        cause: Exception | None = None,
        suggestions: list[str] | None = None,
        **context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.cause = cause
        self.context: dict[str, Any] = dict(context)
        self._suggestions = suggestions
        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message}"

    def format_verbose(self) -> str:
        """Format error with full details including suggestions."""
        lines = [f"Error [{self.error_code.value}]: {self.message}"]

        if self.context:
            lines.append("")
            for key, value in self.context.items():
                lines.append(f"{key}: {value}")

        if self.cause is not None:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "suggestions": self.suggestions,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
        }


class ConnectivityError(WireMockQAError):
    """WireMock cannot be reached or did not report itself healthy.

    Raised while initializing; the adapter is unusable afterwards until a
    later initialize() succeeds.
    """

    error_code = ErrorCode.CONNECTION_FAILED
    default_message = "Cannot connect to WireMock"
    default_suggestions = [
        "Verify WireMock is running (try: curl <admin_url>/health)",
        "Check host, port, protocol and adminPath in the configuration",
        "If using Docker: docker run -d -p 8080:8080 wiremock/wiremock",
    ]


class GatewayError(WireMockQAError):
    """An admin API call failed.

    Either WireMock answered with status >= 400 (status_code and body are
    set) or the transport itself failed (status_code is None).
    """

    error_code = ErrorCode.ADMIN_REQUEST_FAILED
    default_message = "WireMock admin request failed"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.status_code = status_code
        self.body = body
        if status_code is None:
            kwargs.setdefault("error_code", ErrorCode.TRANSPORT_FAILED)
            kwargs.setdefault(
                "suggestions",
                [
                    "Check that WireMock is still running",
                    "Increase the transport timeout if the server is slow",
                ],
            )
        else:
            kwargs.setdefault("suggestions", self._suggestions_for_status(status_code))
        super().__init__(message=message, **kwargs)

    def _suggestions_for_status(self, status_code: int) -> list[str]:
        if status_code == 404:
            return [
                "Verify adminPath matches the server's admin root",
                "Check the WireMock version supports this admin endpoint",
            ]
        elif status_code in (400, 422):
            return [
                "Check the stub mapping or request pattern is valid WireMock JSON",
                "Only one of url, urlPath, urlPattern, urlPathPattern may be used",
            ]
        elif 500 <= status_code < 600:
            return ["Check the WireMock server logs for details"]
        return [f"Received HTTP {status_code} from the admin API"]

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        result["body"] = self.body
        return result


class SerializationError(WireMockQAError):
    """An outgoing admin payload could not be encoded as JSON."""

    error_code = ErrorCode.SERIALIZATION_FAILED
    default_message = "Admin request payload is not JSON serializable"
    default_suggestions = [
        "Pass only dicts, lists, strings, numbers, booleans and None",
    ]


class ProtocolError(WireMockQAError):
    """WireMock answered successfully but with an unexpected shape."""

    error_code = ErrorCode.PROTOCOL_VIOLATION
    default_message = "Unexpected response from WireMock admin API"


class ConfigurationError(WireMockQAError):
    """Configuration is missing or invalid."""

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid WireMock configuration"
    default_suggestions = [
        "host and port are required (or set WIREMOCK_HOST / WIREMOCK_PORT)",
        "cleanupBefore must be one of: never, test, suite",
        "protocol must be http or https",
    ]


class VerificationError(WireMockQAError, AssertionError):
    """A request verification did not hold.

    Subclasses AssertionError so test runners report it as a failure rather
    than an error.
    """

    error_code = ErrorCode.REQUEST_NOT_FOUND
    default_message = "Request verification failed"

    def __init__(
        self,
        message: str | None = None,
        expected: Any = None,
        actual: Any = None,
        near_misses: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        self.expected = expected
        self.actual = actual
        self.near_misses = near_misses or []
        super().__init__(message=message, **kwargs)

    def __str__(self) -> str:
        return self.message
