"""Transport port for WireMockQA.

The adapter never talks to the network directly. It hands a TransportRequest
to an AdminTransport and interprets the TransportResponse it gets back, so any
HTTP stack can be plugged in.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class TransportError(Exception):
    """Raised by transports when no HTTP response could be obtained.

    Covers refused connections, DNS and TLS failures and timeouts. An HTTP
    error status is a valid response and must not raise this.
    """


@dataclass
class TransportRequest:
    """A single outgoing HTTP request."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass
class TransportResponse:
    """The HTTP response to a TransportRequest."""

    status_code: int
    text: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400


class AdminTransport(ABC):
    """Abstract port for sending one HTTP request and reading its response.

    Implementations must be blocking: send() returns only once the whole
    response body has been read.
    """

    @abstractmethod
    def send(self, request: TransportRequest) -> TransportResponse:
        """Send a request.

        Args:
            request: The request to send.

        Returns:
            The response, whatever its status code.

        Raises:
            TransportError: If no response could be obtained.
        """
        ...

    def close(self) -> None:
        """Release any resources held by the transport."""

    def __enter__(self) -> AdminTransport:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
