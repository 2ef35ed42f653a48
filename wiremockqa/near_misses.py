"""Near-miss diagnostics for failed request verifications.

WireMock's ``near-misses/request`` endpoint lists the recorded requests that
came closest to a pattern. They are only used to make failure messages more
helpful.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

MAX_NEAR_MISSES = 3


@dataclass(frozen=True)
class NearMissLookup:
    """Outcome of asking WireMock for near misses.

    ``available`` is False when the lookup itself failed; that is distinct
    from an available lookup that found nothing.
    """

    available: bool
    near_misses: list[dict[str, Any]] = field(default_factory=list)
    reason: str | None = None

    @classmethod
    def found(cls, near_misses: list[dict[str, Any]]) -> NearMissLookup:
        return cls(available=True, near_misses=near_misses)

    @classmethod
    def unavailable(cls, reason: str) -> NearMissLookup:
        return cls(available=False, reason=reason)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> NearMissLookup:
        near_misses = data.get("nearMisses")
        if not isinstance(near_misses, list):
            return cls.found([])
        return cls.found([item for item in near_misses if isinstance(item, dict)])

    @property
    def has_suggestions(self) -> bool:
        return self.available and bool(self.near_misses)


def format_near_misses(
    near_misses: list[dict[str, Any]],
    limit: int = MAX_NEAR_MISSES,
) -> str:
    """Format near misses as numbered ``METHOD url`` lines.

    Example output::

        1. GET /api/user
           Distance: 0.1
    """
    lines = []
    for index, near_miss in enumerate(near_misses[:limit], start=1):
        request = near_miss.get("request")
        if not isinstance(request, dict):
            request = {}

        method = _scalar_text(request.get("method"), "UNKNOWN")
        url = _scalar_text(request.get("url"), "unknown")
        lines.append(f"{index}. {method} {url}")

        match_result = near_miss.get("matchResult")
        if isinstance(match_result, dict) and match_result.get("distance") is not None:
            lines.append(f"   Distance: {_scalar_text(match_result['distance'], '?')}")

    return "\n".join(lines)


def _scalar_text(value: Any, fallback: str) -> str:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    return fallback
