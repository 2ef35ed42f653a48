"""Connection and lifecycle settings for the WireMock adapter."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CleanupPolicy(str, Enum):
    """When WireMock state is cleaned up automatically."""

    NEVER = "never"
    TEST = "test"
    SUITE = "suite"


class WireMockSettings(BaseSettings):
    """Configuration for talking to a WireMock admin API.

    Validated once when created and immutable afterwards. Every field can be
    overridden from the environment with the ``WIREMOCK_`` prefix, e.g.
    ``WIREMOCK_HOST`` or ``WIREMOCK_CLEANUP_BEFORE``.

    Example:
        >>> settings = WireMockSettings(host="localhost", port=8080)
        >>> settings.admin_url
        'http://localhost:8080/__admin'
    """

    model_config = SettingsConfigDict(
        env_prefix="WIREMOCK_",
        extra="ignore",
        frozen=True,
    )

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    protocol: Literal["http", "https"] = "http"
    cleanup_before: CleanupPolicy = CleanupPolicy.TEST
    preserve_file_mappings: bool = True
    admin_path: str = "/__admin"
    timeout: float = Field(default=10.0, gt=0)
    verify_tls: bool = True

    @field_validator("protocol", mode="before")
    @classmethod
    def normalize_protocol(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("cleanup_before", mode="before")
    @classmethod
    def normalize_cleanup_before(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("admin_path")
    @classmethod
    def normalize_admin_path(cls, v: str) -> str:
        v = v.strip().strip("/")
        return f"/{v}" if v else ""

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"

    @property
    def admin_url(self) -> str:
        return f"{self.base_url}{self.admin_path}"
