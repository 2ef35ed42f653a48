"""Configuration management for WireMockQA."""

from wiremockqa.config.loader import load_settings, normalize_option_names
from wiremockqa.config.settings import CleanupPolicy, WireMockSettings

__all__ = [
    "CleanupPolicy",
    "WireMockSettings",
    "load_settings",
    "normalize_option_names",
]
