"""Load WireMock settings from YAML, the environment and explicit overrides."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from wiremockqa.config.settings import WireMockSettings
from wiremockqa.errors import ConfigurationError

ENV_PREFIX = "WIREMOCK_"
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")

# Option names as they appear in suite configuration files.
OPTION_ALIASES = {
    "cleanupBefore": "cleanup_before",
    "preserveFileMappings": "preserve_file_mappings",
    "adminPath": "admin_path",
    "verifyTls": "verify_tls",
}


def load_settings(
    config_path: str | Path | None = None,
    **overrides: Any,
) -> WireMockSettings:
    """Load and validate settings.

    Priority: explicit overrides > WIREMOCK_* env vars > config file > defaults

    The YAML file may hold the options at the top level or nested under a
    ``wiremock:`` key. String values may reference environment variables
    as ``${NAME}`` or ``${NAME:default}``.

    Raises:
        ConfigurationError: If the file cannot be read or validation fails.
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_data = _load_from_file(Path(config_path))

    config_data = _strip_env_shadowed(normalize_option_names(config_data))
    config_data.update(normalize_option_names(overrides))

    try:
        return WireMockSettings(**config_data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid WireMock configuration: {_describe_errors(e)}",
            cause=e,
            config_path=str(config_path) if config_path else None,
        ) from e


def normalize_option_names(data: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase option names onto settings field names."""
    return {OPTION_ALIASES.get(key, key): value for key, value in data.items()}


def _load_from_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {path}",
            config_path=str(path),
        )

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            cause=e,
            config_path=str(path),
        ) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration must be a YAML mapping, got {type(config).__name__}",
            config_path=str(path),
        )

    section = config.get("wiremock", config)
    if not isinstance(section, dict):
        raise ConfigurationError(
            "The 'wiremock' section must be a mapping",
            config_path=str(path),
        )

    return {key: _interpolate_value(value) for key, value in section.items()}


def _interpolate_value(value: Any) -> Any:
    if not isinstance(value, str):
        return value

    def replace_env_var(match: re.Match[str]) -> str:
        return os.environ.get(match.group(1), match.group(2) or "")

    return ENV_VAR_PATTERN.sub(replace_env_var, value)


def _strip_env_shadowed(data: dict[str, Any]) -> dict[str, Any]:
    """Drop file values that a WIREMOCK_* environment variable overrides."""
    return {
        key: value
        for key, value in data.items()
        if f"{ENV_PREFIX}{key.upper()}" not in os.environ
    }


def _describe_errors(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"]) or "settings"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
