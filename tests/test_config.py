"""Tests for WireMock settings and settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from wiremockqa.config import CleanupPolicy, WireMockSettings, load_settings
from wiremockqa.errors import ConfigurationError


@pytest.fixture
def config_file(tmp_path: Path):
    def write(content: str) -> Path:
        path = tmp_path / "wiremock.yaml"
        path.write_text(content)
        return path

    return write


class TestWireMockSettings:
    """Tests for the settings model."""

    def test_defaults(self) -> None:
        settings = WireMockSettings(host="localhost", port=8080)

        assert settings.protocol == "http"
        assert settings.cleanup_before == CleanupPolicy.TEST
        assert settings.preserve_file_mappings is True
        assert settings.admin_path == "/__admin"
        assert settings.timeout == 10.0
        assert settings.admin_url == "http://localhost:8080/__admin"

    def test_admin_path_is_normalized(self) -> None:
        settings = WireMockSettings(host="localhost", port=8080, admin_path="custom/admin/")

        assert settings.admin_path == "/custom/admin"
        assert settings.admin_url == "http://localhost:8080/custom/admin"

    def test_case_insensitive_choices(self) -> None:
        settings = WireMockSettings(host="h", port=1, protocol="HTTPS", cleanup_before="Suite")

        assert settings.protocol == "https"
        assert settings.cleanup_before == CleanupPolicy.SUITE

    def test_is_immutable(self) -> None:
        settings = WireMockSettings(host="localhost", port=8080)

        with pytest.raises(ValidationError):
            settings.port = 9090

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WIREMOCK_HOST", "wiremock.local")
        monkeypatch.setenv("WIREMOCK_PORT", "9999")
        monkeypatch.setenv("WIREMOCK_CLEANUP_BEFORE", "never")

        settings = WireMockSettings()

        assert settings.base_url == "http://wiremock.local:9999"
        assert settings.cleanup_before == CleanupPolicy.NEVER


class TestLoadSettings:
    """Tests for load_settings."""

    def test_overrides_only(self) -> None:
        settings = load_settings(host="127.0.0.1", port=8080)

        assert settings.admin_url == "http://127.0.0.1:8080/__admin"

    def test_missing_required_fields(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings()

        assert "host" in exc_info.value.message
        assert "port" in exc_info.value.message

    @pytest.mark.parametrize(
        "options",
        [
            pytest.param({"cleanupBefore": "always"}, id="cleanup policy"),
            pytest.param({"protocol": "ftp"}, id="protocol"),
            pytest.param({"port": 0}, id="port"),
        ],
    )
    def test_invalid_values(self, options) -> None:
        with pytest.raises(ConfigurationError):
            load_settings(**{"host": "localhost", "port": 8080, **options})

    def test_yaml_with_camel_case_options(self, config_file) -> None:
        path = config_file(
            "host: wiremock\n"
            "port: 8080\n"
            "cleanupBefore: suite\n"
            "preserveFileMappings: false\n"
            "adminPath: /__admin\n"
        )

        settings = load_settings(path)

        assert settings.host == "wiremock"
        assert settings.cleanup_before == CleanupPolicy.SUITE
        assert settings.preserve_file_mappings is False

    def test_yaml_wiremock_section(self, config_file) -> None:
        path = config_file("wiremock:\n  host: mocks\n  port: 8181\nother: ignored\n")

        settings = load_settings(path)

        assert settings.base_url == "http://mocks:8181"

    def test_yaml_env_interpolation(self, config_file, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOCK_HOST", "from-env")
        monkeypatch.delenv("MOCK_PORT", raising=False)
        path = config_file("host: ${MOCK_HOST}\nport: ${MOCK_PORT:8282}\n")

        settings = load_settings(path)

        assert settings.host == "from-env"
        assert settings.port == 8282

    def test_env_beats_file_and_overrides_beat_env(
        self, config_file, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("WIREMOCK_PORT", "9000")
        monkeypatch.setenv("WIREMOCK_HOST", "env-host")
        path = config_file("host: file-host\nport: 8080\n")

        settings = load_settings(path, host="override-host")

        assert settings.port == 9000
        assert settings.host == "override-host"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_settings(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, config_file) -> None:
        path = config_file("host: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_settings(path)

    def test_non_mapping_yaml(self, config_file) -> None:
        path = config_file("- host\n- port\n")

        with pytest.raises(ConfigurationError, match="must be a YAML mapping"):
            load_settings(path)
