"""pytest integration for WireMockQA.

Registered through the ``pytest11`` entry point. Tests request the
``wiremock`` fixture:

    def test_weather(wiremock):
        wiremock.create_stub("GET", "/api/weather", body={"temp": 21})
        ...
        wiremock.see_request("GET", "/api/weather")

Settings come from ``--wiremock-config`` (or the ``wiremock_config`` ini key)
and ``WIREMOCK_*`` environment variables.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from wiremockqa.config import WireMockSettings, load_settings
from wiremockqa.errors import ConfigurationError, ConnectivityError
from wiremockqa.module import WireMock
from wiremockqa.ports.transport import AdminTransport


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("wiremock", "WireMock admin API")
    group.addoption(
        "--wiremock-config",
        action="store",
        default=None,
        dest="wiremock_config",
        help="Path to a YAML file with WireMock connection settings",
    )
    parser.addini(
        "wiremock_config",
        help="Path (relative to rootdir) to a YAML file with WireMock settings",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "wiremock: test needs a running WireMock server")


def resolve_config_path(config: pytest.Config) -> str | None:
    """Find the settings file from the command line or the ini file."""
    path = config.getoption("wiremock_config")
    if path:
        return path
    ini_path = config.getini("wiremock_config")
    if ini_path:
        return str(config.rootpath / ini_path)
    return None


@pytest.fixture(scope="session")
def wiremock_settings(pytestconfig: pytest.Config) -> WireMockSettings:
    """Validated WireMock settings for the session."""
    try:
        return load_settings(resolve_config_path(pytestconfig))
    except ConfigurationError as e:
        pytest.exit(f"WireMock configuration error: {e.message}", returncode=pytest.ExitCode.USAGE_ERROR)


@pytest.fixture(scope="session")
def wiremock_transport() -> AdminTransport | None:
    """Transport for the session adapter; override to inject your own."""
    return None


@pytest.fixture(scope="session")
def wiremock_server(
    wiremock_settings: WireMockSettings,
    wiremock_transport: AdminTransport | None,
) -> Iterator[WireMock]:
    """Session-wide adapter, cleaned once if ``cleanup_before`` is ``suite``."""
    try:
        wiremock = WireMock.connect(wiremock_settings, wiremock_transport)
    except ConnectivityError as e:
        pytest.exit(e.message, returncode=pytest.ExitCode.INTERNAL_ERROR)

    try:
        wiremock.before_suite()
        yield wiremock
    finally:
        wiremock.close()


@pytest.fixture
def wiremock(wiremock_server: WireMock) -> WireMock:
    """The session adapter, cleaned first if ``cleanup_before`` is ``test``."""
    wiremock_server.before_test()
    return wiremock_server
