"""Fixtures for tests against a live WireMock server."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def clean_wiremock_env() -> None:
    """Live tests read their connection settings from WIREMOCK_* variables."""


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.environ.get("WIREMOCK_HOST"):
        return
    skip_live = pytest.mark.skip(reason="set WIREMOCK_HOST (and WIREMOCK_PORT) to run live WireMock tests")
    for item in items:
        if item.get_closest_marker("wiremock") is not None:
            item.add_marker(skip_live)
