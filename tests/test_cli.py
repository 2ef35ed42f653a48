"""Tests for the wiremockqa CLI."""

from __future__ import annotations

import json
from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from wiremockqa.cli.commands import cli, parse_matchers

BASE_ARGS = ["--host", "127.0.0.1", "--port", "8080"]
ADMIN_URL = "http://127.0.0.1:8080/__admin"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_transport(fake_transport):
    """Route the CLI's default transport to the fake one, healthy by default."""
    fake_transport.queue(200, {"status": "healthy"})
    with patch("wiremockqa.module.create_default_transport", return_value=fake_transport):
        yield fake_transport


class TestParseMatchers:
    """Tests for --matcher parsing."""

    def test_json_and_plain_values(self) -> None:
        matchers = parse_matchers(('queryParameters={"q": {"equalTo": "London"}}', "urlPath=/api/x"))

        assert matchers == {
            "queryParameters": {"q": {"equalTo": "London"}},
            "urlPath": "/api/x",
        }

    def test_rejects_missing_separator(self) -> None:
        with pytest.raises(click.BadParameter):
            parse_matchers(("queryParameters",))


class TestCommands:
    """Tests for CLI commands against a fake transport."""

    def test_health(self, runner, cli_transport) -> None:
        result = runner.invoke(cli, [*BASE_ARGS, "health"])

        assert result.exit_code == 0
        assert "healthy" in result.output

    def test_health_failure(self, runner, fake_transport) -> None:
        fake_transport.queue_failure("Connection refused")
        with patch("wiremockqa.module.create_default_transport", return_value=fake_transport):
            result = runner.invoke(cli, [*BASE_ARGS, "health"])

        assert result.exit_code == 1

    def test_missing_configuration(self, runner) -> None:
        result = runner.invoke(cli, ["health"])

        assert result.exit_code == 1

    def test_reset(self, runner, cli_transport) -> None:
        cli_transport.queue(200, "")

        result = runner.invoke(cli, [*BASE_ARGS, "reset"])

        assert result.exit_code == 0
        assert cli_transport.last_request.url == f"{ADMIN_URL}/mappings/reset"

    def test_full_reset(self, runner, cli_transport) -> None:
        cli_transport.queue(200, "")

        result = runner.invoke(cli, [*BASE_ARGS, "reset", "--full"])

        assert result.exit_code == 0
        assert cli_transport.last_request.url == f"{ADMIN_URL}/reset"

    def test_clear_requests(self, runner, cli_transport) -> None:
        cli_transport.queue(200, "")

        result = runner.invoke(cli, [*BASE_ARGS, "clear-requests"])

        assert result.exit_code == 0
        assert cli_transport.last_request.method == "DELETE"

    def test_requests_json(self, runner, cli_transport) -> None:
        records = [{"request": {"method": "GET", "url": "/api/test"}}]
        cli_transport.queue(200, {"requests": records})

        result = runner.invoke(cli, [*BASE_ARGS, "requests", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == records

    def test_requests_unmatched_table(self, runner, cli_transport) -> None:
        cli_transport.queue(200, {"requests": [{"method": "GET", "url": "/api/no-stub"}]})

        result = runner.invoke(cli, [*BASE_ARGS, "requests", "--unmatched"])

        assert result.exit_code == 0
        assert "/api/no-stub" in result.output
        assert cli_transport.last_request.url == f"{ADMIN_URL}/requests/unmatched"

    def test_count(self, runner, cli_transport) -> None:
        cli_transport.queue(200, {"count": 4})

        result = runner.invoke(
            cli,
            [
                *BASE_ARGS,
                "count",
                "--method",
                "get",
                "--url",
                "/api/weather",
                "--matcher",
                'queryParameters={"q": {"equalTo": "London"}}',
            ],
        )

        assert result.exit_code == 0
        assert result.output.strip() == "4"
        assert cli_transport.json_sent() == {
            "method": "GET",
            "urlPath": "/api/weather",
            "queryParameters": {"q": {"equalTo": "London"}},
        }

    def test_gateway_error_exit_code(self, runner, cli_transport) -> None:
        cli_transport.queue(500, "boom")

        result = runner.invoke(cli, [*BASE_ARGS, "clear-requests"])

        assert result.exit_code == 1
