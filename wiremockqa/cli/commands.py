"""CLI commands for WireMockQA."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wiremockqa.config import WireMockSettings, load_settings
from wiremockqa.errors import WireMockQAError
from wiremockqa.mappings import build_request_pattern
from wiremockqa.module import WireMock

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@contextmanager
def reported_errors(verbose: bool = False) -> Iterator[None]:
    """Turn library errors into a message on stderr and exit code 1."""
    try:
        yield
    except WireMockQAError as e:
        message = e.format_verbose() if verbose else str(e)
        err_console.print(escape(message), style="red", highlight=False)
        raise SystemExit(1) from e


def connect(ctx: click.Context) -> WireMock:
    settings: WireMockSettings = ctx.obj["settings"]
    with reported_errors(ctx.obj["verbose"]):
        wiremock = WireMock.connect(settings)
    ctx.call_on_close(wiremock.close)
    return wiremock


def parse_matchers(values: tuple[str, ...]) -> dict[str, Any]:
    """Parse ``KEY=JSON`` pairs into a matcher mapping."""
    matchers: dict[str, Any] = {}
    for item in values:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=JSON, got {item!r}", param_hint="--matcher")
        try:
            matchers[key] = json.loads(raw)
        except ValueError:
            matchers[key] = raw
    return matchers


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.option("--host", help="WireMock host (overrides config)")
@click.option("--port", type=int, help="WireMock port (overrides config)")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    config: str | None,
    host: str | None,
    port: int | None,
) -> None:
    """WireMockQA - drive a WireMock server through its admin API."""
    ctx.ensure_object(dict)
    setup_logging(verbose)

    overrides = {key: value for key, value in (("host", host), ("port", port)) if value is not None}
    with reported_errors(verbose):
        ctx.obj["settings"] = load_settings(config, **overrides)
    ctx.obj["verbose"] = verbose


@cli.command()
@click.pass_context
def health(ctx: click.Context) -> None:
    """Check that WireMock is reachable and healthy."""
    wiremock = connect(ctx)
    console.print(f"[green]WireMock healthy at {wiremock.settings.admin_url}[/green]")


@cli.command()
@click.option("--full", is_flag=True, help="Also drop file-based mappings and the request journal")
@click.pass_context
def reset(ctx: click.Context, full: bool) -> None:
    """Reset stub mappings to their defaults."""
    wiremock = connect(ctx)
    with reported_errors(ctx.obj["verbose"]):
        if full:
            wiremock.full_reset()
        else:
            wiremock.reset()
    console.print("[green]Full reset done[/green]" if full else "[green]Mappings reset[/green]")


@cli.command("clear-requests")
@click.pass_context
def clear_requests(ctx: click.Context) -> None:
    """Clear the request journal, keeping stub mappings."""
    wiremock = connect(ctx)
    with reported_errors(ctx.obj["verbose"]):
        wiremock.clear_requests()
    console.print("[green]Request journal cleared[/green]")


@cli.command()
@click.option("--unmatched", is_flag=True, help="Only show requests that matched no stub")
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
@click.pass_context
def requests(ctx: click.Context, unmatched: bool, output_json: bool) -> None:
    """List requests from the journal."""
    wiremock = connect(ctx)
    with reported_errors(ctx.obj["verbose"]):
        records = wiremock.grab_unmatched_requests() if unmatched else wiremock.grab_all_requests()

    if output_json:
        click.echo(json.dumps(records, indent=2))
        return

    if not records:
        console.print("[dim]No requests recorded[/dim]")
        return

    table = Table(title="Unmatched requests" if unmatched else "Recorded requests")
    table.add_column("#", justify="right")
    table.add_column("Method")
    table.add_column("URL")
    for index, record in enumerate(records, start=1):
        request = record.get("request", record)
        if not isinstance(request, dict):
            request = {}
        table.add_row(str(index), str(request.get("method", "?")), str(request.get("url", "?")))
    console.print(table)


@cli.command()
@click.option("--method", "-m", required=True, help="HTTP method to match")
@click.option("--url", "-u", required=True, help="URL to match")
@click.option("--matcher", "matchers", multiple=True, help="Extra matcher as KEY=JSON")
@click.pass_context
def count(ctx: click.Context, method: str, url: str, matchers: tuple[str, ...]) -> None:
    """Count journaled requests matching a pattern."""
    pattern = build_request_pattern(method, url, parse_matchers(matchers))
    wiremock = connect(ctx)
    with reported_errors(ctx.obj["verbose"]):
        total = wiremock.grab_request_count(pattern)
    click.echo(str(total))
