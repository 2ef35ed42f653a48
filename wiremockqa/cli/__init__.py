"""WireMockQA CLI - command line interface for the WireMock admin API."""

from wiremockqa.cli.commands import cli


def main() -> None:
    """Main entry point for the wiremockqa CLI."""
    cli()


__all__ = ["main", "cli"]
