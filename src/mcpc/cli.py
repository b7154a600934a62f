"""mcpc CLI entrypoint."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from mcpc import __version__
from mcpc.config import (
    ClientSettings,
    SettingsLoader,
    SettingsValidationError,
    TelemetrySettings,
)


@click.group()
@click.version_option(version=__version__, prog_name="mcpc")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings YAML file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log protocol traffic to stderr.")
@click.option("--trace", is_flag=True, help="Print OpenTelemetry spans to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool, trace: bool) -> None:
    """mcpc — Model Context Protocol client for local tool providers."""
    from mcpc.cli_commands._output import print_error

    settings = ClientSettings()
    if config_path is not None:
        try:
            settings = SettingsLoader(Path(config_path)).load()
        except SettingsValidationError as exc:
            print_error("Config error", str(exc))
            sys.exit(1)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )

    if trace:
        if settings.telemetry is None:
            settings.telemetry = TelemetrySettings(enabled=True)
        else:
            settings.telemetry.enabled = True

    if settings.telemetry is not None and settings.telemetry.enabled:
        from mcpc.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(settings.telemetry)
        except ImportError as exc:
            print_error("Telemetry error", str(exc))
            sys.exit(1)

    ctx.obj = settings


# Register subcommands
from mcpc.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
