"""
CLI Orchestrator - Main Entry Point

Wires the command modules into a single Typer application.
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from autobootaudit import __version__
from autobootaudit.infrastructure.logging_config import setup_logging
from autobootaudit.interface.cli.commands import boot_status, config_app

app = typer.Typer(
    name="autobootaudit",
    help="🖥️ Boot and uptime diagnostics for Windows computers over PowerShell remoting",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("status")(boot_status)
app.add_typer(config_app, name="config")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"autobootaudit {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show warnings and errors."),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write a DEBUG log to this file."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
):
    """
    🖥️ AutoBootAudit - last boot, uptime, last shutdown and downtime per computer.

    🎯 **Available Commands:**
    - `autobootaudit status HOST...` - Query boot status
    - `autobootaudit config validate` - Check configuration files
    - `autobootaudit config show` - Print effective settings
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    setup_logging(level, str(log_file) if log_file else None)
