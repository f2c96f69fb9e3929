"""
Config Command CLI - Configuration Validation

Checks the configuration directory and shows the effective settings.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console

from autobootaudit.infrastructure.config import ConfigError, ConfigRepository
from autobootaudit.infrastructure.config.repository import TARGETS_FILE

logger = logging.getLogger(__name__)

console = Console()

config_app = typer.Typer(
    name="config",
    help="⚙️ Configuration validation",
    rich_markup_mode="rich",
    no_args_is_help=True
)


def collect_config_errors(repository: ConfigRepository) -> list[str]:
    """
    Validate all configuration files.

    Returns:
        List of validation error messages (empty if all valid)
    """
    errors = []

    try:
        audit_config = repository.load_audit_config()
    except ConfigError as e:
        errors.append(f"Boot audit config: {e}")
        audit_config = None

    if audit_config is not None and audit_config.os_credentials_ref:
        try:
            repository.load_credential(audit_config.os_credentials_ref)
        except ConfigError as e:
            errors.append(f"Default credential: {e}")

    if repository.find_config_file(TARGETS_FILE) is None:
        return errors

    try:
        targets = repository.load_targets()
    except ConfigError as e:
        errors.append(f"Targets: {e}")
        return errors

    for target in targets:
        if target.os_credentials_ref:
            try:
                repository.load_credential(target.os_credentials_ref)
            except ConfigError as e:
                errors.append(f"Credential for target '{target.name}': {e}")

    return errors


@config_app.command("validate")
def config_validate(
    config_dir: Path = typer.Option(
        Path("config"),
        "--config-dir",
        "-c",
        help="Directory holding boot_audit.json, targets.json and credentials/."
    ),
):
    """
    Validate boot_audit.json, targets.json and every referenced credential file.
    """
    errors = collect_config_errors(ConfigRepository(config_dir))

    if not errors:
        console.print("[green]✅ All configuration validation checks passed![/green]")
        return

    console.print(f"[red]❌ Configuration validation failed with {len(errors)} error(s):[/red]")
    for i, error in enumerate(errors, 1):
        console.print(f"  {i}. {error}")
    raise typer.Exit(2)


@config_app.command("show")
def config_show(
    config_dir: Path = typer.Option(Path("config"), "--config-dir", "-c"),
):
    """
    Print the effective boot audit settings.
    """
    try:
        config = ConfigRepository(config_dir).load_audit_config()
    except ConfigError as e:
        console.print(f"[red]❌ Error:[/red] {e}")
        raise typer.Exit(2)

    console.print_json(config.model_dump_json())
