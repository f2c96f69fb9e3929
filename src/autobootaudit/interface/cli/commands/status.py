"""
Status Command Function - Boot Status Query

Resolves boot status for targets given on the command line or, when
none are given, for the enabled targets of the targets file.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from autobootaudit.application.boot_status import (
    BootStatusResolver,
    ResolutionError,
    ResolutionErrorKind,
    TargetOutcome,
)
from autobootaudit.application.container import Container
from autobootaudit.domain.config import Credential, EventLogPolicy
from autobootaudit.infrastructure.config import ConfigError
from autobootaudit.infrastructure.results import Failure
from ..formatters import BootStatusFormatter

logger = logging.getLogger(__name__)

console = Console()

EXIT_TARGET_FAILED = 1
EXIT_CONFIG_ERROR = 2


def boot_status(
    targets: Optional[List[str]] = typer.Argument(
        None,
        help="Host names or addresses. Defaults to the enabled targets in targets.json."
    ),
    config_dir: Path = typer.Option(
        Path("config"),
        "--config-dir",
        "-c",
        help="Directory holding boot_audit.json, targets.json and credentials/."
    ),
    tag: Optional[str] = typer.Option(
        None,
        "--tag",
        "-t",
        help="Only query configured targets carrying this tag."
    ),
    username: Optional[str] = typer.Option(
        None,
        "--username",
        "-u",
        help="Account used for remoting (password is prompted)."
    ),
    password: Optional[str] = typer.Option(
        None,
        "--password",
        envvar="AUTOBOOTAUDIT_PASSWORD",
        hidden=True,
    ),
    credential_ref: Optional[str] = typer.Option(
        None,
        "--credential",
        help="Credential file reference under <config-dir>/credentials."
    ),
    event_log_policy: Optional[EventLogPolicy] = typer.Option(
        None,
        "--event-log-policy",
        case_sensitive=False,
        help="absorb: unreadable event log gives an Unknown shutdown; propagate: fail the target."
    ),
    parallel: Optional[int] = typer.Option(
        None,
        "--parallel",
        "-p",
        min=1,
        max=20,
        help="Number of targets resolved concurrently."
    ),
):
    """
    Show last boot, uptime, last shutdown and downtime for Windows computers.
    """
    container = Container(
        config_dir=config_dir,
        event_log_policy=event_log_policy,
        max_parallel_targets=parallel,
    )

    try:
        explicit = _explicit_credential(container, username, password, credential_ref)
        requests = _build_requests(container, targets, tag, explicit)
        resolver = container.resolver
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        console.print(f"[red]❌ Configuration error:[/red] {e}")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    if not requests:
        console.print("[yellow]No targets to query.[/yellow]")
        return

    outcomes = _resolve_requests(resolver, requests)
    BootStatusFormatter(console).display(outcomes)

    if not all(outcome.succeeded for outcome in outcomes):
        raise typer.Exit(EXIT_TARGET_FAILED)


def _explicit_credential(
    container: Container,
    username: Optional[str],
    password: Optional[str],
    credential_ref: Optional[str],
) -> Optional[Credential]:
    """Credential given on the command line, if any."""
    if username:
        if password is None:
            password = typer.prompt(f"Password for {username}", hide_input=True)
        return Credential(username=username, password=password)
    if credential_ref:
        return container.config_repository.load_credential(credential_ref)
    return None


def _build_requests(
    container: Container,
    targets: Optional[List[str]],
    tag: Optional[str],
    explicit: Optional[Credential],
) -> list[tuple[str, Optional[Credential], Optional[str]]]:
    """
    Pair every target with the credential used to query it.

    Precedence: command-line credential, the target's own credential
    file, then the default credential of boot_audit.json. A target whose
    own credential file cannot be loaded carries the error instead.
    """
    default = explicit or container.load_default_credential()

    if targets:
        return [(target, default, None) for target in targets]

    requests = []
    for target in container.load_enabled_targets(tag):
        credential, error = default, None
        if explicit is None and target.os_credentials_ref:
            try:
                credential = container.config_repository.load_credential(target.os_credentials_ref)
            except ConfigError as e:
                logger.error("Credential for target '%s' unavailable: %s", target.name, e)
                credential, error = None, str(e)
        requests.append((target.server, credential, error))
    return requests


def _resolve_requests(
    resolver: BootStatusResolver,
    requests: list[tuple[str, Optional[Credential], Optional[str]]],
) -> list[TargetOutcome]:
    """Resolve runnable requests and slot credential failures back in input order."""
    resolved = iter(resolver.resolve_each(
        [(target, credential) for target, credential, error in requests if error is None]
    ))
    outcomes = []
    for target, _, error in requests:
        if error is None:
            outcomes.append(next(resolved))
        else:
            failure = ResolutionError(target, ResolutionErrorKind.CREDENTIAL_UNAVAILABLE, error)
            outcomes.append(TargetOutcome(target=target, result=Failure(failure)))
    return outcomes
