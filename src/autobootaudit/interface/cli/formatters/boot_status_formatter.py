"""
Console formatter for boot status results.
"""

from datetime import datetime

from rich.console import Console
from rich.table import Table

from autobootaudit.application.boot_status import TargetOutcome
from autobootaudit.domain.boot_status import UNKNOWN_SHUTDOWN_TIME, ShutdownType
from autobootaudit.infrastructure.results import Failure

_TYPE_STYLES = {
    ShutdownType.NORMAL: "green",
    ShutdownType.UNEXPECTED: "red",
    ShutdownType.UNKNOWN: "yellow",
}


def _ts(value: datetime) -> str:
    if value == UNKNOWN_SHUTDOWN_TIME:
        return "[dim]unknown[/dim]"
    return value.strftime("%Y-%m-%d %H:%M:%S")


class BootStatusFormatter:
    """
    Renders resolved records as a table and failures as a list.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def display(self, outcomes: list[TargetOutcome]) -> None:
        """
        Display batch outcomes.

        Args:
            outcomes: Per-target outcomes in input order
        """
        succeeded = [o for o in outcomes if o.succeeded]
        failed = [o for o in outcomes if not o.succeeded]

        if succeeded:
            self.console.print(self._build_table(succeeded))

        if failed:
            self.console.print(f"\n[red]❌ {len(failed)} target(s) could not be resolved:[/red]")
            for outcome in failed:
                error = outcome.result.error if isinstance(outcome.result, Failure) else None
                kind = error.kind.value if error else "unknown"
                message = error.message if error else ""
                self.console.print(f"  • [bold]{outcome.target}[/bold] ({kind}): {message}")

        self.console.print(
            f"\n[blue]📊 {len(succeeded)} resolved, {len(failed)} failed, {len(outcomes)} total[/blue]"
        )

    def _build_table(self, outcomes: list[TargetOutcome]) -> Table:
        table = Table(title="Boot Status", show_lines=False)
        table.add_column("Computer", style="bold")
        table.add_column("Last Boot")
        table.add_column("Uptime", justify="right")
        table.add_column("Last Shutdown")
        table.add_column("Shutdown Type")
        table.add_column("Downtime", justify="right")
        table.add_column("Install Date")

        for outcome in outcomes:
            record = outcome.result.value
            style = _TYPE_STYLES[record.last_shutdown_type]
            table.add_row(
                record.computer_name,
                _ts(record.last_boot_up_time),
                record.uptime_days,
                _ts(record.last_shutdown_time),
                f"[{style}]{record.last_shutdown_type.value}[/{style}]",
                record.downtime_days,
                record.install_date.strftime("%Y-%m-%d"),
            )
        return table
