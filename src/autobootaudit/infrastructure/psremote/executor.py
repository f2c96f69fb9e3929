"""
Script Executor - Remote PowerShell Script Runner.

Runs the bundled boot status scripts through a PSRemote client and
parses their JSON output.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from autobootaudit.domain.config.models import ConnectionSettings
from autobootaudit.infrastructure.psremote.client import ConnectionConfig, PSRemoteClient
from autobootaudit.infrastructure.psremote.scripts import (
    OS_TIMING_SCRIPT,
    build_shutdown_events_script,
)

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Result from script execution."""

    success: bool
    data: dict[str, Any] | None = None
    raw_output: str = ""
    error: str = ""
    script_name: str = ""
    connection_info: dict[str, str] = field(default_factory=dict)


class ScriptExecutor:
    """
    Executes boot status scripts on a target.

    Wraps PSRemoteClient with script-specific logic:
    - Renders the script
    - Extracts the JSON object from stdout
    - Reports script-level failures via the ``success`` flag
    """

    def __init__(self, client: PSRemoteClient) -> None:
        """Initialize with PSRemote client."""
        self.client = client

    @classmethod
    def from_config(
        cls,
        hostname: str,
        settings: ConnectionSettings | None = None,
        username: str | None = None,
        password: str | None = None,
    ) -> ScriptExecutor:
        """Create executor from connection parameters."""
        config = ConnectionConfig.from_settings(
            hostname,
            settings or ConnectionSettings(),
            username=username,
            password=password,
        )
        return cls(PSRemoteClient(config))

    def get_os_timing(self) -> ExecutionResult:
        """Query Win32_OperatingSystem boot, clock and install timestamps."""
        return self._execute_json_script(OS_TIMING_SCRIPT, "os_timing")

    def get_shutdown_events(self, event_ids: Iterable[int], max_per_id: int = 1) -> ExecutionResult:
        """
        Query the System log for the most recent events with the given IDs.

        Args:
            event_ids: Event identifiers to look up
            max_per_id: Most recent matches kept per identifier

        Returns:
            ExecutionResult whose data holds an ``events`` list
        """
        script = build_shutdown_events_script(event_ids, max_per_id)
        return self._execute_json_script(script, "shutdown_events")

    def _execute_json_script(self, script: str, script_name: str) -> ExecutionResult:
        """Execute script and parse JSON output."""
        result = self.client.run_ps(script)
        connection_info = {
            "transport": result.transport_used,
            "auth": result.auth_used,
        }

        if not result.success:
            return ExecutionResult(
                success=False,
                raw_output=result.stdout,
                error=(result.stderr or result.error or "PowerShell execution failed").strip(),
                script_name=script_name,
                connection_info=connection_info,
            )

        # Find JSON in output (may have other text before/after)
        output = result.stdout.strip()
        json_start = output.find("{")
        json_end = output.rfind("}") + 1

        if json_start < 0 or json_end <= json_start:
            return ExecutionResult(
                success=False,
                raw_output=result.stdout,
                error=f"No JSON object in {script_name} output",
                script_name=script_name,
                connection_info=connection_info,
            )

        try:
            data = json.loads(output[json_start:json_end])
        except json.JSONDecodeError as e:
            logger.warning("Failed to parse JSON from %s: %s", script_name, e)
            return ExecutionResult(
                success=False,
                raw_output=result.stdout,
                error=f"JSON parse error: {e}",
                script_name=script_name,
                connection_info=connection_info,
            )

        if not isinstance(data, dict):
            return ExecutionResult(
                success=False,
                raw_output=result.stdout,
                error=f"Unexpected JSON payload from {script_name}",
                script_name=script_name,
                connection_info=connection_info,
            )

        return ExecutionResult(
            success=bool(data.get("success", True)),
            data=data,
            raw_output=result.stdout,
            error=data.get("error") or "",
            script_name=script_name,
            connection_info=connection_info,
        )

    def close(self) -> None:
        """Close the underlying client."""
        self.client.close()
