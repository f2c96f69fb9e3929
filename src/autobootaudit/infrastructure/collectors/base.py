"""
Shared plumbing for WinRM collectors.
"""

from __future__ import annotations

from typing import Callable, Optional

from autobootaudit.domain.config.models import ConnectionSettings, Credential
from autobootaudit.infrastructure.psremote.executor import ScriptExecutor

ExecutorFactory = Callable[[str, ConnectionSettings, Optional[str], Optional[str]], ScriptExecutor]


def default_executor_factory(
    hostname: str,
    settings: ConnectionSettings,
    username: Optional[str],
    password: Optional[str],
) -> ScriptExecutor:
    return ScriptExecutor.from_config(
        hostname=hostname,
        settings=settings,
        username=username,
        password=password,
    )


class WinRmCollector:
    """Base class holding connection settings and the executor factory."""

    def __init__(
        self,
        settings: ConnectionSettings | None = None,
        executor_factory: ExecutorFactory | None = None,
    ) -> None:
        self.settings = settings or ConnectionSettings()
        self.executor_factory = executor_factory or default_executor_factory

    def _open(self, target: str, credential: Credential | None) -> ScriptExecutor:
        username = credential.username if credential else None
        password = credential.get_password() if credential else None
        return self.executor_factory(target, self.settings, username, password)
