"""
PSRemote Infrastructure Package.

PowerShell remoting using pywinrm with transport/auth fallback.
"""

from autobootaudit.infrastructure.psremote.client import (
    PSRemoteClient,
    PSRemoteResult,
    ConnectionConfig,
)
from autobootaudit.infrastructure.psremote.executor import (
    ScriptExecutor,
    ExecutionResult,
)

__all__ = [
    "PSRemoteClient",
    "PSRemoteResult",
    "ConnectionConfig",
    "ScriptExecutor",
    "ExecutionResult",
]
