"""
Boot status application package.
"""

from autobootaudit.application.boot_status.resolver import (
    BootStatusResolver,
    OsTimingQuery,
    ResolutionError,
    ResolutionErrorKind,
    ShutdownEventQuery,
    TargetOutcome,
)

__all__ = [
    "BootStatusResolver",
    "OsTimingQuery",
    "ResolutionError",
    "ResolutionErrorKind",
    "ShutdownEventQuery",
    "TargetOutcome",
]
