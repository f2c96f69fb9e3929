"""
Boot status domain package.

Models and pure derivation logic for boot/uptime diagnostics.
"""

from .classification import build_boot_status, classify_event, select_latest_event
from .duration import format_duration
from .models import (
    SHUTDOWN_EVENT_IDS,
    UNKNOWN_SHUTDOWN_TIME,
    BootStatusRecord,
    OsTimingFacts,
    ShutdownEventId,
    ShutdownLogEvent,
    ShutdownType,
)

__all__ = [
    "SHUTDOWN_EVENT_IDS",
    "UNKNOWN_SHUTDOWN_TIME",
    "BootStatusRecord",
    "OsTimingFacts",
    "ShutdownEventId",
    "ShutdownLogEvent",
    "ShutdownType",
    "build_boot_status",
    "classify_event",
    "format_duration",
    "select_latest_event",
]
