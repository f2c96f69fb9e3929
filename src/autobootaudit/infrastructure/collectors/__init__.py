"""
Remote collectors for boot status facts.

WinRM-backed implementations of the OS timing and shutdown event queries.
"""

from autobootaudit.infrastructure.collectors.os_timing import WinRmOsTimingQuery
from autobootaudit.infrastructure.collectors.shutdown_events import WinRmShutdownEventQuery

__all__ = ["WinRmOsTimingQuery", "WinRmShutdownEventQuery"]
