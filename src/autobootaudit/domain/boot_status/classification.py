"""
Shutdown event selection, classification and record assembly.

Pure functions: no I/O, no clock reads.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Optional

from .duration import format_duration
from .models import (
    UNKNOWN_SHUTDOWN_TIME,
    BootStatusRecord,
    OsTimingFacts,
    ShutdownEventId,
    ShutdownLogEvent,
    ShutdownType,
)

_SHUTDOWN_TYPES: dict[int, ShutdownType] = {
    ShutdownEventId.KERNEL_POWER: ShutdownType.UNEXPECTED,
    ShutdownEventId.UNEXPECTED_SHUTDOWN: ShutdownType.UNEXPECTED,
    ShutdownEventId.USER_INITIATED: ShutdownType.NORMAL,
}

# Higher wins when two events share the same timestamp
_TIE_BREAK_RANK: dict[int, int] = {
    ShutdownEventId.USER_INITIATED: 3,
    ShutdownEventId.UNEXPECTED_SHUTDOWN: 2,
    ShutdownEventId.KERNEL_POWER: 1,
}


def select_latest_event(events: Iterable[ShutdownLogEvent]) -> Optional[ShutdownLogEvent]:
    """
    Pick the most recent shutdown event.

    Events with an identical ``time_created`` are ranked 1074 > 6008 > 41,
    then any other ID. Among events that are still equal the first one seen
    wins.

    Returns:
        The selected event, or None when there are no events
    """
    latest: Optional[ShutdownLogEvent] = None
    for event in events:
        if latest is None or _sort_key(event) > _sort_key(latest):
            latest = event
    return latest


def _sort_key(event: ShutdownLogEvent) -> tuple:
    return (event.time_created, _TIE_BREAK_RANK.get(event.event_id, 0))


def classify_event(event_id: int) -> ShutdownType:
    """Map an event ID to a shutdown type; unrecognised IDs are Unknown."""
    return _SHUTDOWN_TYPES.get(event_id, ShutdownType.UNKNOWN)


def build_boot_status(
    facts: OsTimingFacts,
    events: Iterable[ShutdownLogEvent],
) -> BootStatusRecord:
    """
    Derive the boot status record from timing facts and shutdown events.

    Args:
        facts: OS timing facts of the target
        events: Candidate shutdown events (may be empty)

    Returns:
        BootStatusRecord for the target
    """
    latest = select_latest_event(events)

    if latest is None:
        shutdown_time = UNKNOWN_SHUTDOWN_TIME
        shutdown_type = ShutdownType.UNKNOWN
    else:
        shutdown_time = latest.time_created
        shutdown_type = classify_event(latest.event_id)

    # Only a normal shutdown bounds the outage window
    if shutdown_type is ShutdownType.NORMAL:
        downtime = facts.last_boot_up_time - shutdown_time
    else:
        downtime = timedelta(0)

    uptime = facts.local_date_time - facts.last_boot_up_time

    return BootStatusRecord(
        computer_name=facts.reported_name,
        last_shutdown_time=shutdown_time,
        last_shutdown_type=shutdown_type,
        downtime=downtime,
        last_boot_up_time=facts.last_boot_up_time,
        uptime=uptime,
        install_date=facts.install_date,
        downtime_days=format_duration(downtime),
        uptime_days=format_duration(uptime),
    )
