"""
Shared fixtures for AutoBootAudit tests.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from autobootaudit.domain.boot_status import OsTimingFacts, ShutdownLogEvent
from autobootaudit.infrastructure.psremote.client import PSRemoteClient


def make_facts(
    name: str = "HOST1",
    boot: datetime = datetime(2024, 1, 10, 8, 0, 0),
    now: datetime = datetime(2024, 1, 10, 9, 0, 0),
    installed: datetime = datetime(2023, 1, 1),
) -> OsTimingFacts:
    """Build OS timing facts with the standard scenario defaults."""
    return OsTimingFacts(
        reported_name=name,
        last_boot_up_time=boot,
        local_date_time=now,
        install_date=installed,
    )


def make_event(event_id: int, when: datetime) -> ShutdownLogEvent:
    """Build a shutdown log event."""
    return ShutdownLogEvent(event_id=event_id, time_created=when)


@pytest.fixture(autouse=True)
def clear_connection_cache():
    """PSRemoteClient caches working combinations at class level."""
    PSRemoteClient._connection_cache.clear()
    yield
    PSRemoteClient._connection_cache.clear()
