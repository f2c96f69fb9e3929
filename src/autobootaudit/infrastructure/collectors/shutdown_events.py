"""
Shutdown event collector.
Reads the most recent shutdown-related events from the System log.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pydantic import ValidationError

from autobootaudit.domain.boot_status import ShutdownLogEvent
from autobootaudit.domain.config.models import Credential
from autobootaudit.infrastructure.collectors.base import WinRmCollector
from autobootaudit.infrastructure.results import Result, Success, Failure

logger = logging.getLogger(__name__)


class WinRmShutdownEventQuery(WinRmCollector):
    """
    Queries System log shutdown events over PowerShell remoting.

    An empty log (no matching events) is a Success with an empty list;
    connectivity and permission problems are a Failure.
    """

    def query(
        self,
        target: str,
        event_ids: Iterable[int],
        max_per_id: int = 1,
        credential: Credential | None = None,
    ) -> Result[list[ShutdownLogEvent], str]:
        executor = self._open(target, credential)
        try:
            execution = executor.get_shutdown_events(event_ids, max_per_id=max_per_id)
        finally:
            executor.close()

        if not execution.success or execution.data is None:
            error_msg = execution.error or "Unknown PSRemote error"
            logger.warning("Event log query failed for %s: %s", target, error_msg)
            return Failure(f"Event log query failed: {error_msg}", context=execution.connection_info)

        raw_events = execution.data.get("events") or []
        # ConvertTo-Json may collapse a single-element array
        if isinstance(raw_events, dict):
            raw_events = [raw_events]

        try:
            events = [ShutdownLogEvent.model_validate(item) for item in raw_events]
        except ValidationError as e:
            logger.warning("Malformed event payload from %s: %s", target, e)
            return Failure(f"Malformed event payload: {e.error_count()} error(s)")

        logger.debug("Found %d shutdown event(s) on %s", len(events), target)
        return Success(events, metadata=execution.connection_info)
