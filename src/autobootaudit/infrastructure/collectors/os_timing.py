"""
OS timing collector.
Reads boot, clock and install timestamps from Win32_OperatingSystem.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from autobootaudit.domain.boot_status import OsTimingFacts
from autobootaudit.domain.config.models import Credential
from autobootaudit.infrastructure.collectors.base import WinRmCollector
from autobootaudit.infrastructure.results import Result, Success, Failure

logger = logging.getLogger(__name__)


class WinRmOsTimingQuery(WinRmCollector):
    """
    Queries OS timing facts over PowerShell remoting.
    Railway-oriented: returns Success with facts or Failure with reason.
    """

    def query(self, target: str, credential: Credential | None = None) -> Result[OsTimingFacts, str]:
        executor = self._open(target, credential)
        try:
            execution = executor.get_os_timing()
        finally:
            executor.close()

        if not execution.success or not execution.data:
            error_msg = execution.error or "Unknown PSRemote error"
            logger.warning("OS timing query failed for %s: %s", target, error_msg)
            return Failure(f"OS timing query failed: {error_msg}", context=execution.connection_info)

        payload = {k: v for k, v in execution.data.items() if k not in ("success", "error")}
        try:
            facts = OsTimingFacts.model_validate(payload)
        except ValidationError as e:
            logger.warning("Malformed OS timing payload from %s: %s", target, e)
            return Failure(f"Malformed OS timing payload: {e.error_count()} error(s)")

        logger.debug("OS timing for %s: boot=%s", target, facts.last_boot_up_time)
        return Success(facts, metadata=execution.connection_info)
