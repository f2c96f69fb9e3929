"""
Boot Status Resolver.

Resolves the boot status of target computers from two remote queries:
OS timing facts and the most recent shutdown events of the System log.

Each target is resolved independently; a failure on one target is
reported for that target only and never aborts the batch.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol, Sequence

from autobootaudit.domain.boot_status import (
    SHUTDOWN_EVENT_IDS,
    BootStatusRecord,
    OsTimingFacts,
    ShutdownLogEvent,
    build_boot_status,
)
from autobootaudit.domain.config.models import Credential, EventLogPolicy
from autobootaudit.domain.targets import TargetParser
from autobootaudit.infrastructure.results import Result, Success, Failure

logger = logging.getLogger(__name__)

MAX_EVENTS_PER_ID = 1


# =============================================================================
# Protocols (Interfaces)
# =============================================================================


class OsTimingQuery(Protocol):
    """Protocol for querying OS timing facts of a target."""

    def query(self, target: str, credential: Credential | None = None) -> Result[OsTimingFacts, str]:
        ...


class ShutdownEventQuery(Protocol):
    """Protocol for querying shutdown events from a target's System log."""

    def query(
        self,
        target: str,
        event_ids: Iterable[int],
        max_per_id: int = 1,
        credential: Credential | None = None,
    ) -> Result[list[ShutdownLogEvent], str]:
        ...


# =============================================================================
# Errors and outcomes
# =============================================================================


class ResolutionErrorKind(Enum):
    """Why a target could not be resolved."""

    INVALID_TARGET = "invalid_target"
    UNREACHABLE_TARGET = "unreachable_target"
    EVENT_LOG_UNAVAILABLE = "event_log_unavailable"
    CREDENTIAL_UNAVAILABLE = "credential_unavailable"


@dataclass(frozen=True)
class ResolutionError:
    """Per-target resolution failure."""
    target: str
    kind: ResolutionErrorKind
    message: str


@dataclass(frozen=True)
class TargetOutcome:
    """Outcome of resolving one target in a batch."""
    target: str
    result: Result[BootStatusRecord, ResolutionError]

    @property
    def succeeded(self) -> bool:
        return isinstance(self.result, Success)


# =============================================================================
# Resolver
# =============================================================================


class BootStatusResolver:
    """
    Derives a BootStatusRecord per target.

    The event-log policy decides whether an unreadable event log fails
    the target (PROPAGATE) or yields an Unknown shutdown (ABSORB).
    """

    def __init__(
        self,
        timing_query: OsTimingQuery,
        event_query: ShutdownEventQuery,
        event_log_policy: EventLogPolicy = EventLogPolicy.ABSORB,
        max_parallel_targets: int = 1,
    ) -> None:
        if max_parallel_targets < 1:
            raise ValueError("max_parallel_targets must be at least 1")
        self.timing_query = timing_query
        self.event_query = event_query
        self.event_log_policy = event_log_policy
        self.max_parallel_targets = max_parallel_targets
        self._parser = TargetParser()

    def resolve(
        self,
        target: str,
        credential: Credential | None = None,
    ) -> Result[BootStatusRecord, ResolutionError]:
        """
        Resolve the boot status of a single target.

        Args:
            target: Host name or address
            credential: Optional credential passed to both queries

        Returns:
            Success with the record, or Failure with a ResolutionError
        """
        parsed = self._parser.parse_target_id(target)
        if isinstance(parsed, Failure):
            return Failure(ResolutionError(str(target), ResolutionErrorKind.INVALID_TARGET, parsed.error))

        hostname = parsed.value.hostname
        logger.info("Resolving boot status for %s", hostname)

        timing = self.timing_query.query(hostname, credential)
        if isinstance(timing, Failure):
            logger.error("Cannot read OS timing from %s: %s", hostname, timing.error)
            return Failure(
                ResolutionError(hostname, ResolutionErrorKind.UNREACHABLE_TARGET, str(timing.error)),
                context=timing.context,
            )

        events_result = self.event_query.query(
            hostname,
            SHUTDOWN_EVENT_IDS,
            max_per_id=MAX_EVENTS_PER_ID,
            credential=credential,
        )
        if isinstance(events_result, Failure):
            if self.event_log_policy is EventLogPolicy.PROPAGATE:
                logger.error("Cannot read event log from %s: %s", hostname, events_result.error)
                return Failure(
                    ResolutionError(hostname, ResolutionErrorKind.EVENT_LOG_UNAVAILABLE, str(events_result.error)),
                    context=events_result.context,
                )
            logger.warning("Event log unavailable on %s, shutdown reported as Unknown: %s",
                           hostname, events_result.error)
            events: list[ShutdownLogEvent] = []
        else:
            events = list(events_result.value)

        record = build_boot_status(timing.value, events)
        logger.info("%s: last shutdown %s (%s), uptime %s",
                    record.computer_name, record.last_shutdown_type.value,
                    record.last_shutdown_time.isoformat(), record.uptime_days)
        return Success(record)

    def resolve_many(
        self,
        targets: str | Sequence[str],
        credential: Credential | None = None,
    ) -> list[TargetOutcome]:
        """
        Resolve a batch of targets.

        Outcomes are returned in input order, one per target. Parallel
        resolution is used when ``max_parallel_targets`` is above 1.
        """
        if isinstance(targets, str):
            targets = [targets]
        return self.resolve_each([(target, credential) for target in targets])

    def resolve_each(
        self,
        requests: Sequence[tuple[str, Credential | None]],
    ) -> list[TargetOutcome]:
        """Resolve (target, credential) pairs, keeping input order."""
        requests = list(requests)

        if self.max_parallel_targets == 1 or len(requests) < 2:
            return [self._resolve_isolated(target, cred) for target, cred in requests]

        workers = min(self.max_parallel_targets, len(requests))
        logger.debug("Resolving %d targets with %d workers", len(requests), workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda pair: self._resolve_isolated(*pair), requests))

    def _resolve_isolated(self, target: str, credential: Credential | None) -> TargetOutcome:
        """Resolve one target, turning unexpected collaborator errors into a Failure."""
        try:
            result = self.resolve(target, credential)
        except Exception as e:  # pylint: disable=broad-except
            logger.exception("Unexpected error resolving %s", target)
            result = Failure(
                ResolutionError(str(target), ResolutionErrorKind.UNREACHABLE_TARGET, f"{type(e).__name__}: {e}")
            )
        return TargetOutcome(target=target, result=result)
