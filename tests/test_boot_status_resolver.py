"""
Tests for BootStatusResolver: single-target resolution, event-log
failure policies and batch behaviour.
"""

import threading
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from autobootaudit.application.boot_status import (
    BootStatusResolver,
    ResolutionErrorKind,
)
from autobootaudit.domain.boot_status import UNKNOWN_SHUTDOWN_TIME, ShutdownType
from autobootaudit.domain.config import Credential, EventLogPolicy
from autobootaudit.infrastructure.results import Failure, Success
from conftest import make_event, make_facts


def _timing_query(facts_by_host=None, failing=()):
    query = MagicMock()

    def _query(target, credential=None):
        if target in failing:
            return Failure(f"WinRM unreachable: {target}")
        return Success((facts_by_host or {}).get(target, make_facts(target)))

    query.query.side_effect = _query
    return query


def _event_query(events=None, fail=False):
    query = MagicMock()
    if fail:
        query.query.return_value = Failure("Access is denied")
    else:
        query.query.return_value = Success(list(events or []))
    return query


class TestResolve:
    """Single-target resolution."""

    def test_normal_restart(self):
        resolver = BootStatusResolver(
            _timing_query(),
            _event_query([make_event(1074, datetime(2024, 1, 10, 7, 50))]),
        )

        result = resolver.resolve("HOST1")

        assert isinstance(result, Success)
        record = result.value
        assert record.last_shutdown_type is ShutdownType.NORMAL
        assert record.downtime == timedelta(minutes=10)
        assert record.uptime == timedelta(hours=1)

    def test_no_events(self):
        resolver = BootStatusResolver(_timing_query(), _event_query([]))

        record = resolver.resolve("HOST2").value

        assert record.computer_name == "HOST2"
        assert record.last_shutdown_type is ShutdownType.UNKNOWN
        assert record.last_shutdown_time == UNKNOWN_SHUTDOWN_TIME
        assert record.downtime == timedelta(0)

    def test_queries_fixed_event_ids_once_each(self):
        events = _event_query([])
        resolver = BootStatusResolver(_timing_query(), events)

        resolver.resolve("HOST1")

        args, kwargs = events.query.call_args
        assert args[0] == "HOST1"
        assert sorted(args[1]) == [41, 1074, 6008]
        assert kwargs["max_per_id"] == 1

    def test_credential_passed_to_both_queries(self):
        timing = _timing_query()
        events = _event_query([])
        credential = Credential(username="CORP\\ops", password=SecretStr("pw"))
        resolver = BootStatusResolver(timing, events)

        resolver.resolve("HOST1", credential)

        assert timing.query.call_args.args == ("HOST1", credential)
        assert events.query.call_args.kwargs["credential"] is credential

    def test_target_is_trimmed(self):
        timing = _timing_query()
        resolver = BootStatusResolver(timing, _event_query([]))

        resolver.resolve("  HOST1 ")

        assert timing.query.call_args.args[0] == "HOST1"

    def test_unreachable_target_is_failure(self):
        events = _event_query([])
        resolver = BootStatusResolver(_timing_query(failing={"DOWN"}), events)

        result = resolver.resolve("DOWN")

        assert isinstance(result, Failure)
        assert result.error.kind is ResolutionErrorKind.UNREACHABLE_TARGET
        assert result.error.target == "DOWN"
        assert "unreachable" in result.error.message
        events.query.assert_not_called()

    @pytest.mark.parametrize("target", ["", "   ", "two words", "host/path"])
    def test_invalid_target(self, target):
        timing = _timing_query()
        resolver = BootStatusResolver(timing, _event_query([]))

        result = resolver.resolve(target)

        assert isinstance(result, Failure)
        assert result.error.kind is ResolutionErrorKind.INVALID_TARGET
        timing.query.assert_not_called()


class TestEventLogPolicy:
    """Event-log failure handling."""

    def test_absorb_reports_unknown(self):
        resolver = BootStatusResolver(
            _timing_query(), _event_query(fail=True), event_log_policy=EventLogPolicy.ABSORB
        )

        result = resolver.resolve("HOST1")

        assert isinstance(result, Success)
        assert result.value.last_shutdown_type is ShutdownType.UNKNOWN
        assert result.value.last_shutdown_time == UNKNOWN_SHUTDOWN_TIME
        assert result.value.downtime == timedelta(0)

    def test_propagate_fails_target(self):
        resolver = BootStatusResolver(
            _timing_query(), _event_query(fail=True), event_log_policy=EventLogPolicy.PROPAGATE
        )

        result = resolver.resolve("HOST1")

        assert isinstance(result, Failure)
        assert result.error.kind is ResolutionErrorKind.EVENT_LOG_UNAVAILABLE
        assert "Access is denied" in result.error.message

    def test_default_policy_is_absorb(self):
        resolver = BootStatusResolver(_timing_query(), _event_query([]))
        assert resolver.event_log_policy is EventLogPolicy.ABSORB


class TestResolveMany:
    """Batch resolution."""

    def test_single_string_target(self):
        resolver = BootStatusResolver(_timing_query(), _event_query([]))

        outcomes = resolver.resolve_many("HOST1")

        assert len(outcomes) == 1
        assert outcomes[0].target == "HOST1"
        assert outcomes[0].succeeded

    def test_failures_do_not_stop_batch(self):
        resolver = BootStatusResolver(_timing_query(failing={"B"}), _event_query([]))

        outcomes = resolver.resolve_many(["A", "B", "C"])

        assert [o.target for o in outcomes] == ["A", "B", "C"]
        assert [o.succeeded for o in outcomes] == [True, False, True]
        assert outcomes[2].result.value.computer_name == "C"

    def test_collaborator_exception_is_isolated(self):
        timing = MagicMock()
        timing.query.side_effect = [Success(make_facts("A")), RuntimeError("boom"), Success(make_facts("C"))]
        resolver = BootStatusResolver(timing, _event_query([]))

        outcomes = resolver.resolve_many(["A", "B", "C"])

        assert [o.succeeded for o in outcomes] == [True, False, True]
        assert "RuntimeError" in outcomes[1].result.error.message

    def test_parallel_preserves_input_order(self):
        targets = [f"HOST{i}" for i in range(8)]
        release = threading.Event()

        class SlowFirstQuery:
            """HOST0 answers last so completion order differs from input order."""

            def query(self, target, credential=None):
                if target == "HOST0":
                    release.wait(timeout=2)
                elif target == "HOST7":
                    release.set()
                return Success(make_facts(target))

        timing = SlowFirstQuery()
        resolver = BootStatusResolver(timing, _event_query([]), max_parallel_targets=4)

        outcomes = resolver.resolve_many(targets)

        assert [o.target for o in outcomes] == targets
        assert [o.result.value.computer_name for o in outcomes] == targets

    def test_resolve_each_uses_per_target_credentials(self):
        timing = _timing_query()
        cred_a = Credential(username="a", password=SecretStr("x"))
        resolver = BootStatusResolver(timing, _event_query([]))

        resolver.resolve_each([("A", cred_a), ("B", None)])

        calls = [c.args for c in timing.query.call_args_list]
        assert calls == [("A", cred_a), ("B", None)]

    def test_invalid_parallelism(self):
        with pytest.raises(ValueError):
            BootStatusResolver(_timing_query(), _event_query([]), max_parallel_targets=0)
