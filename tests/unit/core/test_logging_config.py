from __future__ import annotations

import json
import logging

import pytest

from stateflow.core.exceptions import InvalidTransitionError
from stateflow.core.logging import LogContext, build_log_event
from stateflow.core.logging_config import JsonFormatter


def test_build_log_event_merges_context_and_fields():
    payload = build_log_event(
        "state_machine.transition.executed",
        LogContext(object_type="Order", object_id=3, actor_id=7, trigger="pay"),
        source="Created",
        dest="Paid",
    )

    assert payload["event"] == "state_machine.transition.executed"
    assert payload["object_type"] == "Order"
    assert payload["actor_id"] == 7
    assert payload["dest"] == "Paid"
    assert "timestamp" in payload


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("stateflow.test", logging.INFO, __file__, 1, "transition", (), None)
    record.event = "state_machine.transition.executed"
    record.trigger = "pay"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["message"] == "transition"
    assert payload["event"] == "state_machine.transition.executed"
    assert payload["trigger"] == "pay"


def test_transition_emits_structured_log(caplog, handle, transition_engine, order):
    with caplog.at_level(logging.INFO, logger="stateflow.machine.engine"):
        transition_engine.do(handle, order, "pay", 7, 10)

    executed = [r for r in caplog.records if getattr(r, "event", None) == "state_machine.transition.executed"]
    assert len(executed) == 1
    assert executed[0].source == "Created"
    assert executed[0].dest == "Paid"
    assert executed[0].actor_id == 7


def test_failed_transition_is_logged_as_warning(caplog, handle, transition_engine, order):
    with caplog.at_level(logging.WARNING, logger="stateflow.machine.engine"):
        with pytest.raises(InvalidTransitionError):
            transition_engine.do(handle, order, "ship", 7, None)

    failed = [r for r in caplog.records if getattr(r, "event", None) == "state_machine.transition.failed"]
    assert [r.error_type for r in failed] == ["InvalidTransitionError"]
