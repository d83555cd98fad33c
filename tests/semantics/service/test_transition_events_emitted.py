"""
Semantic test: every transition attempt is reported on the event bus.

Invariant:
attempt_transition() emits exactly one TransitionAttemptedEvent per call,
for successes and failures alike, and sinks receive it synchronously.
Without a configured bus the events are dropped but still counted.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest

from plant_workflows.config.defaults import default_workflow_config
from plant_workflows.core.domain.types import Entity
from plant_workflows.core.events.event_bus import EventBus
from plant_workflows.core.events.events import TransitionAttemptedEvent
from plant_workflows.core.events.sinks.audit_recorder import AuditRecorderSink
from plant_workflows.core.events.sinks.null_event_bus import NullEventBus
from plant_workflows.core.events.sinks.sink_logging import LoggingEventSink
from plant_workflows.service.workflow_service import WorkflowService


class _CollectingSink:
    def __init__(self) -> None:
        self.events: list[Any] = []

    def on_event(self, event: Any) -> None:
        self.events.append(event)


def test_success_and_failure_are_both_emitted() -> None:
    sink = _CollectingSink()
    service = WorkflowService.from_config(default_workflow_config(), event_bus=EventBus([sink]))
    batch = Entity(kind="manufacturing_batch", state="Draft", entity_id="B-7")

    started = service.attempt_transition(batch, "manufacturing_batch", "start", "supervisor")
    service.attempt_transition(batch, "manufacturing_batch", "complete", "supervisor", reason="rush")

    assert started.success
    assert sink.events == [
        TransitionAttemptedEvent(
            kind="manufacturing_batch",
            entity_id="B-7",
            actor="supervisor",
            action="start",
            prev_state="Draft",
            next_state="In Progress",
            success=True,
        ),
        TransitionAttemptedEvent(
            kind="manufacturing_batch",
            entity_id="B-7",
            actor="supervisor",
            action="complete",
            prev_state="Draft",
            next_state=None,
            success=False,
            error_kind="IllegalTransition",
            reason="rush",
        ),
    ]


def test_audit_recorder_writes_json_lines(tmp_path) -> None:
    path = tmp_path / "audit" / "transitions.jsonl"
    bus = EventBus([AuditRecorderSink(path)])
    service = WorkflowService.from_config(default_workflow_config(), event_bus=bus)

    service.attempt_transition(Entity(kind="report", state="open", entity_id="r-1"), "report", "resolve", "helpdesk")
    bus.close()
    bus.close()

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["event_type"] == "TransitionAttemptedEvent"
    assert record["entity_id"] == "r-1"
    assert record["next_state"] == "resolved"
    assert record["success"] is True


def test_closed_bus_refuses_events() -> None:
    bus = EventBus()
    bus.close()

    assert bus.closed
    with pytest.raises(RuntimeError):
        bus.emit(object())
    with pytest.raises(RuntimeError):
        bus.register(_CollectingSink())


def test_bus_as_context_manager_closes_sinks(tmp_path) -> None:
    path = tmp_path / "transitions.jsonl"
    sink = AuditRecorderSink(path)

    with EventBus([sink]) as bus:
        service = WorkflowService.from_config(default_workflow_config(), event_bus=bus)
        service.attempt_transition(Entity(kind="vendor", state="pending"), "vendor", "approve", "buyer")
        service.attempt_transition(Entity(kind="vendor", state="approved"), "vendor", "reject", "buyer")

    assert bus.closed
    assert bus.emitted == 2
    assert bus.sinks == (sink,)
    assert len(path.read_text(encoding="utf-8").splitlines()) == 2


def test_default_bus_counts_dropped_events(caplog: pytest.LogCaptureFixture) -> None:
    bus = NullEventBus()
    service = WorkflowService.from_config(default_workflow_config(), event_bus=bus)

    with caplog.at_level(logging.DEBUG, logger="plant_workflows.core.events.sinks.null_event_bus"):
        service.attempt_transition(Entity(kind="report", state="open", entity_id="r-9"), "report", "resolve", "helpdesk")
        service.attempt_transition(Entity(kind="report", state="resolved", entity_id="r-9"), "report", "resolve", "helpdesk")

    assert bus.dropped == 2
    assert bus.emitted == 2
    dropped = [r for r in caplog.records if r.name == "plant_workflows.core.events.sinks.null_event_bus"]
    assert [r.getMessage() for r in dropped] == [
        "Dropped workflow event report/r-9 action=resolve success=True",
        "Dropped workflow event report/r-9 action=resolve success=False",
    ]


def test_logging_sink_warns_on_refused_transition(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("plant_workflows.test.audit")
    service = WorkflowService.from_config(
        default_workflow_config(),
        event_bus=EventBus([LoggingEventSink(logger)]),
    )

    with caplog.at_level(logging.INFO, logger="plant_workflows.test.audit"):
        service.attempt_transition(Entity(kind="vendor", state="pending"), "vendor", "approve", "buyer")
        service.attempt_transition(Entity(kind="vendor", state="rejected"), "vendor", "approve", "buyer")

    records = [r for r in caplog.records if r.name == "plant_workflows.test.audit"]
    assert [r.levelno for r in records] == [logging.INFO, logging.WARNING]
    assert all(r.getMessage() == "workflow_event" for r in records)
    assert records[1].event.error_kind == "TerminalState"
