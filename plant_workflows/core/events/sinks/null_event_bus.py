"""
Event bus for callers that do not observe transitions.

Events are dropped, but counted and logged at DEBUG so a missing audit
configuration still leaves a trace.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from plant_workflows.core.events.event_bus import EventBus

if TYPE_CHECKING:
    from plant_workflows.core.events.events import TransitionAttemptedEvent

LOGGER = logging.getLogger(__name__)


class _DroppingSink:
    def __init__(self) -> None:
        self.dropped = 0

    def on_event(self, event: TransitionAttemptedEvent) -> None:
        self.dropped += 1
        LOGGER.debug(
            "Dropped workflow event %s/%s action=%s success=%s",
            event.kind,
            event.entity_id,
            event.action,
            event.success,
        )


class NullEventBus(EventBus):
    """Default bus of the service: no sinks observe transitions."""

    def __init__(self) -> None:
        self._dropping = _DroppingSink()
        super().__init__(sinks=[self._dropping])

    @property
    def dropped(self) -> int:
        return self._dropping.dropped
