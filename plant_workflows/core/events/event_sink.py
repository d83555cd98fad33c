"""
Workflow event sink interface.

A sink receives every transition attempt in emission order. Sinks holding a
resource (an open audit file, a remote handle) may also define close(); the
bus calls it once on shutdown.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from plant_workflows.core.events.events import TransitionAttemptedEvent


class EventSink(Protocol):
    def on_event(self, event: TransitionAttemptedEvent) -> None:
        """Consume one transition attempt."""
