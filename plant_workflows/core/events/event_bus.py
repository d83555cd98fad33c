"""
Synchronous fan-out of workflow events.

Sinks run in the caller's thread, in registration order. A sink that raises
aborts the emit; the service does not guard against failing sinks.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from plant_workflows.core.events.event_sink import EventSink
    from plant_workflows.core.events.events import TransitionAttemptedEvent


class EventBus:
    """Delivers transition events to sinks until closed."""

    def __init__(self, sinks: Iterable[EventSink] | None = None) -> None:
        self._sinks: list[EventSink] = list(sinks) if sinks is not None else []
        self._emitted = 0
        self._closed = False

    @property
    def sinks(self) -> tuple[EventSink, ...]:
        return tuple(self._sinks)

    @property
    def emitted(self) -> int:
        """Number of events delivered since construction."""
        return self._emitted

    @property
    def closed(self) -> bool:
        return self._closed

    def register(self, sink: EventSink) -> None:
        if self._closed:
            raise RuntimeError("cannot register a sink on a closed event bus")
        self._sinks.append(sink)

    def emit(self, event: TransitionAttemptedEvent) -> None:
        if self._closed:
            raise RuntimeError("event bus is closed")
        for sink in self._sinks:
            sink.on_event(event)
        self._emitted += 1

    def close(self) -> None:
        """Close sinks that define close(). Later calls are no-ops."""
        if self._closed:
            return
        self._closed = True

        for sink in self._sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()

    def __enter__(self) -> EventBus:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
