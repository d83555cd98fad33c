"""
Logging event sink.
"""
from __future__ import annotations

import logging
from typing import Any

from plant_workflows.core.events.events import TransitionAttemptedEvent


class LoggingEventSink:
    """Logs workflow events through the standard logging module.

    Refused transitions are logged at WARNING, everything else at INFO.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def on_event(self, event: Any) -> None:
        level = logging.INFO
        if isinstance(event, TransitionAttemptedEvent) and not event.success:
            level = logging.WARNING
        self._logger.log(level, "workflow_event", extra={"event": event})
