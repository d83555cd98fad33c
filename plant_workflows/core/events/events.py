"""
Workflow event models.

Events record transition attempts as immutable facts. They are consumed by
loggers and audit recorders; the engine never reads them back.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TransitionAttemptedEvent:
    kind: str
    entity_id: str | None
    actor: str
    action: str

    prev_state: str
    next_state: str | None

    success: bool
    error_kind: str | None = None
    reason: str | None = None
