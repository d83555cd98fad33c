"""
Transition legality checks.

Validation is pure: it never mutates the definition or the entity and never
raises for an expected outcome. Illegal requests come back as a failed
TransitionResult carrying an ErrorKind so the caller can branch on it (for
example to disable an "Approve" button once an item is terminal).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from plant_workflows.core.domain.error_kinds import ErrorKind

if TYPE_CHECKING:
    from plant_workflows.core.domain.types import Entity, WorkflowDefinition


# ---------------------------------------------------------------------------
# Result model (internal, not part of the JSON schema)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """Outcome of a single transition attempt.

    - success: True if the action is legal from the current state
    - new_state: the validated next state (success only)
    - error_kind: why the transition was refused (failure only)
    - entity: updated entity copy, populated by the service on success
    - message: user-facing explanation (failure only)
    """

    success: bool
    new_state: str | None = None
    error_kind: ErrorKind | None = None
    entity: Entity | None = None
    message: str | None = None

    @classmethod
    def ok(cls, new_state: str) -> TransitionResult:
        return cls(success=True, new_state=new_state)

    @classmethod
    def fail(
        cls,
        error_kind: ErrorKind,
        *,
        state: str | None = None,
        action: str | None = None,
    ) -> TransitionResult:
        return cls(
            success=False,
            error_kind=error_kind,
            message=error_kind.user_message(state=state, action=action),
        )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate(definition: WorkflowDefinition, current_state: str, action: str) -> TransitionResult:
    """Decide whether ``action`` is legal from ``current_state``.

    Checks run in a fixed order: unknown state, terminal state, unmapped
    (state, action) pair. The first failing check determines the error kind.
    """
    if not definition.has_state(current_state):
        return TransitionResult.fail(ErrorKind.UNKNOWN_STATE, state=current_state, action=action)

    if definition.is_terminal(current_state):
        return TransitionResult.fail(ErrorKind.TERMINAL_STATE, state=current_state, action=action)

    next_state = definition.next_state(current_state, action)
    if next_state is None:
        return TransitionResult.fail(ErrorKind.ILLEGAL_TRANSITION, state=current_state, action=action)

    return TransitionResult.ok(next_state)


def allowed_actions(definition: WorkflowDefinition, current_state: str) -> list[str]:
    """Return the actions that would validate from ``current_state``."""
    if not definition.has_state(current_state):
        return []
    return definition.actions_for(current_state)


class TransitionValidator:
    """Object form of :func:`validate` for callers that inject collaborators."""

    def validate(self, definition: WorkflowDefinition, current_state: str, action: str) -> TransitionResult:
        return validate(definition, current_state, action)

    def allowed_actions(self, definition: WorkflowDefinition, current_state: str) -> list[str]:
        return allowed_actions(definition, current_state)
