"""Boundary mapping between backend JSON and workflow entities.

Backend payloads are loosely shaped: ids arrive as ``_id``, the state lives
in ``status``, and casing drifts between pages ("Pending" vs "pending").
These helpers pin each payload to its kind's canonical spelling before it
reaches the engine, and build the PATCH body a caller sends after a
successful transition.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable

from plant_workflows.core.domain.types import Entity

if TYPE_CHECKING:
    from plant_workflows.core.domain.transition_validator import TransitionResult
    from plant_workflows.core.domain.types import WorkflowDefinition

LOGGER = logging.getLogger(__name__)


def entity_from_payload(
    payload: dict[str, Any],
    definition: WorkflowDefinition,
    *,
    state_field: str = "status",
    id_field: str = "_id",
) -> Entity:
    """Map one backend record onto an Entity of ``definition.kind``.

    Unrecognised state strings are kept verbatim so that validation later
    reports them as UnknownState instead of silently coercing them.
    """
    if state_field not in payload or payload[state_field] is None:
        raise ValueError(f"{definition.kind} payload has no '{state_field}' field")

    raw_state = str(payload[state_field])
    state = definition.canonical_state(raw_state)
    if state is None:
        state = raw_state

    raw_id = payload.get(id_field)
    attributes = {k: v for k, v in payload.items() if k not in (state_field, id_field)}

    return Entity(
        kind=definition.kind,
        state=state,
        entity_id=None if raw_id is None else str(raw_id),
        attributes=attributes,
    )


def entities_from_payloads(
    payloads: Iterable[Any],
    definition: WorkflowDefinition,
    *,
    state_field: str = "status",
    id_field: str = "_id",
) -> list[Entity]:
    """List form of :func:`entity_from_payload`. Non-dict items are skipped."""
    out: list[Entity] = []
    for index, payload in enumerate(payloads):
        if not isinstance(payload, dict):
            LOGGER.warning(
                "Skipping %s payload #%d: expected an object, got %s",
                definition.kind,
                index,
                type(payload).__name__,
            )
            continue
        out.append(
            entity_from_payload(payload, definition, state_field=state_field, id_field=id_field)
        )
    return out


def transition_patch_body(
    result: TransitionResult,
    action: str,
    reason: str | None = None,
    *,
    state_field: str = "status",
) -> dict[str, Any]:
    """Build the ``PATCH /resource/:id`` body for a successful transition."""
    if not result.success or result.new_state is None:
        raise ValueError(f"cannot persist a failed transition ({result.error_kind})")

    body: dict[str, Any] = {state_field: result.new_state, "action": action}
    if reason:
        body["reason"] = reason
    return body
