"""Workflow service facade.

The only entry point UI and API adapters call. It resolves the definition for
a kind, delegates to the validator and aggregator, and reports every
transition attempt on the event bus. It never persists anything: callers
send the returned entity copy to the backend themselves and can retry or
roll back that call without involving the engine.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Sequence

from plant_workflows.core.domain.aggregator import TabCount, WorkflowAggregator
from plant_workflows.core.domain.error_kinds import ErrorKind, UnknownKindError
from plant_workflows.core.domain.registry import StateMachineRegistry
from plant_workflows.core.domain.transition_validator import TransitionResult, TransitionValidator
from plant_workflows.core.domain.types import TransitionRequest
from plant_workflows.core.events.events import TransitionAttemptedEvent
from plant_workflows.core.events.sinks.null_event_bus import NullEventBus

if TYPE_CHECKING:
    from plant_workflows.config.workflow_config import WorkflowConfig
    from plant_workflows.core.domain.types import Entity, WorkflowDefinition
    from plant_workflows.core.events.event_bus import EventBus

LOGGER = logging.getLogger(__name__)


class WorkflowService:
    """Facade over registry, validator and aggregator."""

    def __init__(
        self,
        registry: StateMachineRegistry,
        *,
        event_bus: EventBus | None = None,
        validator: TransitionValidator | None = None,
        aggregator: WorkflowAggregator | None = None,
    ) -> None:
        # The registry is shared read-only from here on.
        registry.freeze()
        self._registry = registry
        self._event_bus = event_bus if event_bus is not None else NullEventBus()
        self._validator = validator if validator is not None else TransitionValidator()
        self._aggregator = aggregator if aggregator is not None else WorkflowAggregator()

    @classmethod
    def from_config(cls, config: WorkflowConfig, *, event_bus: EventBus | None = None) -> WorkflowService:
        """Build a service with a registry populated from ``config``."""
        return cls(config.build_registry(), event_bus=event_bus)

    @property
    def registry(self) -> StateMachineRegistry:
        return self._registry

    def definition(self, kind: str) -> WorkflowDefinition:
        return self._registry.get(kind)

    # ---- Aggregation ----

    def get_counts(self, entities: Iterable[Entity], kind: str) -> dict[str, int]:
        """Per-state counts plus ``"all"`` for tab badges.

        Raises UnknownKindError if ``kind`` is not registered.
        """
        return self._aggregator.count_by_state(entities, self._registry.get(kind))

    def filter(self, entities: Iterable[Entity], kind: str, state: str) -> list[Entity]:
        """Entities of ``kind`` in ``state`` (``"all"``, an alias, or any casing)."""
        return self._aggregator.filter(entities, self._registry.get(kind), state)

    def tab_counts(self, entities: Iterable[Entity], kind: str) -> list[TabCount]:
        return self._aggregator.tab_counts(entities, self._registry.get(kind))

    def search(
        self,
        entities: Sequence[Entity],
        kind: str,
        query: str,
        fields: Sequence[str] = (),
    ) -> list[Entity]:
        """Search within entities of ``kind``."""
        of_kind = self.filter(entities, kind, "all")
        return self._aggregator.search(of_kind, query, fields)

    # ---- Transitions ----

    def allowed_actions(self, entity: Entity) -> list[str]:
        """Actions currently legal for ``entity``; empty for unknown kinds."""
        if entity.kind not in self._registry:
            return []
        return self._validator.allowed_actions(self._registry.get(entity.kind), entity.state)

    def attempt_transition(
        self,
        entity: Entity,
        kind: str,
        action: str,
        actor: str,
        *,
        reason: str | None = None,
    ) -> TransitionResult:
        """Validate ``action`` against ``entity`` and compute its next state.

        On success the result carries a new entity copy in the next state;
        the passed-in entity is left untouched. Failures are returned, not
        raised, so the UI can branch on ``result.error_kind``.
        """
        request = TransitionRequest(
            entity_id=entity.entity_id,
            kind=kind,
            action=action,
            actor=actor,
            reason=reason,
        )

        if not kind or entity.kind != kind:
            result = TransitionResult.fail(ErrorKind.UNKNOWN_KIND)
        else:
            try:
                definition = self._registry.get(kind)
            except UnknownKindError:
                result = TransitionResult.fail(ErrorKind.UNKNOWN_KIND)
            else:
                result = self._validator.validate(definition, entity.state, action)

        if result.success:
            result = TransitionResult(
                success=True,
                new_state=result.new_state,
                entity=entity.with_state(result.new_state),
            )

        LOGGER.debug(
            "Transition %s/%s %s --%s--> %s (%s)",
            kind,
            entity.entity_id,
            entity.state,
            action,
            result.new_state,
            "ok" if result.success else result.error_kind,
        )
        self._emit(request, entity.state, result)
        return result

    def _emit(self, request: TransitionRequest, prev_state: str, result: TransitionResult) -> None:
        self._event_bus.emit(
            TransitionAttemptedEvent(
                kind=request.kind,
                entity_id=request.entity_id,
                actor=request.actor,
                action=request.action,
                prev_state=prev_state,
                next_state=result.new_state,
                success=result.success,
                error_kind=None if result.error_kind is None else str(result.error_kind),
                reason=request.reason,
            )
        )
