"""Per-state counting, filtering and search over entity collections.

All functions take caller-owned sequences and return new lists/dicts. Input
order is preserved so UI lists do not reorder between polls. Entities of a
different kind are ignored rather than treated as errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

from plant_workflows.core.domain.types import ALL_STATES

if TYPE_CHECKING:
    from plant_workflows.core.domain.types import Entity, WorkflowDefinition


@dataclass(frozen=True, slots=True)
class TabCount:
    """One tab badge: filter id, display label, number of matching entities."""

    id: str
    label: str
    count: int


class WorkflowAggregator:
    """Summarises and filters collections by workflow state."""

    def count_by_state(self, entities: Iterable[Entity], definition: WorkflowDefinition) -> dict[str, int]:
        """Count entities of ``definition.kind`` per state.

        Every defined state is present (zero-filled), in definition order,
        followed by ``"all"``. Entities whose state is not part of the
        definition are left out entirely, so the state counts always sum to
        ``"all"``.
        """
        counts: dict[str, int] = {state: 0 for state in definition.states}

        for entity in entities:
            if entity.kind == definition.kind and entity.state in counts:
                counts[entity.state] += 1

        counts[ALL_STATES] = sum(counts.values())
        return counts

    def filter(self, entities: Iterable[Entity], definition: WorkflowDefinition, state: str) -> list[Entity]:
        """Return entities of the kind in ``state`` (or any defined state for ``"all"``).

        ``state`` may also be an alias or a differently-cased state name.
        Names the definition does not know match nothing.
        """
        resolved = definition.resolve_filter_state(state)
        if resolved is None:
            return []

        if resolved == ALL_STATES:
            return [e for e in entities if e.kind == definition.kind and definition.has_state(e.state)]

        return [e for e in entities if e.kind == definition.kind and e.state == resolved]

    def tab_counts(self, entities: Iterable[Entity], definition: WorkflowDefinition) -> list[TabCount]:
        """Return tab badges: ``"all"`` first, then one tab per state."""
        counts = self.count_by_state(entities, definition)

        tabs = [TabCount(id=ALL_STATES, label="All", count=counts[ALL_STATES])]
        for state in definition.states:
            tabs.append(TabCount(id=state, label=definition.label_for(state), count=counts[state]))
        return tabs

    def search(
        self,
        entities: Sequence[Entity],
        query: str,
        fields: Sequence[str] = (),
    ) -> list[Entity]:
        """Case-insensitive substring search over state, id and ``fields``.

        Attribute fields that are missing or None never match. An empty or
        whitespace-only query returns every entity.
        """
        needle = query.strip().casefold()
        if not needle:
            return list(entities)

        out: list[Entity] = []
        for entity in entities:
            haystack: list[str] = [entity.state]
            if entity.entity_id is not None:
                haystack.append(entity.entity_id)
            for field in fields:
                value = entity.attributes.get(field)
                if value is not None:
                    haystack.append(str(value))

            if any(needle in text.casefold() for text in haystack):
                out.append(entity)
        return out
