"""Registry of workflow definitions keyed by entity kind."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator

from plant_workflows.core.domain.error_kinds import (
    DuplicateKindError,
    RegistryFrozenError,
    UnknownKindError,
)

if TYPE_CHECKING:
    from plant_workflows.core.domain.types import WorkflowDefinition

LOGGER = logging.getLogger(__name__)


class StateMachineRegistry:
    """Holds one WorkflowDefinition per kind.

    Populated once at startup, then frozen. A frozen registry is never
    mutated and may be shared read-only across threads.
    """

    def __init__(self, definitions: Iterable[WorkflowDefinition] | None = None) -> None:
        self._definitions: dict[str, WorkflowDefinition] = {}
        self._frozen = False

        for definition in definitions or ():
            self.register(definition)

    def register(self, definition: WorkflowDefinition, *, kind: str | None = None) -> None:
        """Register ``definition`` under ``kind`` (defaults to ``definition.kind``)."""
        key = definition.kind if kind is None else kind

        if self._frozen:
            raise RegistryFrozenError(key)
        if key in self._definitions:
            raise DuplicateKindError(key)

        self._definitions[key] = definition
        LOGGER.info(
            "Registered workflow '%s' (%d states, %d terminal)",
            key,
            len(definition.states),
            len(definition.terminal_states),
        )

    def get(self, kind: str) -> WorkflowDefinition:
        try:
            return self._definitions[kind]
        except KeyError:
            raise UnknownKindError(kind) from None

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def kinds(self) -> list[str]:
        """Registered kinds in registration order."""
        return list(self._definitions)

    def __contains__(self, kind: object) -> bool:
        return kind in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[WorkflowDefinition]:
        return iter(self._definitions.values())
