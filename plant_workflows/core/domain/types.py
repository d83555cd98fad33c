"""Core workflow data models.

This module defines the canonical Pydantic models shared by the registry,
validator, aggregator and service: workflow definitions (one per entity kind)
and the generic entity shape the engine operates on. Definitions are
validated once at load time and treated as read-only afterwards.
"""

# pylint: disable=missing-function-docstring
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Pseudo-state used by tab counts and filters to mean "every entity of a kind".
ALL_STATES: str = "all"


# ---------------------------------------------------------------------------
# Workflow definitions
# ---------------------------------------------------------------------------


class WorkflowDefinition(BaseModel):
    """States and allowed transitions for one entity kind.

    Transitions are keyed ``current_state -> action -> next_state``. The
    nesting keeps every (state, action) pair unique; a missing entry means
    the action is illegal in that state.
    """

    kind: str = Field(..., min_length=1)
    states: tuple[str, ...] = Field(..., min_length=1)
    initial_state: str = Field(..., min_length=1)
    terminal_states: frozenset[str] = Field(default_factory=frozenset)
    transitions: dict[str, dict[str, str]] = Field(default_factory=dict)

    # Tab/filter names that resolve to a state (e.g. "verification").
    aliases: dict[str, str] = Field(default_factory=dict)
    # Optional display labels per state for tab badges.
    labels: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def validate_consistency(self) -> WorkflowDefinition:
        """Enforce structural invariants of the definition."""
        known = set(self.states)

        if len(known) != len(self.states):
            raise ValueError(f"{self.kind}: duplicate state names")

        folded = {s.casefold() for s in self.states}
        if len(folded) != len(self.states):
            raise ValueError(f"{self.kind}: state names must be unique ignoring case")

        if ALL_STATES in folded:
            raise ValueError(f"{self.kind}: '{ALL_STATES}' is reserved and cannot be a state")

        if self.initial_state not in known:
            raise ValueError(f"{self.kind}: initial_state '{self.initial_state}' is not a state")

        unknown_terminal = self.terminal_states - known
        if unknown_terminal:
            raise ValueError(f"{self.kind}: unknown terminal states {sorted(unknown_terminal)}")

        for source, actions in self.transitions.items():
            if source not in known:
                raise ValueError(f"{self.kind}: transition source '{source}' is not a state")
            if source in self.terminal_states and actions:
                raise ValueError(f"{self.kind}: terminal state '{source}' has outgoing transitions")
            for action, target in actions.items():
                if not action:
                    raise ValueError(f"{self.kind}: empty action name from '{source}'")
                if target not in known:
                    raise ValueError(
                        f"{self.kind}: transition '{source}' --{action}--> '{target}' targets an unknown state"
                    )

        for alias, target in self.aliases.items():
            if alias.casefold() == ALL_STATES:
                raise ValueError(f"{self.kind}: '{ALL_STATES}' is reserved and cannot be an alias")
            if alias in known:
                raise ValueError(f"{self.kind}: alias '{alias}' shadows a state")
            if target not in known:
                raise ValueError(f"{self.kind}: alias '{alias}' targets unknown state '{target}'")

        unknown_labels = set(self.labels) - known
        if unknown_labels:
            raise ValueError(f"{self.kind}: labels for unknown states {sorted(unknown_labels)}")

        return self

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> WorkflowDefinition:
        """Create a WorkflowDefinition from a JSON-compatible object."""
        return cls.model_validate(obj)

    def is_terminal(self, state: str) -> bool:
        return state in self.terminal_states

    def has_state(self, state: str) -> bool:
        return state in self.states

    def next_state(self, state: str, action: str) -> str | None:
        """Return the mapped next state, or None if (state, action) is unmapped."""
        actions = self.transitions.get(state)
        if actions is None:
            return None
        return actions.get(action)

    def actions_for(self, state: str) -> list[str]:
        """Return the legal actions from ``state`` in definition order."""
        if state in self.terminal_states:
            return []
        return list(self.transitions.get(state, {}))

    def canonical_state(self, raw: str | None) -> str | None:
        """Return the defined spelling of ``raw`` ignoring case, or None."""
        if raw is None:
            return None
        needle = raw.strip().casefold()
        for state in self.states:
            if state.casefold() == needle:
                return state
        return None

    def resolve_filter_state(self, name: str) -> str | None:
        """Resolve a tab/filter name to a state, ``"all"``, or None if unknown.

        Exact state and alias names win; otherwise names are matched
        ignoring case and surrounding whitespace.
        """
        if name == ALL_STATES or name in self.states:
            return name
        if name in self.aliases:
            return self.aliases[name]

        needle = name.strip().casefold()
        if needle == ALL_STATES:
            return ALL_STATES
        state = self.canonical_state(name)
        if state is not None:
            return state
        for alias, target in self.aliases.items():
            if alias.casefold() == needle:
                return target
        return None

    def label_for(self, state: str) -> str:
        return self.labels.get(state, state)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class Entity(BaseModel):
    """Generic workflow-governed resource.

    Concrete resources (orders, vendors, reports, batches, ...) are owned by
    the backend. The engine only reads ``state`` and produces updated copies;
    every other field travels untouched in ``attributes``.
    """

    kind: str = Field(..., min_length=1)
    state: str
    entity_id: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def with_state(self, state: str) -> Entity:
        """Return an independent copy of this entity in ``state``.

        The copy is deep so that mutating its ``attributes`` never reaches
        the caller's original.
        """
        return self.model_copy(update={"state": state}, deep=True)


class TransitionRequest(BaseModel):
    """A single user action against an entity. Built per call, never stored.

    Fields are recorded as given: an empty kind or action is a refused
    transition, not a malformed request.
    """

    entity_id: str | None = None
    kind: str
    action: str
    actor: str
    reason: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)
