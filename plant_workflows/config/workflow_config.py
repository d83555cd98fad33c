"""Workflow configuration model.

Definitions are data, not code: adding a resource kind means adding an entry
to a JSON/TOML file (or to the built-in defaults), never a new class.

JSON example:
    {
      "workflows": [
        {
          "kind": "report",
          "states": ["open", "resolved"],
          "initial_state": "open",
          "terminal_states": ["resolved"],
          "transitions": {"open": {"resolve": "resolved"}}
        }
      ]
    }
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from plant_workflows.core.domain.registry import StateMachineRegistry
from plant_workflows.core.domain.types import WorkflowDefinition

LOGGER = logging.getLogger(__name__)


class WorkflowConfig(BaseModel):
    """Full set of workflow definitions for one deployment."""

    workflows: list[WorkflowDefinition] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> WorkflowConfig:
        """Create a WorkflowConfig from a JSON-compatible object."""
        return cls.model_validate(obj)

    @model_validator(mode="after")
    def validate_unique_kinds(self) -> WorkflowConfig:
        seen: set[str] = set()
        for definition in self.workflows:
            if definition.kind in seen:
                raise ValueError(f"duplicate workflow kind '{definition.kind}'")
            seen.add(definition.kind)
        return self

    def kinds(self) -> list[str]:
        return [d.kind for d in self.workflows]

    def build_registry(self) -> StateMachineRegistry:
        """Return a registry holding every configured definition (not frozen)."""
        return StateMachineRegistry(self.workflows)

    def merged_with(self, other: WorkflowConfig) -> WorkflowConfig:
        """Return a config where ``other``'s definitions replace same-kind ones."""
        by_kind: dict[str, WorkflowDefinition] = {d.kind: d for d in self.workflows}
        for definition in other.workflows:
            by_kind[definition.kind] = definition
        return WorkflowConfig(workflows=list(by_kind.values()))


def load_workflow_config(path: str | Path) -> WorkflowConfig:
    """Load a WorkflowConfig from a ``.json`` or ``.toml`` file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    suffix = path.suffix.lower()
    if suffix == ".json":
        raw = json.loads(path.read_text(encoding="utf-8"))
    elif suffix == ".toml":
        with path.open("rb") as fh:
            raw = tomllib.load(fh)
    else:
        raise ValueError(f"unsupported workflow config format: {path.suffix!r}")

    config = WorkflowConfig.from_json_obj(raw)
    LOGGER.info("Loaded %d workflow definitions from %s", len(config.workflows), path)
    return config
