"""Built-in workflow definitions for the dashboard's resource kinds.

State spellings follow what the backend stores for each kind, so casing is
deliberately not uniform across kinds (e.g. training plans start "Pending",
orders start "pending"). Payload adapters map other casings onto these.
"""

from __future__ import annotations

from typing import Any

from plant_workflows.config.workflow_config import WorkflowConfig

_APPROVAL_TRANSITIONS: dict[str, dict[str, str]] = {
    "pending": {
        "approve": "approved",
        "reject": "rejected",
    },
}

DEFAULT_WORKFLOWS: list[dict[str, Any]] = [
    {
        "kind": "order",
        "states": ["pending", "approved", "rejected"],
        "initial_state": "pending",
        "terminal_states": ["approved", "rejected"],
        "transitions": _APPROVAL_TRANSITIONS,
    },
    {
        "kind": "purchase_request",
        "states": ["pending", "verification needed", "approved", "rejected"],
        "initial_state": "pending",
        "terminal_states": ["approved", "rejected"],
        "transitions": {
            "pending": {
                "approve": "approved",
                "reject": "rejected",
                "request_verification": "verification needed",
            },
            "verification needed": {
                "approve": "approved",
                "reject": "rejected",
            },
        },
        "aliases": {"verification": "verification needed"},
        "labels": {"verification needed": "Verification Needed"},
    },
    {
        "kind": "vendor",
        "states": ["pending", "approved", "rejected"],
        "initial_state": "pending",
        "terminal_states": ["approved", "rejected"],
        "transitions": _APPROVAL_TRANSITIONS,
    },
    {
        "kind": "report",
        "states": ["open", "resolved"],
        "initial_state": "open",
        "terminal_states": ["resolved"],
        "transitions": {"open": {"resolve": "resolved"}},
    },
    {
        "kind": "training_plan",
        "states": ["Pending", "approved", "executed"],
        "initial_state": "Pending",
        "terminal_states": ["executed"],
        "transitions": {
            "Pending": {"approve": "approved"},
            "approved": {"execute": "executed"},
        },
    },
    {
        "kind": "manufacturing_batch",
        "states": ["Draft", "In Progress", "Completed", "Rejected", "On Hold"],
        "initial_state": "Draft",
        "terminal_states": ["Completed", "Rejected"],
        "transitions": {
            "Draft": {"start": "In Progress", "reject": "Rejected"},
            "In Progress": {"hold": "On Hold", "complete": "Completed", "reject": "Rejected"},
            "On Hold": {"resume": "In Progress", "reject": "Rejected"},
        },
    },
    {
        "kind": "material_request",
        "states": ["Pending", "Approved", "Rejected", "Cancelled"],
        "initial_state": "Pending",
        "terminal_states": ["Approved", "Rejected", "Cancelled"],
        "transitions": {
            "Pending": {"approve": "Approved", "reject": "Rejected", "cancel": "Cancelled"},
        },
    },
    {
        "kind": "production_plan",
        "states": ["Draft", "Active", "Completed", "Cancelled"],
        "initial_state": "Draft",
        "terminal_states": ["Completed", "Cancelled"],
        "transitions": {
            "Draft": {"activate": "Active", "cancel": "Cancelled"},
            "Active": {"complete": "Completed", "cancel": "Cancelled"},
        },
    },
    {
        "kind": "document",
        "states": ["pending", "approved", "rejected"],
        "initial_state": "pending",
        "terminal_states": ["approved", "rejected"],
        "transitions": _APPROVAL_TRANSITIONS,
    },
]


def default_workflow_config() -> WorkflowConfig:
    """Return a freshly validated config holding the built-in workflows."""
    return WorkflowConfig.from_json_obj({"workflows": DEFAULT_WORKFLOWS})
