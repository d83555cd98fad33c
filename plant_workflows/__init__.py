"""Public API for the plant_workflows package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Boundary adapters
# ----------------------------------------------------------------------
from plant_workflows.adapters.payload import (
    entities_from_payloads,
    entity_from_payload,
    transition_patch_body,
)

# ----------------------------------------------------------------------
# Config API
# ----------------------------------------------------------------------
from plant_workflows.config.defaults import DEFAULT_WORKFLOWS, default_workflow_config
from plant_workflows.config.workflow_config import WorkflowConfig, load_workflow_config

# ----------------------------------------------------------------------
# Domain
# ----------------------------------------------------------------------
from plant_workflows.core.domain.aggregator import TabCount, WorkflowAggregator
from plant_workflows.core.domain.error_kinds import (
    DuplicateKindError,
    ErrorKind,
    RegistryFrozenError,
    UnknownKindError,
    WorkflowError,
)
from plant_workflows.core.domain.registry import StateMachineRegistry
from plant_workflows.core.domain.transition_validator import (
    TransitionResult,
    TransitionValidator,
    allowed_actions,
    validate,
)
from plant_workflows.core.domain.types import (
    ALL_STATES,
    Entity,
    TransitionRequest,
    WorkflowDefinition,
)

# ----------------------------------------------------------------------
# Events
# ----------------------------------------------------------------------
from plant_workflows.core.events.event_bus import EventBus
from plant_workflows.core.events.events import TransitionAttemptedEvent
from plant_workflows.core.events.sinks.audit_recorder import AuditRecorderSink
from plant_workflows.core.events.sinks.null_event_bus import NullEventBus
from plant_workflows.core.events.sinks.sink_logging import LoggingEventSink

# ----------------------------------------------------------------------
# Routing / facade
# ----------------------------------------------------------------------
from plant_workflows.routing.role_routing import redirect_path_for_roles
from plant_workflows.service.workflow_service import WorkflowService

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Facade
    "WorkflowService",

    # Domain
    "ALL_STATES",
    "Entity",
    "TransitionRequest",
    "WorkflowDefinition",
    "StateMachineRegistry",
    "TransitionValidator",
    "TransitionResult",
    "validate",
    "allowed_actions",
    "WorkflowAggregator",
    "TabCount",

    # Errors
    "ErrorKind",
    "WorkflowError",
    "UnknownKindError",
    "DuplicateKindError",
    "RegistryFrozenError",

    # Config
    "WorkflowConfig",
    "load_workflow_config",
    "default_workflow_config",
    "DEFAULT_WORKFLOWS",

    # Events
    "EventBus",
    "NullEventBus",
    "LoggingEventSink",
    "AuditRecorderSink",
    "TransitionAttemptedEvent",

    # Adapters
    "entity_from_payload",
    "entities_from_payloads",
    "transition_patch_body",
    "redirect_path_for_roles",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("plant-workflows")
except PackageNotFoundError:
    __version__ = "0.0.0"
