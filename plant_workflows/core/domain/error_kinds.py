"""Workflow error taxonomy.

Transition outcomes carry an ``ErrorKind`` in their result. Registry and
configuration faults are raised as ``WorkflowError`` subclasses; they are
startup-fatal and must not be turned into results.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    UNKNOWN_KIND = "UnknownKind"
    UNKNOWN_STATE = "UnknownState"
    TERMINAL_STATE = "TerminalState"
    ILLEGAL_TRANSITION = "IllegalTransition"
    DUPLICATE_KIND = "DuplicateKind"
    REGISTRY_FROZEN = "RegistryFrozen"

    def user_message(self, *, state: str | None = None, action: str | None = None) -> str:
        """Return a human-readable explanation suitable for the UI."""
        if self is ErrorKind.TERMINAL_STATE:
            if state:
                return f"This item has already been {state.lower()} and cannot be changed."
            return "This item is closed and cannot be changed."
        if self is ErrorKind.ILLEGAL_TRANSITION:
            if action and state:
                return f"'{action}' is not allowed while the item is {state.lower()}."
            return "This action is not allowed for the item's current status."
        if self is ErrorKind.UNKNOWN_STATE:
            if state:
                return f"The item's status '{state}' is not recognised."
            return "The item's status is not recognised."
        if self is ErrorKind.UNKNOWN_KIND:
            return "This type of item has no approval workflow."
        if self is ErrorKind.REGISTRY_FROZEN:
            return "Workflows cannot be changed while the application is running."
        return "This workflow is already configured."


class WorkflowError(Exception):
    """Base class for raised workflow faults."""

    error_kind: ErrorKind

    def __init__(self, message: str, *, error_kind: ErrorKind) -> None:
        super().__init__(message)
        self.error_kind = error_kind


class UnknownKindError(WorkflowError, KeyError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"no workflow registered for kind '{kind}'", error_kind=ErrorKind.UNKNOWN_KIND)
        self.kind = kind

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class DuplicateKindError(WorkflowError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"workflow for kind '{kind}' is already registered", error_kind=ErrorKind.DUPLICATE_KIND)
        self.kind = kind


class RegistryFrozenError(WorkflowError):
    def __init__(self, kind: str) -> None:
        super().__init__(
            f"cannot register '{kind}': registry is frozen",
            error_kind=ErrorKind.REGISTRY_FROZEN,
        )
        self.kind = kind

