"""
Semantic test: terminal states refuse every action.

Invariant:
For every registered kind and every terminal state, validate() fails with
TerminalState regardless of the action, including actions that are mapped
from other states.
"""

from __future__ import annotations

import pytest

from plant_workflows.config.defaults import default_workflow_config
from plant_workflows.core.domain.error_kinds import ErrorKind
from plant_workflows.core.domain.transition_validator import allowed_actions, validate

CONFIG = default_workflow_config()

TERMINAL_CASES = [
    (definition, state)
    for definition in CONFIG.workflows
    for state in sorted(definition.terminal_states)
]


@pytest.mark.parametrize(("definition", "state"), TERMINAL_CASES, ids=lambda v: getattr(v, "kind", v))
def test_terminal_state_refuses_any_action(definition, state) -> None:
    every_action = {a for actions in definition.transitions.values() for a in actions}
    every_action.add("unmapped-action")

    for action in sorted(every_action):
        result = validate(definition, state, action)
        assert not result.success
        assert result.error_kind == ErrorKind.TERMINAL_STATE
        assert result.new_state is None

    assert allowed_actions(definition, state) == []


def test_terminal_message_names_the_state() -> None:
    report = CONFIG.workflows[CONFIG.kinds().index("report")]

    result = validate(report, "resolved", "resolve")

    assert result.message == "This item has already been resolved and cannot be changed."
