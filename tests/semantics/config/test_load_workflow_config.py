"""
Semantic test: workflow configuration loading.

Invariant:
Definitions load from JSON or TOML into the same validated model; unknown
formats, missing files, duplicate kinds and broken definitions fail at load
time, before any service is built.
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from plant_workflows.config.defaults import DEFAULT_WORKFLOWS, default_workflow_config
from plant_workflows.config.workflow_config import WorkflowConfig, load_workflow_config
from plant_workflows.service.workflow_service import WorkflowService

REPORT_JSON = {
    "workflows": [
        {
            "kind": "report",
            "states": ["open", "resolved"],
            "initial_state": "open",
            "terminal_states": ["resolved"],
            "transitions": {"open": {"resolve": "resolved"}},
        }
    ]
}

REPORT_TOML = """
[[workflows]]
kind = "report"
states = ["open", "resolved"]
initial_state = "open"
terminal_states = ["resolved"]

[workflows.transitions.open]
resolve = "resolved"
"""


def test_json_and_toml_load_identically(tmp_path) -> None:
    json_path = tmp_path / "workflows.json"
    json_path.write_text(json.dumps(REPORT_JSON), encoding="utf-8")
    toml_path = tmp_path / "workflows.toml"
    toml_path.write_text(REPORT_TOML, encoding="utf-8")

    from_json = load_workflow_config(json_path)
    from_toml = load_workflow_config(toml_path)

    assert from_json == from_toml
    assert from_json.kinds() == ["report"]


def test_loaded_config_drives_the_service(tmp_path) -> None:
    path = tmp_path / "workflows.json"
    path.write_text(json.dumps(REPORT_JSON), encoding="utf-8")

    service = WorkflowService.from_config(load_workflow_config(path))

    assert service.registry.kinds() == ["report"]
    assert service.definition("report").initial_state == "open"


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_workflow_config(tmp_path / "absent.json")


def test_unsupported_suffix_raises(tmp_path) -> None:
    path = tmp_path / "workflows.yaml"
    path.write_text("workflows: []", encoding="utf-8")

    with pytest.raises(ValueError, match="unsupported"):
        load_workflow_config(path)


def test_duplicate_kinds_are_rejected() -> None:
    doubled = {"workflows": REPORT_JSON["workflows"] * 2}

    with pytest.raises(ValidationError, match="duplicate workflow kind"):
        WorkflowConfig.from_json_obj(doubled)


def test_broken_definition_fails_at_load(tmp_path) -> None:
    broken = json.loads(json.dumps(REPORT_JSON))
    broken["workflows"][0]["transitions"]["resolved"] = {"reopen": "open"}
    path = tmp_path / "workflows.json"
    path.write_text(json.dumps(broken), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_workflow_config(path)


def test_defaults_cover_every_dashboard_kind() -> None:
    config = default_workflow_config()

    assert config.kinds() == [w["kind"] for w in DEFAULT_WORKFLOWS]
    assert set(config.kinds()) >= {
        "order",
        "purchase_request",
        "vendor",
        "report",
        "training_plan",
        "manufacturing_batch",
    }


def test_merge_replaces_same_kind() -> None:
    override = WorkflowConfig.from_json_obj(
        {
            "workflows": [
                {
                    "kind": "report",
                    "states": ["open", "in review", "resolved"],
                    "initial_state": "open",
                    "terminal_states": ["resolved"],
                    "transitions": {
                        "open": {"review": "in review"},
                        "in review": {"resolve": "resolved"},
                    },
                }
            ]
        }
    )

    merged = default_workflow_config().merged_with(override)
    report = next(d for d in merged.workflows if d.kind == "report")

    assert report.states == ("open", "in review", "resolved")
    assert len(merged.workflows) == len(DEFAULT_WORKFLOWS)
