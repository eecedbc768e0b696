"""Unit tests for the structural (schema) validation layer."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from ecosystem_core.schemas.workflow import CronTrigger, EventTrigger, WorkflowDefinition
from ecosystem_core.validation import StructuralError, validate_structure
from factories import make_step, make_workflow


def _paths(raw: Any) -> list[str]:
    result = validate_structure(raw)
    assert result.definition is None
    return [e.path for e in result.errors]


def test_minimal_definition_is_accepted_with_defaults(minimal_workflow: dict[str, Any]) -> None:
    result = validate_structure(minimal_workflow)

    assert result.ok
    definition = result.definition
    assert isinstance(definition, WorkflowDefinition)
    assert definition.policies.failure == "stop"
    assert definition.policies.concurrency == 1
    assert definition.policies.sandbox == "basic"
    assert [s.continue_on_error for s in definition.steps] == [False, False]
    assert definition.steps[1].needs == ["build"]


def test_kind_defaults_to_workflow() -> None:
    raw = make_workflow(make_step("build"))
    del raw["kind"]

    result = validate_structure(raw)

    assert result.definition is not None
    assert result.definition.kind == "workflow"


def test_missing_required_fields_are_reported() -> None:
    result = validate_structure({"kind": "job"})

    assert result.definition is None
    assert {e.path for e in result.errors} == {"version", "workflow"}
    assert all(isinstance(e, StructuralError) for e in result.errors)
    assert all(e.code == "ORBYT-WF-001" for e in result.errors)
    assert any("Missing required field 'version'" == e.message for e in result.errors)


def test_unknown_root_key_is_rejected() -> None:
    raw = make_workflow(make_step("build"), mystery={"a": 1})

    result = validate_structure(raw)

    assert len(result.errors) == 1
    assert result.errors[0].path == "mystery"
    assert "Unknown field 'mystery'" in result.errors[0].message


def test_workflow_body_is_closed() -> None:
    raw = make_workflow(make_step("build"))
    raw["workflow"]["parallel"] = True

    assert _paths(raw) == ["workflow.parallel"]


def test_nested_sections_accept_extension_fields() -> None:
    raw = make_workflow(
        make_step("build", x_cost_center="ops"),
        metadata={"name": "ci", "team": "platform"},
        policies={"failure": "continue", "retention": "7d"},
        annotations={"ai.intent": "build and ship"},
    )

    result = validate_structure(raw)

    assert result.definition is not None
    assert result.definition.metadata is not None
    assert result.definition.metadata.model_extra == {"team": "platform"}
    assert result.definition.policies.failure == "continue"
    assert result.definition.policies.concurrency == 1
    assert result.definition.to_dict()["annotations"] == {"ai.intent": "build and ship"}


def test_all_violations_are_reported_in_one_pass() -> None:
    raw = make_workflow(
        {"id": "1build", "uses": "noNamespace"},
        {"id": "ok", "uses": "cli.exec", "timeout": "10 minutes"},
    )
    raw["version"] = "v1"

    result = validate_structure(raw)

    assert result.definition is None
    assert {e.path for e in result.errors} == {
        "version",
        "workflow.steps.0.id",
        "workflow.steps.0.uses",
        "workflow.steps.1.timeout",
    }
    messages = {e.path: e.message for e in result.errors}
    assert messages["workflow.steps.0.id"].startswith("Step ID must start with letter")
    assert messages["workflow.steps.0.uses"].startswith("uses must be in format")
    assert "semantic versioning" in messages["version"]


def test_empty_step_list_is_rejected() -> None:
    result = validate_structure(make_workflow())

    assert len(result.errors) == 1
    assert result.errors[0].path == "workflow.steps"
    assert result.errors[0].message == "Workflow must have at least one step"


def test_kind_must_be_in_closed_enum() -> None:
    raw = make_workflow(make_step("build"))
    raw["kind"] = "service"

    assert _paths(raw) == ["kind"]


def test_policy_constraints() -> None:
    raw = make_workflow(make_step("build"), policies={"concurrency": 0, "failure": "explode"})

    assert set(_paths(raw)) == {"policies.concurrency", "policies.failure"}


def test_defaults_timeout_accepts_days_but_step_timeout_does_not() -> None:
    ok = make_workflow(make_step("build", timeout="30s"), defaults={"timeout": "1d"})
    assert validate_structure(ok).ok

    bad = make_workflow(make_step("build", timeout="1d"))
    assert _paths(bad) == ["workflow.steps.0.timeout"]


def test_retry_config_uses_wire_name_max() -> None:
    raw = make_workflow(make_step("build", retry={"max": 3, "backoff": "exponential", "delay": 500}))

    result = validate_structure(raw)

    assert result.definition is not None
    retry = result.definition.steps[0].retry
    assert retry is not None
    assert retry.max_attempts == 3
    assert result.definition.to_dict()["workflow"]["steps"][0]["retry"]["max"] == 3


def test_step_with_and_env_maps() -> None:
    raw = make_workflow(
        make_step("build", **{"with": {"command": "${inputs.cmd}"}, "env": {"CI": "1"}})
    )

    result = validate_structure(raw)

    assert result.definition is not None
    step = result.definition.steps[0]
    assert step.with_ == {"command": "${inputs.cmd}"}
    assert step.env == {"CI": "1"}


def test_triggers_are_discriminated_on_type() -> None:
    raw = make_workflow(
        make_step("build"),
        triggers=[
            {"type": "manual"},
            {"type": "cron", "schedule": "0 * * * *"},
            {"type": "event", "source": "git.push", "filters": {"branch": "main"}},
            {"type": "webhook", "endpoint": "/hooks/build"},
        ],
    )

    result = validate_structure(raw)

    assert result.definition is not None
    triggers = result.definition.triggers or []
    assert isinstance(triggers[1], CronTrigger)
    assert isinstance(triggers[2], EventTrigger)
    assert triggers[2].filters == {"branch": "main"}


def test_cron_without_schedule_passes_the_schema_layer() -> None:
    raw = make_workflow(make_step("build"), triggers=[{"type": "cron"}])

    assert validate_structure(raw).ok


def test_trigger_member_errors_point_at_the_trigger() -> None:
    raw = make_workflow(make_step("build"), triggers=[{"type": "event"}])

    assert _paths(raw) == ["triggers.0.source"]


def test_unknown_trigger_type_is_rejected() -> None:
    raw = make_workflow(make_step("build"), triggers=[{"type": "carrier-pigeon"}])

    assert _paths(raw) == ["triggers.0"]


def test_union_failures_collapse_to_one_error_per_location() -> None:
    raw = make_workflow(make_step("build"), resources={"cpu": ["two"]})

    assert _paths(raw) == ["resources.cpu"]


def test_map_keys_named_like_scalar_types_stay_in_the_path() -> None:
    raw = make_workflow(make_step("build"), inputs={"int": {"type": "integer"}})

    assert _paths(raw) == ["inputs.int.type"]


def test_literal_union_failure_reports_the_field() -> None:
    raw = make_workflow(make_step("build", telemetry={"trace": "loud"}))

    assert _paths(raw) == ["workflow.steps.0.telemetry.trace"]


def test_secret_references_must_name_a_provider() -> None:
    raw = make_workflow(
        make_step("build"),
        secrets={"keys": {"db": "vaulta:db/password", "api": "no-provider"}},
    )

    assert _paths(raw) == ["secrets.keys.api"]


def test_non_mapping_root_yields_single_error() -> None:
    result = validate_structure(["not", "a", "mapping"])

    assert len(result.errors) == 1
    assert result.errors[0].path == ""
    assert "must be a mapping" in result.errors[0].message


def test_accepted_definition_is_immutable(minimal_workflow: dict[str, Any]) -> None:
    definition = validate_structure(minimal_workflow).definition
    assert definition is not None

    with pytest.raises(ValidationError):
        definition.version = "2.0"  # type: ignore[misc]
