"""Unit tests for the referential integrity passes.

Each pass is exercised on a typed definition produced by the schema layer,
and the combined validator is checked for collect-all behaviour.
"""

from __future__ import annotations

from typing import Any

from ecosystem_core.schemas.workflow import WorkflowDefinition
from ecosystem_core.validation import BusinessRuleError, find_cycles, validate_integrity
from ecosystem_core.validation.integrity import (
    check_acyclic,
    check_cron_schedules,
    check_dependencies_exist,
    check_unique_ids,
)
from ecosystem_core.validation.structural import validate_structure
from factories import make_step, make_workflow


def _typed(raw: dict[str, Any]) -> WorkflowDefinition:
    result = validate_structure(raw)
    assert result.definition is not None, result.errors
    return result.definition


def test_distinct_ids_yield_no_uniqueness_errors() -> None:
    definition = _typed(make_workflow(make_step("a"), make_step("b"), make_step("c")))

    assert check_unique_ids(definition) == []


def test_duplicate_id_is_reported_once() -> None:
    definition = _typed(make_workflow(make_step("build"), make_step("build"), make_step("build")))

    errors = check_unique_ids(definition)

    assert len(errors) == 1
    assert errors[0].path == "workflow.steps"
    assert errors[0].code == "ORBYT-STEP-006"
    assert "'build'" in errors[0].message


def test_unknown_dependency_is_reported_with_owner_and_reference() -> None:
    definition = _typed(make_workflow(make_step("a", needs=["B"])))

    errors = check_dependencies_exist(definition)

    assert len(errors) == 1
    assert errors[0].refs == ("a", "B")
    assert "'B'" in errors[0].message
    assert "'a'" in errors[0].message
    assert errors[0].code == "ORBYT-STEP-001"


def test_each_unresolved_reference_is_its_own_error() -> None:
    definition = _typed(
        make_workflow(make_step("a", needs=["x", "y"]), make_step("b", needs=["a", "z"]))
    )

    errors = check_dependencies_exist(definition)

    assert [e.refs[1] for e in errors] == ["x", "y", "z"]


def test_three_step_cycle_is_reported_once() -> None:
    definition = _typed(
        make_workflow(
            make_step("A", needs=["B"]),
            make_step("B", needs=["C"]),
            make_step("C", needs=["A"]),
        )
    )

    errors = check_acyclic(definition)

    assert len(errors) == 1
    cycle = errors[0].refs
    assert set(cycle) == {"A", "B", "C"}
    assert cycle[0] == cycle[-1]
    assert len(cycle) == 4
    assert errors[0].code == "ORBYT-WF-002"
    assert "A -> B -> C -> A" in errors[0].message


def test_self_dependency_is_a_cycle() -> None:
    definition = _typed(make_workflow(make_step("loop", needs=["loop"])))

    errors = check_acyclic(definition)

    assert [e.refs for e in errors] == [("loop", "loop")]


def test_diamond_is_acyclic() -> None:
    definition = _typed(
        make_workflow(
            make_step("d"),
            make_step("b", needs=["d"]),
            make_step("c", needs=["d"]),
            make_step("a", needs=["b", "c"]),
        )
    )

    assert check_acyclic(definition) == []


def test_find_cycles_reports_disjoint_loops_separately() -> None:
    graph = {"a": ["b"], "b": ["a"], "c": ["d"], "d": ["c"], "e": []}

    cycles = find_cycles(graph)

    assert cycles == [["a", "b", "a"], ["c", "d", "c"]]


def test_find_cycles_ignores_edges_to_unknown_nodes() -> None:
    assert find_cycles({"a": ["ghost"]}) == []


def test_find_cycles_handles_long_chains_without_recursion() -> None:
    n = 20_000
    graph = {f"s{i}": ([f"s{i - 1}"] if i else []) for i in range(n)}
    assert find_cycles(graph) == []

    graph["s0"] = [f"s{n - 1}"]
    cycles = find_cycles(graph)
    assert len(cycles) == 1
    assert len(cycles[0]) == n + 1


def test_cron_without_schedule_yields_one_error_at_triggers() -> None:
    definition = _typed(make_workflow(make_step("a"), triggers=[{"type": "cron"}]))

    errors = check_cron_schedules(definition)

    assert len(errors) == 1
    assert errors[0].path == "triggers"
    assert errors[0].code == "ORBYT-WF-007"


def test_cron_with_blank_schedule_is_incomplete() -> None:
    definition = _typed(
        make_workflow(
            make_step("a"),
            triggers=[{"type": "manual"}, {"type": "cron", "schedule": "  "}],
        )
    )

    assert len(check_cron_schedules(definition)) == 1


def test_all_passes_run_and_concatenate() -> None:
    definition = _typed(
        make_workflow(
            make_step("a", needs=["b"]),
            make_step("b", needs=["a"]),
            make_step("b"),
            make_step("c", needs=["missing"]),
            triggers=[{"type": "cron"}],
        )
    )

    result = validate_integrity(definition)

    assert not result.ok
    assert result.definition is None
    assert all(isinstance(e, BusinessRuleError) for e in result.errors)
    assert [e.code for e in result.errors] == [
        "ORBYT-STEP-006",
        "ORBYT-STEP-001",
        "ORBYT-WF-002",
        "ORBYT-WF-007",
    ]


def test_valid_definition_is_returned_unchanged(minimal_workflow: dict[str, Any]) -> None:
    definition = _typed(minimal_workflow)

    result = validate_integrity(definition)

    assert result.ok
    assert result.definition is definition
    assert result.errors == ()
