"""Referential integrity: business rules over an already typed definition.

Four independent passes run on every call and their findings are
concatenated, so one report carries everything wrong with the step graph:

- uniqueness of step ids
- existence of every `needs` reference
- acyclicity of the `needs` graph
- completeness of cron triggers
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from ecosystem_core.schemas.workflow import CronTrigger, WorkflowDefinition

from .result import BusinessRuleError, ValidationResult

logger = logging.getLogger(__name__)

DUPLICATE_STEP_CODE = "ORBYT-STEP-006"
MISSING_STEP_CODE = "ORBYT-STEP-001"
CYCLE_CODE = "ORBYT-WF-002"
MISSING_FIELD_CODE = "ORBYT-WF-007"

STEPS_PATH = "workflow.steps"
TRIGGERS_PATH = "triggers"


def check_unique_ids(definition: WorkflowDefinition) -> list[BusinessRuleError]:
    seen: set[str] = set()
    reported: set[str] = set()
    errors: list[BusinessRuleError] = []
    for step_id in definition.step_ids():
        if step_id in seen and step_id not in reported:
            reported.add(step_id)
            errors.append(
                BusinessRuleError(
                    path=STEPS_PATH,
                    message=f"Step IDs must be unique within a workflow: '{step_id}' is declared more than once",
                    code=DUPLICATE_STEP_CODE,
                    refs=(step_id,),
                )
            )
        seen.add(step_id)
    return errors


def check_dependencies_exist(definition: WorkflowDefinition) -> list[BusinessRuleError]:
    known = set(definition.step_ids())
    errors: list[BusinessRuleError] = []
    for step in definition.steps:
        for dependency in step.needs or ():
            if dependency not in known:
                errors.append(
                    BusinessRuleError(
                        path=STEPS_PATH,
                        message=f"Step '{step.id}' needs unknown step '{dependency}'",
                        code=MISSING_STEP_CODE,
                        refs=(step.id, dependency),
                    )
                )
    return errors


class _Color(Enum):
    WHITE = 0
    GRAY = 1
    BLACK = 2


def find_cycles(graph: dict[str, list[str]]) -> list[list[str]]:
    """Depth-first search with white/gray/black marking.

    Every edge into a gray node closes a loop; the loop is returned as the
    ordered ids from the repeated node back to itself. Edges to ids that are
    not nodes of the graph are ignored. Iterative, O(nodes + edges).
    """

    color = {node: _Color.WHITE for node in graph}
    cycles: list[list[str]] = []

    for root in graph:
        if color[root] is not _Color.WHITE:
            continue
        path: list[str] = [root]
        stack: list[tuple[str, int]] = [(root, 0)]
        color[root] = _Color.GRAY
        while stack:
            node, i = stack[-1]
            edges = graph[node]
            if i >= len(edges):
                stack.pop()
                path.pop()
                color[node] = _Color.BLACK
                continue
            stack[-1] = (node, i + 1)
            target = edges[i]
            state = color.get(target)
            if state is _Color.WHITE:
                color[target] = _Color.GRAY
                stack.append((target, 0))
                path.append(target)
            elif state is _Color.GRAY:
                start = path.index(target)
                cycles.append([*path[start:], target])
    return cycles


def dependency_graph(definition: WorkflowDefinition) -> dict[str, list[str]]:
    """Edges `step -> dependency`; a duplicated id merges into one node."""

    graph: dict[str, list[str]] = {}
    for step in definition.steps:
        edges = graph.setdefault(step.id, [])
        edges.extend(step.needs or ())
    return graph


def check_acyclic(definition: WorkflowDefinition) -> list[BusinessRuleError]:
    return [
        BusinessRuleError(
            path=STEPS_PATH,
            message="Circular dependency detected: " + " -> ".join(cycle),
            code=CYCLE_CODE,
            refs=tuple(cycle),
        )
        for cycle in find_cycles(dependency_graph(definition))
    ]


def check_cron_schedules(definition: WorkflowDefinition) -> list[BusinessRuleError]:
    errors: list[BusinessRuleError] = []
    for index, trigger in enumerate(definition.triggers or ()):
        if isinstance(trigger, CronTrigger) and not (trigger.schedule or "").strip():
            errors.append(
                BusinessRuleError(
                    path=TRIGGERS_PATH,
                    message=f"Cron triggers must have a schedule field (trigger #{index})",
                    code=MISSING_FIELD_CODE,
                )
            )
    return errors


RULES: tuple[Callable[[WorkflowDefinition], list[BusinessRuleError]], ...] = (
    check_unique_ids,
    check_dependencies_exist,
    check_acyclic,
    check_cron_schedules,
)


def validate_integrity(definition: WorkflowDefinition) -> ValidationResult:
    errors: list[BusinessRuleError] = []
    for rule in RULES:
        errors.extend(rule(definition))

    if errors:
        logger.debug(
            "Integrity validation rejected definition",
            extra={"errors": len(errors), "codes": sorted({e.code for e in errors})},
        )
        return ValidationResult.rejected(list(errors))
    return ValidationResult.accepted(definition)
