"""Schema layer: shape, types, patterns and defaults.

Turns a decoded tree into a typed `WorkflowDefinition`, or reports every
structural violation found in a single pass. Never raises for bad input.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import UnionType
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError
from pydantic_core import ErrorDetails

from ecosystem_core.schemas.workflow import TRIGGER_TYPES, WorkflowDefinition

from .result import SCHEMA_INVALID_CODE, StructuralError, ValidationResult

logger = logging.getLogger(__name__)

_PATTERN_MESSAGES: dict[str, str] = {
    "version": "Version must follow semantic versioning (e.g., 1.0 or 1.0.0)",
    "id": "Step ID must start with letter and contain only alphanumeric, underscore, or hyphen",
    "uses": "uses must be in format: namespace.action or namespace.domain.action",
    "timeout": "Timeout must be a number followed by a unit, e.g. 500ms, 30s, 5m",
}

_SCALAR_UNION_TAGS = frozenset({"int", "float", "str", "bool"})


def _nested_models(annotation: Any) -> Iterator[type[BaseModel]]:
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        yield annotation
        return
    for arg in get_args(annotation):
        yield from _nested_models(arg)


def _union_field_names(root: type[BaseModel]) -> frozenset[str]:
    """Wire names of fields typed as a union of two or more non-null members."""

    names: set[str] = set()
    pending = [root]
    visited: set[type[BaseModel]] = set()
    while pending:
        model = pending.pop()
        if model in visited:
            continue
        visited.add(model)
        for name, field in model.model_fields.items():
            if get_origin(field.annotation) in (Union, UnionType):
                members = [a for a in get_args(field.annotation) if a is not type(None)]
                if len(members) > 1:
                    names.update({name, field.alias or name})
            pending.extend(_nested_models(field.annotation))
    return frozenset(names)


_UNION_FIELDS = _union_field_names(WorkflowDefinition)


def _is_union_tag(loc: tuple[int | str, ...], i: int) -> bool:
    # pydantic inserts the union member into the location of union errors.
    seg = loc[i]
    if not isinstance(seg, str) or i == 0:
        return False
    if seg in _SCALAR_UNION_TAGS or seg.startswith("literal["):
        return loc[i - 1] in _UNION_FIELDS
    return (
        seg in TRIGGER_TYPES
        and i >= 2
        and isinstance(loc[i - 1], int)
        and loc[i - 2] == "triggers"
    )


def _clean_loc(loc: tuple[int | str, ...]) -> tuple[int | str, ...]:
    return tuple(seg for i, seg in enumerate(loc) if not _is_union_tag(loc, i))


def _message(loc: tuple[int | str, ...], err: ErrorDetails) -> str:
    last = loc[-1] if loc else ""
    kind = err["type"]
    if kind == "missing":
        return f"Missing required field '{last}'"
    if kind == "extra_forbidden":
        return f"Unknown field '{last}' is not allowed here"
    if kind == "string_pattern_mismatch" and last in _PATTERN_MESSAGES:
        return _PATTERN_MESSAGES[str(last)]
    if kind == "too_short" and loc == ("workflow", "steps"):
        return "Workflow must have at least one step"
    return err["msg"]


def structural_errors(exc: ValidationError) -> list[StructuralError]:
    """One error per offending location, in pydantic's report order."""

    out: list[StructuralError] = []
    seen: set[str] = set()
    for err in exc.errors():
        loc = _clean_loc(tuple(err["loc"]))
        path = ".".join(str(p) for p in loc)
        if path in seen:
            continue
        seen.add(path)
        out.append(StructuralError(path=path, message=_message(loc, err), code=SCHEMA_INVALID_CODE))
    return out


def validate_structure(raw: Any) -> ValidationResult:
    """Validate and default a raw decoded tree.

    An already typed `WorkflowDefinition` is re-checked from its serialized
    form, so running the layer twice is a no-op.
    """

    if isinstance(raw, WorkflowDefinition):
        raw = raw.to_dict()

    if not isinstance(raw, Mapping):
        error = StructuralError(
            path="",
            message=f"Workflow definition must be a mapping, got {type(raw).__name__}",
            code=SCHEMA_INVALID_CODE,
        )
        return ValidationResult.rejected([error])

    try:
        definition = WorkflowDefinition.model_validate(dict(raw))
    except ValidationError as e:
        errors = structural_errors(e)
        logger.debug("Schema validation rejected definition", extra={"errors": len(errors)})
        return ValidationResult.rejected(list(errors))

    logger.debug("Schema validation accepted definition", extra={"steps": len(definition.steps)})
    return ValidationResult.accepted(definition)
