"""Workflow definition validation.

Two layers run in order: the schema layer checks shape and applies defaults,
then the integrity layer checks ids, references, cycles and triggers. Both
collect every finding instead of stopping at the first one.
"""

from ecosystem_core.validation.integrity import find_cycles, validate_integrity
from ecosystem_core.validation.result import (
    BusinessRuleError,
    StructuralError,
    ValidationIssue,
    ValidationResult,
)
from ecosystem_core.validation.structural import validate_structure
from ecosystem_core.validation.validator import (
    load_workflow_file,
    validate_workflow,
    validate_workflow_file,
)

__all__ = [
    "BusinessRuleError",
    "StructuralError",
    "ValidationIssue",
    "ValidationResult",
    "find_cycles",
    "load_workflow_file",
    "validate_integrity",
    "validate_structure",
    "validate_workflow",
    "validate_workflow_file",
]
