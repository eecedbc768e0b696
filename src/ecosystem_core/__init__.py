"""Ecosystem core.

Provides:
- a two-layer validator for declarative workflow definitions
- a closed error taxonomy with stable codes and process exit codes
- structured, redacting logging and settings loaded from `.env`
"""

__version__ = "0.1.0"

from ecosystem_core.errors import EcosystemError, ExitCode, select_exit_code, wrap_error
from ecosystem_core.schemas import WorkflowDefinition
from ecosystem_core.validation import ValidationResult, validate_workflow

__all__ = [
    "__version__",
    "EcosystemError",
    "ExitCode",
    "ValidationResult",
    "WorkflowDefinition",
    "select_exit_code",
    "validate_workflow",
    "wrap_error",
]
