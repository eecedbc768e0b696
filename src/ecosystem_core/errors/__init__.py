"""Error taxonomy and exit-code mapping shared across the ecosystem."""

from ecosystem_core.errors.base import (
    EcosystemError,
    is_ecosystem_error,
    select_exit_code,
    wrap_error,
)
from ecosystem_core.errors.exit_codes import (
    EXIT_CODE_RANGES,
    ExitCode,
    describe_exit_code,
    exit_code_category,
    is_success,
)
from ecosystem_core.errors.registry import ERROR_KINDS, ErrorKind, get_kind
from ecosystem_core.errors.types import ErrorCategory, ErrorSeverity, describe_category

__all__ = [
    "ERROR_KINDS",
    "EXIT_CODE_RANGES",
    "EcosystemError",
    "ErrorCategory",
    "ErrorKind",
    "ErrorSeverity",
    "ExitCode",
    "describe_category",
    "describe_exit_code",
    "exit_code_category",
    "get_kind",
    "is_ecosystem_error",
    "is_success",
    "select_exit_code",
    "wrap_error",
]
