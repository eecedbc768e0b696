"""Process exit codes shared by every tool in the ecosystem.

Ranges are permanent:

- 0        success
- 100-199  user / input errors
- 200-299  configuration / environment errors
- 300-399  execution failures
- 400-499  security / permission issues
- 500-599  internal and system errors

Codes are append-only. Never remove or renumber a published value; a new
failure outcome takes the next free number in its category's range.
"""

from __future__ import annotations

from enum import IntEnum

from .types import ErrorCategory


class ExitCode(IntEnum):
    SUCCESS = 0

    # 1xx user / input
    INVALID_INPUT = 100
    INVALID_SCHEMA = 101
    INVALID_FILE = 102
    INVALID_FORMAT = 103
    MISSING_REQUIRED_INPUT = 104
    VALIDATION_FAILED = 105
    INVALID_DEPENDENCY_GRAPH = 106

    # 2xx configuration / environment
    MISSING_CONFIG = 200
    MISSING_SECRET = 201
    MISSING_DEPENDENCY = 202
    ENVIRONMENT_ERROR = 203
    INVALID_CONFIG = 204
    SERVICE_UNAVAILABLE = 205

    # 3xx execution
    WORKFLOW_FAILED = 300
    STEP_FAILED = 301
    ADAPTER_FAILED = 302
    PLUGIN_FAILED = 303
    TIMEOUT = 304
    CIRCULAR_DEPENDENCY = 305
    DEPENDENCY_FAILED = 306
    RESOURCE_ERROR = 307

    # 4xx security / permission
    PERMISSION_DENIED = 400
    VAULT_LOCKED = 401
    AUTH_FAILED = 402
    INVALID_CREDENTIALS = 403
    FORBIDDEN = 404
    SECRET_RESOLUTION_FAILED = 405
    SECURITY_VIOLATION = 406

    # 5xx internal / system
    INTERNAL_ERROR = 500
    UNHANDLED_EXCEPTION = 501
    INITIALIZATION_FAILED = 502
    STATE_CORRUPTION = 503
    CRITICAL_FAILURE = 504
    DATABASE_ERROR = 505
    FILESYSTEM_ERROR = 506
    NETWORK_ERROR = 507
    OUT_OF_MEMORY = 508
    BUG_DETECTED = 509


EXIT_CODE_RANGES: dict[ErrorCategory, range] = {
    ErrorCategory.USER: range(100, 200),
    ErrorCategory.CONFIG: range(200, 300),
    ErrorCategory.EXECUTION: range(300, 400),
    ErrorCategory.SECURITY: range(400, 500),
    ErrorCategory.INTERNAL: range(500, 600),
    ErrorCategory.SYSTEM: range(500, 600),
}

_DESCRIPTIONS: dict[ExitCode, str] = {
    ExitCode.SUCCESS: "Operation completed successfully",
    ExitCode.INVALID_INPUT: "Invalid command-line arguments or input parameters",
    ExitCode.INVALID_SCHEMA: "Invalid schema or workflow definition",
    ExitCode.INVALID_FILE: "Required input file not found or invalid",
    ExitCode.INVALID_FORMAT: "Invalid format or malformed data",
    ExitCode.MISSING_REQUIRED_INPUT: "Missing required input or parameter",
    ExitCode.VALIDATION_FAILED: "Validation failed",
    ExitCode.INVALID_DEPENDENCY_GRAPH: "Step dependency graph contains a cycle",
    ExitCode.MISSING_CONFIG: "Missing or invalid configuration file",
    ExitCode.MISSING_SECRET: "Secret not found or unavailable",
    ExitCode.MISSING_DEPENDENCY: "Required dependency not found",
    ExitCode.ENVIRONMENT_ERROR: "Environment not properly set up",
    ExitCode.INVALID_CONFIG: "Invalid configuration values",
    ExitCode.SERVICE_UNAVAILABLE: "Required service unavailable",
    ExitCode.WORKFLOW_FAILED: "Workflow execution failed",
    ExitCode.STEP_FAILED: "Individual step failed",
    ExitCode.ADAPTER_FAILED: "Adapter execution failed",
    ExitCode.PLUGIN_FAILED: "Plugin execution failed",
    ExitCode.TIMEOUT: "Operation timeout",
    ExitCode.CIRCULAR_DEPENDENCY: "Circular dependency detected at runtime",
    ExitCode.DEPENDENCY_FAILED: "Dependency failure",
    ExitCode.RESOURCE_ERROR: "Resource allocation failed",
    ExitCode.PERMISSION_DENIED: "Permission denied",
    ExitCode.VAULT_LOCKED: "Vault is locked, requires unlock",
    ExitCode.AUTH_FAILED: "Authentication failed",
    ExitCode.INVALID_CREDENTIALS: "Invalid credentials",
    ExitCode.FORBIDDEN: "Access forbidden",
    ExitCode.SECRET_RESOLUTION_FAILED: "Secret resolution failed",
    ExitCode.SECURITY_VIOLATION: "Security policy violation",
    ExitCode.INTERNAL_ERROR: "Internal system error",
    ExitCode.UNHANDLED_EXCEPTION: "Unhandled exception",
    ExitCode.INITIALIZATION_FAILED: "Initialization failed",
    ExitCode.STATE_CORRUPTION: "State corruption detected",
    ExitCode.CRITICAL_FAILURE: "Critical system failure",
    ExitCode.DATABASE_ERROR: "Database error",
    ExitCode.FILESYSTEM_ERROR: "File system error",
    ExitCode.NETWORK_ERROR: "Network error",
    ExitCode.OUT_OF_MEMORY: "Out of memory",
    ExitCode.BUG_DETECTED: "Bug detected (should never happen)",
}


def describe_exit_code(code: int) -> str:
    try:
        return _DESCRIPTIONS[ExitCode(code)]
    except ValueError:
        return "Unknown exit code"


def exit_code_category(code: int) -> str:
    """Return the range name a raw process exit code falls into."""

    if code == 0:
        return "success"
    if 100 <= code < 200:
        return "user-error"
    if 200 <= code < 300:
        return "config-error"
    if 300 <= code < 400:
        return "execution-error"
    if 400 <= code < 500:
        return "security-error"
    if 500 <= code < 600:
        return "internal-error"
    return "unknown"


def is_success(code: int) -> bool:
    return code == ExitCode.SUCCESS


def in_category_range(code: int, category: ErrorCategory) -> bool:
    return code in EXIT_CODE_RANGES[category]
