"""Closed, versioned registry of every failure kind in the ecosystem.

Each entry maps a stable code to its owning component, category, severity,
retry disposition and process exit code. Entries may be appended across
releases but are never removed, renumbered, or moved to another exit-code
range. The table is built once at import time and exposed read-only.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .exit_codes import ExitCode, in_category_range
from .types import ErrorCategory, ErrorSeverity, default_retryable

C = ErrorCategory
S = ErrorSeverity
X = ExitCode


@dataclass(frozen=True, slots=True)
class ErrorKind:
    code: str
    component: str
    category: ErrorCategory
    severity: ErrorSeverity
    retryable: bool
    exit_code: ExitCode
    description: str = ""

    def to_json(self) -> dict[str, object]:
        return {
            "code": self.code,
            "component": self.component,
            "category": self.category.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "exitCode": int(self.exit_code),
            "description": self.description,
        }


class RegistryError(ValueError):
    pass


def _kind(
    code: str,
    component: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    exit_code: ExitCode,
    description: str,
    *,
    retryable: bool | None = None,
) -> ErrorKind:
    return ErrorKind(
        code=code,
        component=component,
        category=category,
        severity=severity,
        retryable=default_retryable(category) if retryable is None else retryable,
        exit_code=exit_code,
        description=description,
    )


UNHANDLED_ERROR_CODE = "CORE-INT-001"
INTERNAL_ERROR_CODE = "CORE-INT-002"

_KINDS: tuple[ErrorKind, ...] = (
    # core
    _kind(UNHANDLED_ERROR_CODE, "core", C.INTERNAL, S.HIGH, X.UNHANDLED_EXCEPTION, "Unhandled exception"),
    _kind(INTERNAL_ERROR_CODE, "core", C.INTERNAL, S.CRITICAL, X.BUG_DETECTED, "Invariant violated"),
    # orbyt: workflow definition
    _kind("ORBYT-WF-001", "orbyt", C.USER, S.HIGH, X.INVALID_SCHEMA, "Workflow schema validation failed"),
    _kind("ORBYT-WF-002", "orbyt", C.USER, S.HIGH, X.INVALID_DEPENDENCY_GRAPH, "Circular dependency between workflow steps"),
    _kind("ORBYT-WF-003", "orbyt", C.USER, S.HIGH, X.INVALID_FORMAT, "Workflow parsing failed"),
    _kind("ORBYT-WF-004", "orbyt", C.USER, S.MEDIUM, X.INVALID_INPUT, "Workflow not found"),
    _kind("ORBYT-WF-005", "orbyt", C.USER, S.MEDIUM, X.INVALID_SCHEMA, "Workflow version unsupported"),
    _kind("ORBYT-WF-006", "orbyt", C.USER, S.HIGH, X.INVALID_SCHEMA, "Invalid workflow structure"),
    _kind("ORBYT-WF-007", "orbyt", C.USER, S.MEDIUM, X.MISSING_REQUIRED_INPUT, "Missing required workflow field"),
    _kind("ORBYT-WF-008", "orbyt", C.USER, S.LOW, X.INVALID_INPUT, "Workflow already exists"),
    # orbyt: steps
    _kind("ORBYT-STEP-001", "orbyt", C.USER, S.MEDIUM, X.INVALID_INPUT, "Step not found in workflow"),
    _kind("ORBYT-STEP-002", "orbyt", C.EXECUTION, S.MEDIUM, X.TIMEOUT, "Step execution timeout"),
    _kind("ORBYT-STEP-003", "orbyt", C.EXECUTION, S.HIGH, X.STEP_FAILED, "Step execution failed", retryable=False),
    _kind("ORBYT-STEP-004", "orbyt", C.EXECUTION, S.HIGH, X.DEPENDENCY_FAILED, "Step dependency not met", retryable=False),
    _kind("ORBYT-STEP-005", "orbyt", C.CONFIG, S.MEDIUM, X.INVALID_CONFIG, "Invalid step configuration"),
    _kind("ORBYT-STEP-006", "orbyt", C.USER, S.HIGH, X.VALIDATION_FAILED, "Duplicate step id"),
    _kind("ORBYT-STEP-007", "orbyt", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Step condition evaluation failed", retryable=False),
    _kind("ORBYT-STEP-008", "orbyt", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Step output mapping failed", retryable=False),
    # orbyt: adapters
    _kind("ORBYT-ADAPTER-001", "orbyt", C.CONFIG, S.HIGH, X.MISSING_DEPENDENCY, "Adapter not registered"),
    _kind("ORBYT-ADAPTER-002", "orbyt", C.EXECUTION, S.HIGH, X.ADAPTER_FAILED, "Adapter execution failed"),
    _kind("ORBYT-ADAPTER-003", "orbyt", C.CONFIG, S.CRITICAL, X.ENVIRONMENT_ERROR, "Adapter initialization failed"),
    _kind("ORBYT-ADAPTER-004", "orbyt", C.USER, S.MEDIUM, X.INVALID_INPUT, "Invalid adapter action"),
    _kind("ORBYT-ADAPTER-005", "orbyt", C.CONFIG, S.HIGH, X.MISSING_DEPENDENCY, "Adapter not found"),
    _kind("ORBYT-ADAPTER-006", "orbyt", C.USER, S.MEDIUM, X.INVALID_INPUT, "Adapter input validation failed"),
    _kind("ORBYT-ADAPTER-007", "orbyt", C.EXECUTION, S.MEDIUM, X.ADAPTER_FAILED, "Adapter output invalid", retryable=False),
    # orbyt: engine
    _kind("ORBYT-ENGINE-001", "orbyt", C.INTERNAL, S.CRITICAL, X.INITIALIZATION_FAILED, "Engine initialization failed"),
    _kind("ORBYT-ENGINE-002", "orbyt", C.INTERNAL, S.CRITICAL, X.STATE_CORRUPTION, "Engine state corrupted"),
    _kind("ORBYT-ENGINE-003", "orbyt", C.EXECUTION, S.HIGH, X.WORKFLOW_FAILED, "Engine execution failed"),
    _kind("ORBYT-ENGINE-004", "orbyt", C.INTERNAL, S.HIGH, X.INITIALIZATION_FAILED, "Engine not initialized"),
    _kind("ORBYT-ENGINE-005", "orbyt", C.SYSTEM, S.MEDIUM, X.CRITICAL_FAILURE, "Engine shutting down"),
    _kind("ORBYT-ENGINE-006", "orbyt", C.CONFIG, S.HIGH, X.INVALID_CONFIG, "Engine configuration invalid"),
    # orbyt: variables
    _kind("ORBYT-VAR-001", "orbyt", C.USER, S.MEDIUM, X.INVALID_INPUT, "Variable not found"),
    _kind("ORBYT-VAR-002", "orbyt", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Variable resolution failed", retryable=False),
    _kind("ORBYT-VAR-003", "orbyt", C.USER, S.HIGH, X.INVALID_DEPENDENCY_GRAPH, "Circular variable reference"),
    _kind("ORBYT-VAR-004", "orbyt", C.USER, S.MEDIUM, X.INVALID_FORMAT, "Invalid variable syntax"),
    _kind("ORBYT-VAR-005", "orbyt", C.USER, S.MEDIUM, X.INVALID_INPUT, "Variable type mismatch"),
    # orbyt: secret references
    _kind("ORBYT-SEC-001", "orbyt", C.CONFIG, S.HIGH, X.MISSING_SECRET, "Secret not found"),
    _kind("ORBYT-SEC-002", "orbyt", C.SECURITY, S.HIGH, X.SECRET_RESOLUTION_FAILED, "Secret resolution failed"),
    _kind("ORBYT-SEC-003", "orbyt", C.USER, S.MEDIUM, X.INVALID_FORMAT, "Invalid secret reference"),
    _kind("ORBYT-SEC-004", "orbyt", C.CONFIG, S.HIGH, X.MISSING_CONFIG, "Vault not configured"),
    _kind("ORBYT-SEC-005", "orbyt", C.SYSTEM, S.HIGH, X.NETWORK_ERROR, "Secret provider unavailable"),
    # vaulta: vault lifecycle
    _kind("VAULTA-VAULT-001", "vaulta", C.CONFIG, S.HIGH, X.MISSING_CONFIG, "Vault not initialized"),
    _kind("VAULTA-VAULT-002", "vaulta", C.SECURITY, S.HIGH, X.VAULT_LOCKED, "Vault is locked"),
    _kind("VAULTA-VAULT-003", "vaulta", C.USER, S.MEDIUM, X.INVALID_INPUT, "Vault already exists"),
    _kind("VAULTA-VAULT-004", "vaulta", C.USER, S.MEDIUM, X.INVALID_INPUT, "Vault not found"),
    _kind("VAULTA-VAULT-005", "vaulta", C.INTERNAL, S.CRITICAL, X.STATE_CORRUPTION, "Vault corrupted"),
    _kind("VAULTA-VAULT-006", "vaulta", C.SECURITY, S.HIGH, X.AUTH_FAILED, "Vault unlock failed"),
    _kind("VAULTA-VAULT-007", "vaulta", C.INTERNAL, S.CRITICAL, X.INITIALIZATION_FAILED, "Vault initialization failed"),
    # vaulta: security
    _kind("VAULTA-SEC-001", "vaulta", C.SECURITY, S.HIGH, X.INVALID_CREDENTIALS, "Invalid master password"),
    _kind("VAULTA-SEC-002", "vaulta", C.SECURITY, S.HIGH, X.PERMISSION_DENIED, "Permission denied"),
    _kind("VAULTA-SEC-003", "vaulta", C.SECURITY, S.HIGH, X.AUTH_FAILED, "Authentication failed"),
    _kind("VAULTA-SEC-004", "vaulta", C.SECURITY, S.HIGH, X.INVALID_CREDENTIALS, "Invalid credentials"),
    _kind("VAULTA-SEC-005", "vaulta", C.SECURITY, S.MEDIUM, X.AUTH_FAILED, "Session expired"),
    _kind("VAULTA-SEC-006", "vaulta", C.SECURITY, S.MEDIUM, X.SECURITY_VIOLATION, "Password policy violation"),
    _kind("VAULTA-SEC-007", "vaulta", C.SECURITY, S.CRITICAL, X.SECURITY_VIOLATION, "Too many failed attempts"),
    # vaulta: crypto
    _kind("VAULTA-CRYPTO-001", "vaulta", C.INTERNAL, S.CRITICAL, X.INTERNAL_ERROR, "Encryption failed"),
    _kind("VAULTA-CRYPTO-002", "vaulta", C.SECURITY, S.CRITICAL, X.SECURITY_VIOLATION, "Decryption failed"),
    _kind("VAULTA-CRYPTO-003", "vaulta", C.SECURITY, S.CRITICAL, X.INVALID_CREDENTIALS, "Invalid encryption key"),
    _kind("VAULTA-CRYPTO-004", "vaulta", C.INTERNAL, S.CRITICAL, X.INTERNAL_ERROR, "Key derivation failed"),
    _kind("VAULTA-CRYPTO-005", "vaulta", C.INTERNAL, S.CRITICAL, X.INTERNAL_ERROR, "Cryptographic operation failed"),
    # vaulta: access
    _kind("VAULTA-ACCESS-001", "vaulta", C.USER, S.MEDIUM, X.INVALID_INPUT, "Secret not found"),
    _kind("VAULTA-ACCESS-002", "vaulta", C.USER, S.MEDIUM, X.INVALID_INPUT, "Secret already exists"),
    _kind("VAULTA-ACCESS-003", "vaulta", C.USER, S.MEDIUM, X.INVALID_INPUT, "Invalid secret path"),
    _kind("VAULTA-ACCESS-004", "vaulta", C.EXECUTION, S.MEDIUM, X.RESOURCE_ERROR, "Secret read failed"),
    _kind("VAULTA-ACCESS-005", "vaulta", C.EXECUTION, S.MEDIUM, X.RESOURCE_ERROR, "Secret write failed"),
    _kind("VAULTA-ACCESS-006", "vaulta", C.EXECUTION, S.MEDIUM, X.RESOURCE_ERROR, "Secret delete failed"),
    # devforge: templates
    _kind("DEVFORGE-TPL-001", "devforge", C.USER, S.MEDIUM, X.INVALID_INPUT, "Template not found"),
    _kind("DEVFORGE-TPL-002", "devforge", C.INTERNAL, S.HIGH, X.INTERNAL_ERROR, "Template parsing failed"),
    _kind("DEVFORGE-TPL-003", "devforge", C.USER, S.MEDIUM, X.INVALID_SCHEMA, "Invalid template structure"),
    _kind("DEVFORGE-TPL-004", "devforge", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Template rendering failed"),
    _kind("DEVFORGE-TPL-005", "devforge", C.USER, S.MEDIUM, X.VALIDATION_FAILED, "Template validation failed"),
    # devforge: features
    _kind("DEVFORGE-FEAT-001", "devforge", C.USER, S.MEDIUM, X.INVALID_INPUT, "Feature conflict detected"),
    _kind("DEVFORGE-FEAT-002", "devforge", C.USER, S.MEDIUM, X.INVALID_INPUT, "Feature not found"),
    _kind("DEVFORGE-FEAT-003", "devforge", C.USER, S.MEDIUM, X.INVALID_INPUT, "Feature incompatible"),
    _kind("DEVFORGE-FEAT-004", "devforge", C.EXECUTION, S.HIGH, X.STEP_FAILED, "Feature installation failed"),
    _kind("DEVFORGE-FEAT-005", "devforge", C.CONFIG, S.HIGH, X.MISSING_DEPENDENCY, "Feature dependency missing"),
    # devforge: project generation
    _kind("DEVFORGE-GEN-001", "devforge", C.EXECUTION, S.HIGH, X.STEP_FAILED, "Project generation failed"),
    _kind("DEVFORGE-GEN-002", "devforge", C.USER, S.MEDIUM, X.INVALID_INPUT, "Project already exists"),
    _kind("DEVFORGE-GEN-003", "devforge", C.USER, S.MEDIUM, X.INVALID_SCHEMA, "Invalid project structure"),
    _kind("DEVFORGE-GEN-004", "devforge", C.EXECUTION, S.MEDIUM, X.RESOURCE_ERROR, "File generation failed"),
    _kind("DEVFORGE-GEN-005", "devforge", C.EXECUTION, S.MEDIUM, X.RESOURCE_ERROR, "Directory creation failed"),
    _kind("DEVFORGE-GEN-006", "devforge", C.EXECUTION, S.HIGH, X.STEP_FAILED, "Dependency installation failed"),
    # devforge: configuration
    _kind("DEVFORGE-CONFIG-001", "devforge", C.CONFIG, S.MEDIUM, X.INVALID_CONFIG, "Invalid configuration"),
    _kind("DEVFORGE-CONFIG-002", "devforge", C.CONFIG, S.MEDIUM, X.MISSING_CONFIG, "Configuration not found"),
    _kind("DEVFORGE-CONFIG-003", "devforge", C.CONFIG, S.MEDIUM, X.INVALID_CONFIG, "Configuration parsing failed"),
    _kind("DEVFORGE-CONFIG-004", "devforge", C.CONFIG, S.MEDIUM, X.MISSING_CONFIG, "Missing required configuration"),
    # mediaproc: images
    _kind("MEDIAPROC-IMG-001", "mediaproc", C.USER, S.MEDIUM, X.INVALID_FORMAT, "Unsupported image format"),
    _kind("MEDIAPROC-IMG-002", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Image resize failed"),
    _kind("MEDIAPROC-IMG-003", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Image conversion failed"),
    _kind("MEDIAPROC-IMG-004", "mediaproc", C.USER, S.MEDIUM, X.INVALID_INPUT, "Invalid image dimensions"),
    _kind("MEDIAPROC-IMG-005", "mediaproc", C.USER, S.HIGH, X.INVALID_FILE, "Image file corrupted"),
    _kind("MEDIAPROC-IMG-006", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Image watermark failed"),
    _kind("MEDIAPROC-IMG-007", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Image optimization failed"),
    _kind("MEDIAPROC-IMG-008", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Image metadata extraction failed"),
    # mediaproc: video
    _kind("MEDIAPROC-VID-001", "mediaproc", C.CONFIG, S.HIGH, X.MISSING_DEPENDENCY, "Video codec not found"),
    _kind("MEDIAPROC-VID-002", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Video transcode failed"),
    _kind("MEDIAPROC-VID-003", "mediaproc", C.USER, S.MEDIUM, X.INVALID_FORMAT, "Unsupported video format"),
    _kind("MEDIAPROC-VID-004", "mediaproc", C.USER, S.HIGH, X.INVALID_FILE, "Video file corrupted"),
    _kind("MEDIAPROC-VID-005", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Video encoding failed"),
    _kind("MEDIAPROC-VID-006", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Video decoding failed"),
    _kind("MEDIAPROC-VID-007", "mediaproc", C.USER, S.MEDIUM, X.INVALID_INPUT, "Invalid video bitrate"),
    _kind("MEDIAPROC-VID-008", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Video frame extraction failed"),
    # mediaproc: audio
    _kind("MEDIAPROC-AUD-001", "mediaproc", C.CONFIG, S.HIGH, X.MISSING_DEPENDENCY, "Audio codec not found"),
    _kind("MEDIAPROC-AUD-002", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Audio conversion failed"),
    _kind("MEDIAPROC-AUD-003", "mediaproc", C.USER, S.MEDIUM, X.INVALID_FORMAT, "Unsupported audio format"),
    _kind("MEDIAPROC-AUD-004", "mediaproc", C.USER, S.HIGH, X.INVALID_FILE, "Audio file corrupted"),
    _kind("MEDIAPROC-AUD-005", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Audio normalization failed"),
    _kind("MEDIAPROC-AUD-006", "mediaproc", C.USER, S.MEDIUM, X.INVALID_INPUT, "Invalid audio sample rate"),
    # mediaproc: pipelines
    _kind("MEDIAPROC-PIPE-001", "mediaproc", C.EXECUTION, S.HIGH, X.STEP_FAILED, "Pipeline step failed"),
    _kind("MEDIAPROC-PIPE-002", "mediaproc", C.CONFIG, S.MEDIUM, X.INVALID_CONFIG, "Pipeline configuration invalid"),
    _kind("MEDIAPROC-PIPE-003", "mediaproc", C.EXECUTION, S.MEDIUM, X.TIMEOUT, "Pipeline execution timeout"),
    _kind("MEDIAPROC-PIPE-004", "mediaproc", C.USER, S.MEDIUM, X.INVALID_INPUT, "Pipeline input invalid"),
    _kind("MEDIAPROC-PIPE-005", "mediaproc", C.EXECUTION, S.MEDIUM, X.STEP_FAILED, "Pipeline output failed"),
    # mediaproc: codecs
    _kind("MEDIAPROC-CODEC-001", "mediaproc", C.CONFIG, S.HIGH, X.ENVIRONMENT_ERROR, "Codec initialization failed"),
    _kind("MEDIAPROC-CODEC-002", "mediaproc", C.USER, S.MEDIUM, X.INVALID_FORMAT, "Codec not supported"),
    _kind("MEDIAPROC-CODEC-003", "mediaproc", C.USER, S.MEDIUM, X.INVALID_INPUT, "Codec parameters invalid"),
)


def build_registry(kinds: Iterable[ErrorKind]) -> Mapping[str, ErrorKind]:
    """Index kinds by code, rejecting duplicates and out-of-range exit codes."""

    table: dict[str, ErrorKind] = {}
    for kind in kinds:
        if kind.code in table:
            raise RegistryError(f"Duplicate error code: {kind.code}")
        if not in_category_range(kind.exit_code, kind.category):
            raise RegistryError(
                f"{kind.code}: exit code {int(kind.exit_code)} is outside the "
                f"{kind.category.value} range"
            )
        table[kind.code] = kind
    return MappingProxyType(table)


ERROR_KINDS: Mapping[str, ErrorKind] = build_registry(_KINDS)


def get_kind(code: str) -> ErrorKind:
    try:
        return ERROR_KINDS[code]
    except KeyError:
        raise KeyError(f"Unknown error code: {code}") from None


def is_known_code(code: str) -> bool:
    return code in ERROR_KINDS


def kinds_for_component(component: str) -> list[ErrorKind]:
    return [k for k in ERROR_KINDS.values() if k.component == component]
