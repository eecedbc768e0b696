"""Semantic error categories and severities.

A category answers "what kind of failure is this?" and fixes the default
retry disposition. Severity is independent of category and only drives
prioritization and alerting.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    USER = "user"
    CONFIG = "config"
    SECURITY = "security"
    EXECUTION = "execution"
    SYSTEM = "system"
    INTERNAL = "internal"


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK: dict[ErrorSeverity, int] = {
    ErrorSeverity.LOW: 0,
    ErrorSeverity.MEDIUM: 1,
    ErrorSeverity.HIGH: 2,
    ErrorSeverity.CRITICAL: 3,
}

RETRYABLE_BY_DEFAULT: frozenset[ErrorCategory] = frozenset(
    {ErrorCategory.SYSTEM, ErrorCategory.EXECUTION}
)

_DESCRIPTIONS: dict[ErrorCategory, str] = {
    ErrorCategory.USER: "User input or parameter error",
    ErrorCategory.CONFIG: "Configuration or environment error",
    ErrorCategory.SECURITY: "Security, permission, or authentication error",
    ErrorCategory.EXECUTION: "Runtime execution failure",
    ErrorCategory.SYSTEM: "System, infrastructure, or resource error",
    ErrorCategory.INTERNAL: "Internal bug or unexpected state",
}

_SUGGESTED_ACTIONS: dict[ErrorCategory, str] = {
    ErrorCategory.USER: "Check your input and try again",
    ErrorCategory.CONFIG: "Verify configuration and environment setup",
    ErrorCategory.SECURITY: "Check permissions and credentials",
    ErrorCategory.EXECUTION: "Review operation parameters and retry",
    ErrorCategory.SYSTEM: "Check system resources and network, then retry",
    ErrorCategory.INTERNAL: "Report this issue to developers",
}


def default_retryable(category: ErrorCategory) -> bool:
    return category in RETRYABLE_BY_DEFAULT


def describe_category(category: ErrorCategory) -> str:
    return _DESCRIPTIONS[category]


def suggested_action(category: ErrorCategory) -> str:
    return _SUGGESTED_ACTIONS[category]


def should_alert(category: ErrorCategory) -> bool:
    """Internal errors indicate defects and always page operators."""

    return category is ErrorCategory.INTERNAL
