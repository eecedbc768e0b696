"""The single exception type every ecosystem failure is expressed as.

Metadata is never declared per subclass; it is looked up in the registry by
code, so an error is fully described by `(code, message, context, cause)`.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from .exit_codes import ExitCode
from .registry import UNHANDLED_ERROR_CODE, ErrorKind, get_kind
from .types import ErrorCategory, ErrorSeverity, should_alert, suggested_action


class EcosystemError(Exception):
    """A taxonomy member.

    Raises `KeyError` at construction time when `code` is not registered.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.kind: ErrorKind = get_kind(code)
        self.message = message
        self.context = dict(context) if context else None
        self.cause = cause
        self.timestamp = datetime.now(tz=UTC)
        if cause is not None:
            self.__cause__ = cause

    @property
    def code(self) -> str:
        return self.kind.code

    @property
    def component(self) -> str:
        return self.kind.component

    @property
    def category(self) -> ErrorCategory:
        return self.kind.category

    @property
    def severity(self) -> ErrorSeverity:
        return self.kind.severity

    @property
    def retryable(self) -> bool:
        return self.kind.retryable

    @property
    def exit_code(self) -> ExitCode:
        return self.kind.exit_code

    @property
    def should_alert(self) -> bool:
        return should_alert(self.category)

    @property
    def suggested_action(self) -> str:
        return suggested_action(self.category)

    def __str__(self) -> str:
        return f"[{self.code}] {self.component}: {self.message}"

    def __repr__(self) -> str:
        return f"EcosystemError(code={self.code!r}, message={self.message!r})"

    def user_message(self) -> str:
        if self.category is ErrorCategory.SECURITY:
            return self.kind.description
        return self.message

    def technical_message(self) -> str:
        parts = [
            f"[{self.code}]",
            f"Component: {self.component}",
            f"Category: {self.category.value}",
            f"Message: {self.message}",
        ]
        if self.context:
            parts.append(f"Context: {self.context}")
        if self.cause is not None:
            parts.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")
        return " | ".join(parts)

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {
            "code": self.code,
            "component": self.component,
            "category": self.category.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "exitCode": int(self.exit_code),
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.context:
            out["context"] = self.context
        if self.cause is not None:
            out["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
        return out


def is_ecosystem_error(error: object) -> bool:
    return isinstance(error, EcosystemError)


def wrap_error(error: BaseException, *, component: str = "core") -> EcosystemError:
    """Bring any exception across the taxonomy boundary.

    Taxonomy members pass through unchanged. Anything else becomes an
    unhandled internal error that chains the original as its cause.
    """

    if isinstance(error, EcosystemError):
        return error
    message = str(error) or type(error).__name__
    return EcosystemError(
        UNHANDLED_ERROR_CODE,
        message,
        context={"component": component, "type": type(error).__name__},
        cause=error,
    )


def select_exit_code(errors: Iterable[BaseException]) -> int:
    """Pick the one process exit code for a run.

    The highest-severity error wins; ties keep the first one reported.
    Returns 0 only when there are no errors at all.
    """

    chosen: EcosystemError | None = None
    for raw in errors:
        err = wrap_error(raw)
        if chosen is None or err.severity.rank > chosen.severity.rank:
            chosen = err
    if chosen is None:
        return int(ExitCode.SUCCESS)
    return int(chosen.exit_code)
