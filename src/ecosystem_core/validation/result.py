from __future__ import annotations

from dataclasses import dataclass, field

from ecosystem_core.errors.base import EcosystemError
from ecosystem_core.schemas.workflow import WorkflowDefinition

SCHEMA_INVALID_CODE = "ORBYT-WF-001"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """One violated constraint: where it is, what is wrong, which taxonomy code."""

    path: str
    message: str
    code: str

    def to_json(self) -> dict[str, object]:
        return {"path": self.path, "message": self.message, "code": self.code}

    def to_error(self) -> EcosystemError:
        return EcosystemError(self.code, self.message, context={"path": self.path})


@dataclass(frozen=True, slots=True)
class StructuralError(ValidationIssue):
    pass


@dataclass(frozen=True, slots=True)
class BusinessRuleError(ValidationIssue):
    # Step ids involved; for cycles this is the ordered loop.
    refs: tuple[str, ...] = ()

    def to_json(self) -> dict[str, object]:
        out = ValidationIssue.to_json(self)
        if self.refs:
            out["refs"] = list(self.refs)
        return out


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Either an accepted definition or the complete list of findings."""

    definition: WorkflowDefinition | None = None
    errors: tuple[ValidationIssue, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.definition is not None and not self.errors

    @classmethod
    def accepted(cls, definition: WorkflowDefinition) -> ValidationResult:
        return cls(definition=definition)

    @classmethod
    def rejected(cls, errors: list[ValidationIssue]) -> ValidationResult:
        if not errors:
            raise ValueError("A rejected result needs at least one error")
        return cls(definition=None, errors=tuple(errors))

    def to_errors(self) -> list[EcosystemError]:
        return [issue.to_error() for issue in self.errors]

    def raise_for_errors(self) -> WorkflowDefinition:
        """Return the accepted definition or raise one taxonomy error for all findings."""

        if self.ok:
            assert self.definition is not None
            return self.definition

        codes = {issue.code for issue in self.errors}
        code = codes.pop() if len(codes) == 1 else SCHEMA_INVALID_CODE
        raise EcosystemError(
            code,
            f"Workflow validation failed with {len(self.errors)} error(s)",
            context={"errors": [issue.to_json() for issue in self.errors]},
        )

    def to_json(self) -> dict[str, object]:
        return {
            "ok": self.ok,
            "errors": [issue.to_json() for issue in self.errors],
        }
