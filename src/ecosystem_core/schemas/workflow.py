"""Pydantic models for the workflow definition field table.

Wire names are camelCase; attributes are snake_case. The root object and the
`workflow` body are closed; every other section accepts extension keys so
newer documents still load on older validators.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SEMVER_PATTERN = r"^[0-9]+\.[0-9]+(\.[0-9]+)?$"
STEP_ID_PATTERN = r"^[a-zA-Z][a-zA-Z0-9_-]*$"
USES_PATTERN = r"^[a-zA-Z0-9_-]+(\.[a-zA-Z0-9_-]+)+$"
STEP_TIMEOUT_PATTERN = r"^[0-9]+(ms|s|m|h)$"
DEFAULT_TIMEOUT_PATTERN = r"^[0-9]+(ms|s|m|h|d)$"
SECRET_REF_PATTERN = r"^[a-zA-Z0-9_-]+:.+$"

WorkflowKind = Literal["workflow", "pipeline", "job", "playbook", "automation"]
TriggerType = Literal["manual", "cron", "event", "webhook"]
ValueType = Literal["string", "number", "boolean", "array", "object"]

TRIGGER_TYPES: frozenset[str] = frozenset({"manual", "cron", "event", "webhook"})


class _Model(BaseModel):
    """Open, immutable section."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )


class _ClosedModel(_Model):
    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Descriptive sections
# ---------------------------------------------------------------------------


class Metadata(_Model):
    name: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    owner: str | None = None
    version: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    v1: bool | None = None
    future: bool | None = None


class Annotations(_Model):
    pass


# ---------------------------------------------------------------------------
# Triggers
# ---------------------------------------------------------------------------


class ManualTrigger(_Model):
    type: Literal["manual"]


class CronTrigger(_Model):
    type: Literal["cron"]
    # Presence is a business rule; see validation.integrity.
    schedule: str | None = None


class EventTrigger(_Model):
    type: Literal["event"]
    source: str
    filters: dict[str, Any] | None = None


class WebhookTrigger(_Model):
    type: Literal["webhook"]
    endpoint: str
    filters: dict[str, Any] | None = None


Trigger = Annotated[
    ManualTrigger | CronTrigger | EventTrigger | WebhookTrigger,
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Runtime configuration sections
# ---------------------------------------------------------------------------


class Secrets(_Model):
    vault: str = "vaulta"
    keys: dict[str, Annotated[str, Field(pattern=SECRET_REF_PATTERN)]]


class InputDefinition(_Model):
    type: ValueType | None = None
    required: bool = False
    default: Any = None
    description: str | None = None


class Context(_Model):
    env: Literal["local", "dev", "staging", "prod"] | None = None
    platform: str | None = None
    workspace: str | None = None


class RetryConfig(_Model):
    max_attempts: int = Field(alias="max", ge=0)
    backoff: Literal["linear", "exponential"] | None = None
    delay: int | None = Field(default=None, ge=0)


class Defaults(_Model):
    retry: RetryConfig | None = None
    timeout: str | None = Field(default=None, pattern=DEFAULT_TIMEOUT_PATTERN)
    adapter: str | None = None


class Policies(_Model):
    failure: Literal["stop", "continue", "isolate"] = "stop"
    concurrency: int = Field(default=1, ge=1)
    sandbox: Literal["none", "basic", "strict"] = "basic"


class FilesystemPermissions(_Model):
    read: list[str] | None = None
    write: list[str] | None = None


class NetworkPermissions(_Model):
    allow: list[str] | None = None
    deny: list[str] | None = None


class Permissions(_Model):
    fs: FilesystemPermissions | None = None
    network: NetworkPermissions | None = None


class Resources(_Model):
    cpu: int | float | str | None = None
    memory: str | None = None
    disk: str | None = None
    timeout: str | None = None


# ---------------------------------------------------------------------------
# Extension sections
# ---------------------------------------------------------------------------


class WorkflowUsage(_Model):
    track: bool | None = None
    scope: str | None = None
    category: str | None = None
    billable: bool | None = None
    product: str | None = None
    tags: list[str] | None = None


class ExecutionStrategyConfig(_Model):
    type: str | None = None
    max_parallel: int | None = Field(default=None, ge=1)
    matrix: dict[str, list[Any]] | None = None


class EnvironmentProfileResources(_Model):
    cpu: int | float | str | None = None
    memory: str | None = None
    disk: str | None = None
    gpu: int | float | str | None = None


class EnvironmentProfile(_Model):
    adapter: str | None = None
    resources: EnvironmentProfileResources | None = None


class RetentionPolicy(_Model):
    logs: str | None = None
    outputs: str | None = None


class DataClassification(_Model):
    pii: bool | None = None
    retention: RetentionPolicy | None = None


class Compliance(_Model):
    data: DataClassification | None = None


class SourceRepository(_Model):
    repo: str | None = None
    commit: str | None = None
    branch: str | None = None


class Provenance(_Model):
    generated_by: str | None = None
    source: SourceRepository | None = None
    generated_at: datetime | None = None


class ExecutionTarget(_Model):
    mode: Literal["local", "docker", "remote", "distributed"] | None = None
    isolation: Literal["process", "container", "vm"] | None = None
    priority: Literal["low", "normal", "high"] | None = None


class OutputSchemaDefinition(_Model):
    type: ValueType
    required: bool | None = None
    description: str | None = None


class Telemetry(_Model):
    enabled: bool | None = None
    level: Literal["minimal", "standard", "verbose"] | None = None
    redact: list[str] | None = None


class Accounting(_Model):
    billable: bool | None = None
    unit: Literal["execution", "step", "minute"] | None = None
    tags: dict[str, str] | None = None


class EngineCompatibility(_Model):
    min: str | None = None
    max: str | None = None


class Compatibility(_Model):
    engine: EngineCompatibility | None = None
    adapters: dict[str, str] | None = None


class FailureSemantics(_Model):
    on_step_failure: Literal["retry", "skip", "rollback", "isolate", "abort"] | None = None
    on_timeout: Literal["abort", "retry", "partial"] | None = None


class Rollback(_Model):
    enabled: bool | None = None
    strategy: Literal["reverse", "custom"] | None = None


class Governance(_Model):
    reviewers: list[str] | None = None
    approval_required: bool | None = None


class LifecycleHooks(_Model):
    success: list[Any] | None = None
    failure: list[Any] | None = None
    always: list[Any] | None = None


# ---------------------------------------------------------------------------
# Step-level extension sections
# ---------------------------------------------------------------------------


class StepUsage(_Model):
    billable: bool | None = None
    unit: str | None = None
    weight: float | None = Field(default=None, ge=0)


class StepRequirements(_Model):
    capabilities: list[str] | None = None


class ExecutionHints(_Model):
    cacheable: bool | None = None
    idempotent: bool | None = None
    heavy: bool | None = None
    cost: str | None = None


class SchemaReference(_Model):
    schema_ref: str | None = Field(default=None, alias="schema")
    inline: dict[str, Any] | None = None


class StepContracts(_Model):
    input: SchemaReference | None = None
    output: SchemaReference | None = None


class FailureNotification(_Model):
    channel: str | None = None


class StepOnFailure(_Model):
    action: str | None = None
    notify: FailureNotification | None = None
    compensate: str | None = None


class StepTelemetry(_Model):
    trace: bool | Literal["off", "minimal", "standard", "detailed"] | None = None
    metrics: str | None = None
    logs: str | None = None


class StepRollback(_Model):
    uses: str
    with_: dict[str, Any] | None = Field(default=None, alias="with")


# ---------------------------------------------------------------------------
# Steps and the root document
# ---------------------------------------------------------------------------


class Step(_Model):
    id: str = Field(pattern=STEP_ID_PATTERN)
    name: str | None = None
    uses: str = Field(pattern=USES_PATTERN)
    with_: dict[str, Any] | None = Field(default=None, alias="with")
    when: str | None = None
    needs: list[str] | None = None
    retry: RetryConfig | None = None
    timeout: str | None = Field(default=None, pattern=STEP_TIMEOUT_PATTERN)
    continue_on_error: bool = False
    outputs: dict[str, str] | None = None
    env: dict[str, str] | None = None

    usage: StepUsage | None = None
    ref: str | None = None
    requires: StepRequirements | None = None
    hints: ExecutionHints | None = None
    contracts: StepContracts | None = None
    profiles: dict[str, EnvironmentProfile] | None = None
    on_failure: StepOnFailure | None = None
    telemetry: StepTelemetry | None = None
    rollback: StepRollback | None = None


class WorkflowBody(_ClosedModel):
    steps: list[Step] = Field(min_length=1)


class WorkflowDefinition(_ClosedModel):
    version: str = Field(pattern=SEMVER_PATTERN)
    kind: WorkflowKind = "workflow"

    metadata: Metadata | None = None
    annotations: Annotations | None = None
    triggers: list[Trigger] | None = None
    secrets: Secrets | None = None
    inputs: dict[str, InputDefinition] | None = None
    context: Context | None = None
    defaults: Defaults | None = None
    policies: Policies = Field(default_factory=Policies)
    permissions: Permissions | None = None
    resources: Resources | None = None

    workflow: WorkflowBody

    outputs: dict[str, str] | None = None
    on: LifecycleHooks | None = None

    usage: WorkflowUsage | None = None
    strategy: ExecutionStrategyConfig | None = None
    profiles: dict[str, EnvironmentProfile] | None = None
    compliance: Compliance | None = None
    provenance: Provenance | None = None
    execution: ExecutionTarget | None = None
    outputs_schema: dict[str, OutputSchemaDefinition] | None = None
    telemetry: Telemetry | None = None
    accounting: Accounting | None = None
    compatibility: Compatibility | None = None
    failure_policy: FailureSemantics | None = None
    rollback: Rollback | None = None
    governance: Governance | None = None

    @property
    def steps(self) -> list[Step]:
        return self.workflow.steps

    def step_ids(self) -> list[str]:
        return [step.id for step in self.workflow.steps]

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the wire shape (camelCase).

        Only keys present in the input are emitted, explicit nulls included.
        Defaults are re-applied when the result is validated again.
        """

        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
