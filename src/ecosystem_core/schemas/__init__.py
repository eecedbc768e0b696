"""Typed workflow definition models."""

from ecosystem_core.schemas.workflow import (
    CronTrigger,
    EventTrigger,
    ManualTrigger,
    Policies,
    RetryConfig,
    Step,
    WebhookTrigger,
    WorkflowBody,
    WorkflowDefinition,
)

__all__ = [
    "CronTrigger",
    "EventTrigger",
    "ManualTrigger",
    "Policies",
    "RetryConfig",
    "Step",
    "WebhookTrigger",
    "WorkflowBody",
    "WorkflowDefinition",
]
