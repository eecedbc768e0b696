"""Runtime settings for the validator tooling.

Configuration is loaded from:
- environment variables prefixed with `ECOSYSTEM_`
- and a local `.env` file (if present)
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class CoreSettings(BaseSettings):
    """Settings shared by the CLI and library callers.

    Environment variables:
    - ECOSYSTEM_LOG_LEVEL
    - ECOSYSTEM_LOG_JSON
    - ECOSYSTEM_REDACT_PLACEHOLDER
    - ECOSYSTEM_EXTRA_SENSITIVE_KEYS  (JSON list)
    """

    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )
    log_json: bool = Field(
        default=True,
        description="Emit structured JSON log lines instead of plain text",
    )
    redact_placeholder: str = Field(
        default="[REDACTED]",
        min_length=1,
        description="Replacement for values under sensitive keys in log output",
    )
    extra_sensitive_keys: list[str] = Field(
        default_factory=list,
        description="Additional key substrings treated as sensitive when logging",
    )

    model_config = SettingsConfigDict(
        env_prefix="ECOSYSTEM_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level
