"""Structured logging configuration.

Uses standard library logging with a JSON formatter. Values stored under
sensitive key names are redacted before a line is emitted.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

REDACTED = "[REDACTED]"

SENSITIVE_KEYS: tuple[str, ...] = (
    "password",
    "secret",
    "token",
    "apiKey",
    "api_key",
    "accessToken",
    "access_token",
    "privateKey",
    "private_key",
    "creditCard",
    "ssn",
)

_RESERVED_LOG_RECORD_ATTRS: set[str] = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


def is_sensitive_key(key: str, keys: Iterable[str] = SENSITIVE_KEYS) -> bool:
    lowered = key.lower()
    return any(k.lower() in lowered for k in keys)


def redact_sensitive(
    obj: Mapping[str, Any],
    *,
    keys: Iterable[str] = SENSITIVE_KEYS,
    placeholder: str = REDACTED,
) -> dict[str, Any]:
    """Return a copy of `obj` with sensitive values replaced, recursively."""

    keys = tuple(keys)

    def _walk(value: Any) -> Any:
        if isinstance(value, Mapping):
            return redact_sensitive(value, keys=keys, placeholder=placeholder)
        if isinstance(value, list | tuple):
            return [_walk(v) for v in value]
        return value

    out: dict[str, Any] = {}
    for key, value in obj.items():
        if is_sensitive_key(str(key), keys):
            out[key] = placeholder
        else:
            out[key] = _walk(value)
    return out


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for logging records."""

    def __init__(
        self,
        *,
        sensitive_keys: Iterable[str] = SENSITIVE_KEYS,
        placeholder: str = REDACTED,
    ) -> None:
        super().__init__()
        self._sensitive_keys = tuple(sensitive_keys)
        self._placeholder = placeholder

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = redact_sensitive(
                extra, keys=self._sensitive_keys, placeholder=self._placeholder
            )

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class RedactingTextFormatter(logging.Formatter):
    """Plain text lines with redacted extras appended as JSON."""

    def __init__(
        self,
        *,
        sensitive_keys: Iterable[str] = SENSITIVE_KEYS,
        placeholder: str = REDACTED,
    ) -> None:
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self._sensitive_keys = tuple(sensitive_keys)
        self._placeholder = placeholder

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        line = super().format(record)
        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            redacted = redact_sensitive(
                extra, keys=self._sensitive_keys, placeholder=self._placeholder
            )
            line = f"{line} {json.dumps(redacted, ensure_ascii=False, default=str)}"
        return line


def configure_logging(
    level: str,
    *,
    json_output: bool = True,
    extra_sensitive_keys: Iterable[str] = (),
    placeholder: str = REDACTED,
) -> None:
    """Configure root logging with redacting output on stderr."""

    root = logging.getLogger()

    # Remove any existing handlers to avoid duplicate logs when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    keys = (*SENSITIVE_KEYS, *extra_sensitive_keys)
    formatter: logging.Formatter
    if json_output:
        formatter = JsonFormatter(sensitive_keys=keys, placeholder=placeholder)
    else:
        formatter = RedactingTextFormatter(sensitive_keys=keys, placeholder=placeholder)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(formatter)

    root.addHandler(handler)
    root.setLevel(level.upper())
