"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def minimal_workflow() -> dict[str, Any]:
    """Two steps, `deploy` depends on `build`."""
    return {
        "version": "1.0",
        "kind": "workflow",
        "workflow": {
            "steps": [
                {"id": "build", "uses": "cli.exec"},
                {"id": "deploy", "uses": "cli.exec", "needs": ["build"]},
            ]
        },
    }


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Undo root logger changes made by `configure_logging`."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run in an empty directory with no ECOSYSTEM_* variables set."""
    for name in (
        "ECOSYSTEM_LOG_LEVEL",
        "ECOSYSTEM_LOG_JSON",
        "ECOSYSTEM_REDACT_PLACEHOLDER",
        "ECOSYSTEM_EXTRA_SENSITIVE_KEYS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
