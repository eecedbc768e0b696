"""Unit tests for the `ecosystem-validate` CLI process boundary."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from ecosystem_core.errors import ExitCode
from ecosystem_core.main import main
from factories import make_step, make_workflow

pytestmark = pytest.mark.usefixtures("clean_env", "restore_root_logging")


def _write(path: Path, data: dict[str, Any]) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_valid_workflow_exits_zero(
    clean_env: Path, minimal_workflow: dict[str, Any], capsys: pytest.CaptureFixture[str]
) -> None:
    path = _write(clean_env / "ci.json", minimal_workflow)

    code = main(["validate", str(path)])

    assert code == 0
    assert "OK (2 steps)" in capsys.readouterr().out


def test_missing_dependency_reports_and_exits_with_its_code(
    clean_env: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    raw = make_workflow(make_step("build"), make_step("deploy", needs=["missingStep"]))
    path = _write(clean_env / "ci.json", raw)

    code = main(["validate", str(path)])

    assert code == ExitCode.INVALID_INPUT
    out = capsys.readouterr().out
    assert "[ORBYT-STEP-001] workflow.steps:" in out
    assert "missingStep" in out


def test_json_report_includes_the_single_exit_code(
    clean_env: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    raw = make_workflow(
        make_step("a", needs=["b"]),
        make_step("b", needs=["a"]),
        make_step("c", needs=["ghost"]),
    )
    path = _write(clean_env / "ci.json", raw)

    code = main(["validate", str(path), "--format", "json"])

    report = json.loads(capsys.readouterr().out)
    assert report["ok"] is False
    assert {e["code"] for e in report["errors"]} == {"ORBYT-STEP-001", "ORBYT-WF-002"}
    # The cycle (high) outranks the missing reference (medium).
    assert report["exitCode"] == code == ExitCode.INVALID_DEPENDENCY_GRAPH


def test_missing_file_exits_with_invalid_input(clean_env: Path) -> None:
    assert main(["validate", str(clean_env / "absent.yaml")]) == ExitCode.INVALID_INPUT


def test_directory_path_exits_with_invalid_input(
    clean_env: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["validate", str(clean_env)]) == ExitCode.INVALID_INPUT
    assert "CORE-INT-001" not in capsys.readouterr().err


def test_invalid_utf8_exits_with_invalid_format(clean_env: Path) -> None:
    path = clean_env / "bad.yaml"
    path.write_bytes(b"\xff\xfe")

    assert main(["validate", str(path)]) == ExitCode.INVALID_FORMAT


def test_bad_yaml_exits_with_invalid_format(clean_env: Path) -> None:
    path = clean_env / "broken.yaml"
    path.write_text("version: [unclosed\n", encoding="utf-8")

    assert main(["validate", str(path)]) == ExitCode.INVALID_FORMAT


def test_explain_known_code(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["explain", "ORBYT-WF-002"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["exitCode"] == 106
    assert payload["category"] == "user"
    assert payload["categoryDescription"] == "User input or parameter error"
    assert payload["suggestedAction"] == "Check your input and try again"


def test_explain_unknown_code() -> None:
    assert main(["explain", "NOPE-1"]) == ExitCode.INVALID_INPUT


def test_exit_codes_listing(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["exit-codes"]) == 0

    out = capsys.readouterr().out
    assert "INVALID_DEPENDENCY_GRAPH" in out
    assert "509" in out


def test_invalid_settings_exit_with_config_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ECOSYSTEM_LOG_LEVEL", "chatty")

    assert main(["exit-codes"]) == ExitCode.INVALID_CONFIG


def test_unknown_log_level_flag_exits_with_config_code(
    clean_env: Path, minimal_workflow: dict[str, Any], capsys: pytest.CaptureFixture[str]
) -> None:
    path = _write(clean_env / "ci.json", minimal_workflow)

    assert main(["--log-level", "LOUD", "validate", str(path)]) == ExitCode.INVALID_CONFIG
    assert "Unknown log level" in capsys.readouterr().err


def test_log_level_flag_overrides_environment(
    clean_env: Path, minimal_workflow: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ECOSYSTEM_LOG_LEVEL", "ERROR")
    path = _write(clean_env / "ci.json", minimal_workflow)

    assert main(["--log-level", "debug", "validate", str(path)]) == 0
    assert logging.getLogger().level == logging.DEBUG


def test_unexpected_failure_is_wrapped(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _boom(path: Path) -> None:
        raise RuntimeError("disk on fire")

    monkeypatch.setattr("ecosystem_core.main.validate_workflow_file", _boom)

    code = main(["validate", str(clean_env / "ci.yaml")])

    assert code == ExitCode.UNHANDLED_EXCEPTION
    assert "[CORE-INT-001]" in capsys.readouterr().err
