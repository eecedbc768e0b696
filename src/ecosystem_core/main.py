"""CLI entrypoint: validate workflow definitions and inspect the error taxonomy.

Every run reports exactly one process exit code (see `errors.exit_codes`).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from ecosystem_core import __version__
from ecosystem_core.config import CoreSettings
from ecosystem_core.errors import (
    ERROR_KINDS,
    EcosystemError,
    ExitCode,
    describe_category,
    describe_exit_code,
    is_success,
    select_exit_code,
    wrap_error,
)
from ecosystem_core.errors.types import suggested_action
from ecosystem_core.logging import configure_logging
from ecosystem_core.validation import ValidationResult, validate_workflow_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecosystem-validate",
        description="Validate workflow definitions and inspect error codes",
    )
    parser.add_argument("--version", action="version", version=f"ecosystem-core {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured logging level (e.g. DEBUG)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Validate a YAML or JSON workflow file")
    validate.add_argument("path", help="Path to the workflow definition")
    validate.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Report format written to stdout",
    )

    explain = subparsers.add_parser("explain", help="Show the taxonomy entry for an error code")
    explain.add_argument("code", help="Error code, e.g. ORBYT-WF-002")

    subparsers.add_parser("exit-codes", help="List every process exit code")

    return parser


def _print_report(result: ValidationResult, *, path: Path, fmt: str, exit_code: int) -> None:
    if fmt == "json":
        payload = {"path": str(path), **result.to_json(), "exitCode": exit_code}
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if is_success(exit_code):
        assert result.definition is not None
        print(f"{path}: OK ({len(result.definition.steps)} steps)")
        return
    print(f"{path}: {len(result.errors)} error(s)")
    for issue in result.errors:
        where = issue.path or "<root>"
        print(f"  [{issue.code}] {where}: {issue.message}")


def _run_validate(args: argparse.Namespace) -> int:
    path = Path(args.path)
    try:
        result = validate_workflow_file(path)
    except EcosystemError as e:
        logger.error("Could not load workflow", extra={"path": str(path), "code": e.code})
        print(e.user_message(), file=sys.stderr)
        return int(e.exit_code)

    exit_code = select_exit_code(result.to_errors())
    _print_report(result, path=path, fmt=args.format, exit_code=exit_code)
    return exit_code


def _run_explain(args: argparse.Namespace) -> int:
    kind = ERROR_KINDS.get(args.code)
    if kind is None:
        print(f"Unknown error code: {args.code}", file=sys.stderr)
        return int(ExitCode.INVALID_INPUT)
    payload = {
        **kind.to_json(),
        "categoryDescription": describe_category(kind.category),
        "exitCodeDescription": describe_exit_code(kind.exit_code),
        "suggestedAction": suggested_action(kind.category),
    }
    print(json.dumps(payload, indent=2))
    return 0


def _run_exit_codes() -> int:
    for code in ExitCode:
        print(f"{int(code):>3}  {code.name:<26} {describe_exit_code(code)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {"log_level": args.log_level} if args.log_level else {}
    try:
        settings = CoreSettings(**overrides)
    except ValidationError as e:
        # Logging is not configured yet.
        print("Configuration error (check --log-level, your environment and .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return int(ExitCode.INVALID_CONFIG)

    configure_logging(
        settings.log_level,
        json_output=settings.log_json,
        extra_sensitive_keys=settings.extra_sensitive_keys,
        placeholder=settings.redact_placeholder,
    )

    try:
        if args.command == "validate":
            return _run_validate(args)
        if args.command == "explain":
            return _run_explain(args)
        if args.command == "exit-codes":
            return _run_exit_codes()
        parser.error(f"Unknown command: {args.command}")
    except Exception as e:
        err = wrap_error(e, component="cli")
        logger.exception("Unhandled error", extra={"code": err.code})
        print(str(err), file=sys.stderr)
        return int(err.exit_code)

    return int(ExitCode.INVALID_INPUT)


if __name__ == "__main__":
    raise SystemExit(main())
