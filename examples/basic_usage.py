#!/usr/bin/env python3
"""Programmatic validation example.

This demonstrates using the validator directly:

* load settings from `.env`
* validate an in-memory workflow definition
* map the outcome to a single process exit code
"""

from __future__ import annotations

import argparse
import json
from typing import Sequence

from ecosystem_core.config import CoreSettings
from ecosystem_core.errors import select_exit_code
from ecosystem_core.logging import configure_logging
from ecosystem_core.validation import validate_workflow

EXAMPLE = {
    "version": "1.0",
    "kind": "workflow",
    "triggers": [{"type": "cron", "schedule": "0 * * * *"}],
    "workflow": {
        "steps": [
            {"id": "build", "uses": "cli.exec", "with": {"command": "make"}},
            {"id": "deploy", "uses": "cli.exec", "needs": ["build"]},
        ]
    },
}


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate an example workflow definition.")
    parser.add_argument(
        "--break-needs",
        action="store_true",
        help="Point 'deploy' at a step that does not exist",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = CoreSettings()
    configure_logging(settings.log_level, json_output=settings.log_json)

    raw = json.loads(json.dumps(EXAMPLE))
    if args.break_needs:
        raw["workflow"]["steps"][1]["needs"] = ["missingStep"]

    result = validate_workflow(raw)
    if result.ok:
        assert result.definition is not None
        print(json.dumps(result.definition.to_dict(), indent=2))
    else:
        for issue in result.errors:
            print(f"[{issue.code}] {issue.path}: {issue.message}")

    return select_exit_code(result.to_errors())


if __name__ == "__main__":
    raise SystemExit(main())
