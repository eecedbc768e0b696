"""Two-layer validation pipeline and definition file loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ecosystem_core.errors.base import EcosystemError

from .integrity import validate_integrity
from .result import ValidationResult
from .structural import validate_structure

logger = logging.getLogger(__name__)

WORKFLOW_NOT_FOUND_CODE = "ORBYT-WF-004"
WORKFLOW_PARSE_CODE = "ORBYT-WF-003"

_JSON_SUFFIXES = {".json"}


def validate_workflow(raw: Any) -> ValidationResult:
    """raw tree -> schema layer -> integrity layer -> result.

    The integrity layer only runs on a definition the schema layer accepted.
    Pure and synchronous; safe to call concurrently on independent inputs.
    """

    structural = validate_structure(raw)
    if structural.definition is None:
        logger.info("Workflow rejected by schema layer", extra={"errors": len(structural.errors)})
        return structural

    result = validate_integrity(structural.definition)
    if result.ok:
        logger.info("Workflow accepted", extra={"steps": len(structural.definition.steps)})
    else:
        logger.info("Workflow rejected by integrity layer", extra={"errors": len(result.errors)})
    return result


def load_workflow_file(path: Path) -> dict[str, Any]:
    """Read a YAML or JSON definition and check the top level is a mapping."""

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise EcosystemError(
            WORKFLOW_NOT_FOUND_CODE,
            f"Workflow file not found: {path}",
            context={"path": str(path)},
            cause=e,
        ) from e
    except OSError as e:
        raise EcosystemError(
            WORKFLOW_NOT_FOUND_CODE,
            f"Could not read workflow file {path}: {e.strerror or e}",
            context={"path": str(path), "errno": e.errno},
            cause=e,
        ) from e
    except UnicodeDecodeError as e:
        raise EcosystemError(
            WORKFLOW_PARSE_CODE,
            f"Workflow file {path} is not valid UTF-8 (byte {e.start})",
            context={"path": str(path)},
            cause=e,
        ) from e

    try:
        if path.suffix.lower() in _JSON_SUFFIXES:
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise EcosystemError(
            WORKFLOW_PARSE_CODE,
            f"Could not parse workflow file {path}: {e}",
            context={"path": str(path)},
            cause=e,
        ) from e

    if not isinstance(data, dict):
        raise EcosystemError(
            WORKFLOW_PARSE_CODE,
            f"Workflow file {path} must define a mapping at the top level",
            context={"path": str(path)},
        )
    return data


def validate_workflow_file(path: Path) -> ValidationResult:
    return validate_workflow(load_workflow_file(path))
