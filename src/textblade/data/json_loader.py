"""Reads content definition files."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .errors import DataLoadError, DataValidationError


def load_definition_file(path: Path) -> Dict[str, Any]:
    """Return the id -> entry object stored in one content file.

    Unreadable files and bad JSON raise DataLoadError; any top-level value
    other than an object raises DataValidationError.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Content file is missing: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Cannot read content file {path}: {exc}") from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"{path.name} is not valid JSON (line {exc.lineno}): {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise DataValidationError(f"{path.name} must hold a JSON object keyed by content id.")
    return payload
