"""Key-value persistence for the single save snapshot.

Storage failures never stop the game: they are logged and the in-memory
state stays authoritative for the rest of the session.
"""
from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Protocol

from textblade.config import EngineConfig, get_save_dir

logger = logging.getLogger(__name__)

Snapshot = Dict[str, Any]


class SaveStore(Protocol):
    def load(self) -> Snapshot | None: ...

    def save(self, snapshot: Snapshot) -> None: ...

    def clear(self) -> None: ...


class JsonFileSaveStore:
    """Stores the snapshot as a JSON file on disk."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else EngineConfig().save_path(get_save_dir())

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Snapshot | None:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.error("Failed to load save data from %s: %s", self._path, exc)
            return None
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Failed to load save data from %s: %s", self._path, exc)
            return None
        if not isinstance(payload, dict):
            logger.error("Failed to load save data from %s: expected a JSON object", self._path)
            return None
        return payload

    def save(self, snapshot: Snapshot) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(snapshot, indent=2, sort_keys=True), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to save game to %s: %s", self._path, exc)

    def clear(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.error("Failed to delete save data at %s: %s", self._path, exc)


class InMemorySaveStore:
    """Keeps the snapshot in memory; handy for tests and throwaway sessions."""

    def __init__(self, snapshot: Snapshot | None = None) -> None:
        self._snapshot = copy.deepcopy(snapshot)
        self.save_count = 0

    def load(self) -> Snapshot | None:
        return copy.deepcopy(self._snapshot)

    def save(self, snapshot: Snapshot) -> None:
        self._snapshot = copy.deepcopy(snapshot)
        self.save_count += 1

    def clear(self) -> None:
        self._snapshot = None
