"""Serialization helpers between GameState and the save store."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from textblade.domain.state import GameState
from textblade.services.errors import SaveLoadError
from textblade.services.storage import SaveStore

logger = logging.getLogger(__name__)

SavePayload = Dict[str, Any]


class SaveService:
    """Adds a timestamp to GameState snapshots and moves them through a SaveStore."""

    def __init__(self, store: SaveStore) -> None:
        self._store = store

    def serialize(self, state: GameState) -> SavePayload:
        payload = state.to_json()
        payload["timestamp"] = datetime.now(timezone.utc).isoformat()
        return payload

    def restore(self, state: GameState, payload: Mapping[str, Any]) -> None:
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        state.apply_save(payload)

    def persist(self, state: GameState) -> None:
        """Fire-and-forget write; storage errors are logged by the store."""
        self._store.save(self.serialize(state))

    def load_into(self, state: GameState) -> bool:
        """Apply the stored snapshot if one exists; return whether it did."""
        payload = self._store.load()
        if payload is None:
            return False
        try:
            self.restore(state, payload)
        except SaveLoadError as exc:
            logger.warning("Ignoring unreadable save: %s", exc)
            return False
        return True

    def has_save(self) -> bool:
        return self._store.load() is not None

    def clear(self) -> None:
        self._store.clear()
