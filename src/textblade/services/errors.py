"""Service-layer exceptions and failure reasons."""
from typing import Literal

from textblade.data.errors import ContentNotFoundError

FailureReason = Literal[
    "content_not_found",
    "insufficient_gold",
    "insufficient_sp",
    "invalid_action",
    "invalid_actor",
    "not_player_turn",
    "no_items",
]


class EncounterActiveError(Exception):
    """Raised when a fight or dungeon run is started while one is already active."""


class SaveLoadError(Exception):
    """Raised when a save payload cannot be read at all."""


class GameDataError(Exception):
    """Raised when the data required to run the session cannot be loaded."""


__all__ = [
    "ContentNotFoundError",
    "EncounterActiveError",
    "FailureReason",
    "GameDataError",
    "SaveLoadError",
]
