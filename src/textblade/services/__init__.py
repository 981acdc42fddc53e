"""Service layer exports."""

from .combat_service import CombatService
from .dungeon_service import DungeonProgress, DungeonService
from .errors import ContentNotFoundError, EncounterActiveError, GameDataError, SaveLoadError
from .location_service import LocationActions, LocationService
from .save_service import SaveService
from .session import GameSession
from .shop_service import ShopService
from .storage import InMemorySaveStore, JsonFileSaveStore, SaveStore

__all__ = [
    "CombatService",
    "ContentNotFoundError",
    "DungeonProgress",
    "DungeonService",
    "EncounterActiveError",
    "GameDataError",
    "GameSession",
    "InMemorySaveStore",
    "JsonFileSaveStore",
    "LocationActions",
    "LocationService",
    "SaveLoadError",
    "SaveService",
    "SaveStore",
    "ShopService",
]
