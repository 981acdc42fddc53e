"""Repository exports."""

from .game_repo import GameDataRepository
from .locations_repo import LocationsRepository
from .monsters_repo import MonstersRepository
from .skills_repo import SkillsRepository

__all__ = [
    "GameDataRepository",
    "LocationsRepository",
    "MonstersRepository",
    "SkillsRepository",
]
