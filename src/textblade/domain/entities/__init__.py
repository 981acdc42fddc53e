"""Runtime entity exports."""

from .character import CharacterStats
from .equipment import EQUIPMENT_SLOTS, empty_equipment
from .monster import Monster

__all__ = ["CharacterStats", "EQUIPMENT_SLOTS", "Monster", "empty_equipment"]
