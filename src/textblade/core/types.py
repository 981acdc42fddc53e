"""Shared type aliases for the core and domain layers."""
from typing import Literal

CombatTurn = Literal["player", "monster"]
CombatContext = Literal["field", "dungeon"]
ChoiceKind = Literal["normal", "newly_unlocked", "dungeon"]
EquipmentSlot = Literal["Weapon", "Helmet", "Armour"]

__all__ = ["ChoiceKind", "CombatContext", "CombatTurn", "EquipmentSlot"]
