"""Per-character equipment slots."""
from __future__ import annotations

from typing import Dict

from textblade.core.types import EquipmentSlot

EQUIPMENT_SLOTS: tuple[EquipmentSlot, ...] = ("Weapon", "Helmet", "Armour")


def empty_equipment() -> Dict[str, str | None]:
    return {slot: None for slot in EQUIPMENT_SLOTS}
