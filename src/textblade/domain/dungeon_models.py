"""Dungeon run models."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class DungeonRun:
    """Progress through one dungeon; floor 0 is the entrance."""

    name: str
    monster_ids: Tuple[str, ...]
    num_floors: int
    encounter_chance: float
    location_id: str | None = None
    current_floor: int = 0

    @property
    def is_at_entrance(self) -> bool:
        return self.current_floor == 0

    @property
    def is_complete(self) -> bool:
        return self.current_floor > self.num_floors
