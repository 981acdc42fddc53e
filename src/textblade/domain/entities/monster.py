"""Ephemeral monster instances created per encounter."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from textblade.domain.defs import MonsterDef

DEFAULT_MONSTER_STRENGTH = 10
DEFAULT_MONSTER_TOUGHNESS = 5


@dataclass(slots=True)
class Monster:
    """Snapshot of a monster template owned by the active encounter."""

    name: str
    current_health: int
    total_health: int
    strength: int = DEFAULT_MONSTER_STRENGTH
    toughness: int = DEFAULT_MONSTER_TOUGHNESS
    skills: List[str] = field(default_factory=list)
    weakness: str | None = None
    gold: int = 0
    experience_points: int = 0

    @property
    def is_alive(self) -> bool:
        return self.current_health > 0

    def apply_damage(self, amount: int) -> int:
        self.current_health -= max(0, amount)
        return self.current_health

    @classmethod
    def from_def(
        cls,
        monster_def: MonsterDef,
        *,
        default_strength: int = DEFAULT_MONSTER_STRENGTH,
        default_toughness: int = DEFAULT_MONSTER_TOUGHNESS,
    ) -> "Monster":
        return cls(
            name=monster_def.name,
            current_health=monster_def.health,
            total_health=monster_def.health,
            strength=default_strength if monster_def.strength is None else monster_def.strength,
            toughness=default_toughness if monster_def.toughness is None else monster_def.toughness,
            skills=list(monster_def.skills),
            weakness=monster_def.weakness,
            gold=monster_def.gold,
            experience_points=monster_def.experience_points,
        )
