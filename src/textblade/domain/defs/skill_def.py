"""Skill definition structures."""
from __future__ import annotations

from dataclasses import dataclass

HEAL_TARGET = "SingleFriend"


@dataclass(slots=True)
class SkillDef:
    """Describes a combat skill that costs SP."""

    id: str
    cost: int
    damage_multiplier: float = 1.0
    damage_type: str | None = None
    target: str | None = None

    @property
    def is_heal(self) -> bool:
        return self.target == HEAL_TARGET
