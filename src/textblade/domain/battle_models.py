"""Battle domain models."""
from __future__ import annotations

from dataclasses import dataclass

from textblade.core.types import CombatContext, CombatTurn
from textblade.domain.entities import Monster


@dataclass(slots=True)
class CombatEncounter:
    """The single active fight: one monster against the whole party."""

    monster_id: str
    monster: Monster
    turn: CombatTurn = "player"
    context: CombatContext = "field"
    resolving: bool = False
