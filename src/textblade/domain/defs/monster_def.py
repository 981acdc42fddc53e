"""Monster template structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class MonsterDef:
    """Read-only monster template; strength/toughness may be left to engine defaults."""

    id: str
    name: str
    health: int
    strength: int | None = None
    toughness: int | None = None
    skills: Tuple[str, ...] = ()
    weakness: str | None = None
    gold: int = 0
    experience_points: int = 0
