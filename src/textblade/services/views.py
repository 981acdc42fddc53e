"""View models handed to the presentation layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List

from textblade.core.types import ChoiceKind


@dataclass(slots=True)
class ChoiceView:
    """One selectable option; ``on_select`` is invoked when the player picks it."""

    label: str
    on_select: Callable[[], object]
    enabled: bool = True
    kind: ChoiceKind = "normal"

    def select(self) -> object:
        if not self.enabled:
            return None
        return self.on_select()


@dataclass(slots=True)
class LocationView:
    name: str
    description: str
    image: str | None = None


@dataclass(slots=True)
class HealthView:
    current: int
    total: int


@dataclass(slots=True)
class CombatView:
    """Monster and party status for the active fight."""

    monster_name: str
    monster_health: HealthView
    party_lines: List[str] = field(default_factory=list)
