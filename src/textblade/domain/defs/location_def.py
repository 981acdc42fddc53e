"""Location definition data structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .action_def import Action


@dataclass(slots=True)
class LinkDef:
    """A travel link to another location, optionally gated by a switch."""

    id: str
    description: str | None = None
    switch_required: str | None = None

    @property
    def label(self) -> str:
        return self.description or self.id


@dataclass(slots=True)
class NpcDef:
    name: str
    texts: Tuple[str, ...] = ()
    on_talk: Action | None = None


@dataclass(slots=True)
class ShopItemDef:
    name: str
    price: int = 0
    description: str | None = None


@dataclass(slots=True)
class ShopDef:
    items: Tuple[ShopItemDef, ...] = ()


@dataclass(slots=True)
class LocationDef:
    """Describes a location, its links and whatever services it offers."""

    id: str
    name: str
    description: str = ""
    image: str | None = None
    linked_locations: Tuple[LinkDef, ...] = ()
    npcs: Tuple[NpcDef, ...] = ()
    shop: ShopDef | None = None
    price_per_night: int | None = None
    is_dungeon: bool = False
    monsters: Tuple[str, ...] = ()
    num_floors: int = 1
    encounter_chance: float | None = None
