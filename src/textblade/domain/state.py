"""Authoritative mutable snapshot of player progress."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Set

from textblade.domain import snapshot as snap
from textblade.domain.defs import GameDef
from textblade.domain.entities import CharacterStats, empty_equipment

DEFAULT_STARTING_GOLD = 100


def talk_key(location_name: str, npc_name: str) -> str:
    return f"{location_name}:{npc_name}"


@dataclass
class GameState:
    """Party, inventory, gold and narrative progress.

    Holds no combat, dungeon or shop rules; those services mutate it through
    the operations below. Invariants: ``gold >= 0``, inventory counts >= 1,
    member health/SP within ``[0, total]``.
    """

    game_def: GameDef = field(default_factory=lambda: GameDef(starting_location_id=None), repr=False)
    default_starting_gold: int = DEFAULT_STARTING_GOLD
    current_location_id: str | None = None
    party: List[CharacterStats] = field(default_factory=list)
    inventory: Dict[str, int] = field(default_factory=dict)
    equipment: Dict[str, Dict[str, str | None]] = field(default_factory=dict)
    switches: Dict[str, Any] = field(default_factory=dict)
    talk_counters: Dict[str, int] = field(default_factory=dict)
    visited: Set[str] = field(default_factory=set)
    gold: int = 0
    experience: int = 0

    @property
    def starting_gold(self) -> int:
        if self.game_def.starting_gold is None:
            return self.default_starting_gold
        return self.game_def.starting_gold

    # -----------------------
    # Lifecycle
    # -----------------------
    def start_new_game(self) -> None:
        """Reset progress to fresh copies of the content defaults."""
        self.current_location_id = None
        self.party = [
            CharacterStats.from_payload(copy.deepcopy(member)) for member in self.game_def.starting_party
        ]
        self.inventory = {}
        self.equipment = {member.name: empty_equipment() for member in self.party}
        self.switches = {}
        self.talk_counters = {}
        self.visited = set()
        self.gold = self.starting_gold
        self.experience = 0

    def apply_save(self, snapshot: Mapping[str, Any]) -> None:
        """Restore every field, falling back to defaults for missing or invalid ones."""
        self.current_location_id = snap.coerce_optional_str(snapshot, "currentLocationId")
        self.party = snap.coerce_party(snapshot)
        self.inventory = snap.coerce_counts(snapshot, "inventory", minimum=1)
        self.equipment = snap.coerce_equipment(snapshot)
        self.switches = snap.coerce_switches(snapshot)
        self.talk_counters = snap.coerce_counts(snapshot, "talkCounters", minimum=0)
        self.visited = snap.coerce_visited(snapshot)
        self.gold = snap.coerce_non_negative_int(snapshot, "gold", self.starting_gold)
        self.experience = snap.coerce_non_negative_int(snapshot, "experience", 0)

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-friendly snapshot with the same shape apply_save reads."""
        return {
            "currentLocationId": self.current_location_id,
            "party": [member.to_payload() for member in self.party],
            "inventory": dict(self.inventory),
            "equipment": {name: dict(slots) for name, slots in self.equipment.items()},
            "switches": copy.deepcopy(self.switches),
            "talkCounters": dict(self.talk_counters),
            "visited": sorted(self.visited),
            "gold": self.gold,
            "experience": self.experience,
        }

    # -----------------------
    # Locations
    # -----------------------
    def set_current_location(self, location_id: str) -> None:
        self.current_location_id = location_id
        self.mark_visited(location_id)

    def mark_visited(self, location_id: str) -> None:
        self.visited.add(location_id)

    def has_visited(self, location_id: str) -> bool:
        return location_id in self.visited

    # -----------------------
    # Economy
    # -----------------------
    def add_gold(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Gold amount must be zero or higher; use spend_gold to remove gold.")
        self.gold += amount

    def spend_gold(self, amount: int) -> bool:
        """Deduct ``amount`` if affordable; otherwise change nothing and return False."""
        if amount < 0:
            raise ValueError("Cannot spend a negative amount of gold.")
        if amount > self.gold:
            return False
        self.gold -= amount
        return True

    def add_experience(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Experience amount must be zero or higher.")
        self.experience += amount

    def add_item(self, name: str, quantity: int = 1) -> None:
        if quantity <= 0:
            return
        self.inventory[name] = self.inventory.get(name, 0) + quantity

    def remove_item(self, name: str, quantity: int = 1) -> bool:
        if quantity <= 0:
            return True
        current = self.inventory.get(name, 0)
        if current < quantity:
            return False
        if current == quantity:
            del self.inventory[name]
        else:
            self.inventory[name] = current - quantity
        return True

    # -----------------------
    # Switches and NPCs
    # -----------------------
    def set_switch(self, name: str, value: Any) -> None:
        self.switches[name] = value

    def is_switch_active(self, name: str) -> bool:
        return bool(self.switches.get(name))

    def increment_npc_talk_count(self, location_name: str, npc_name: str) -> int:
        """Bump the counter and return the value it had before (0 on first talk)."""
        key = talk_key(location_name, npc_name)
        current = self.talk_counters.get(key, 0)
        self.talk_counters[key] = current + 1
        return current

    def get_npc_talk_count(self, location_name: str, npc_name: str) -> int:
        return self.talk_counters.get(talk_key(location_name, npc_name), 0)

    def reset_npc_talk_count(self, location_name: str, npc_name: str) -> None:
        self.talk_counters[talk_key(location_name, npc_name)] = 0

    # -----------------------
    # Party
    # -----------------------
    def heal_party(self) -> None:
        for member in self.party:
            member.restore()

    def get_member(self, name: str) -> CharacterStats:
        for member in self.party:
            if member.name == name:
                return member
        raise KeyError(name)

    def living_members(self) -> List[CharacterStats]:
        return [member for member in self.party if member.is_alive]

    def is_party_defeated(self) -> bool:
        return not any(member.is_alive for member in self.party)
