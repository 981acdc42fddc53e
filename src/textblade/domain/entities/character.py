"""Party member stats."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping


def _int_or(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


@dataclass(slots=True)
class CharacterStats:
    """Mutable stats for one party member; ``name`` is unique within the party."""

    name: str
    total_health: int
    current_health: int
    total_skill_points: int = 0
    current_skill_points: int = 0
    strength: int = 0
    toughness: int = 0
    special: int = 0
    special_defense: int = 0
    skills: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.total_health = max(0, self.total_health)
        self.total_skill_points = max(0, self.total_skill_points)
        self.current_health = max(0, min(self.current_health, self.total_health))
        self.current_skill_points = max(0, min(self.current_skill_points, self.total_skill_points))

    @property
    def is_alive(self) -> bool:
        return self.current_health > 0

    def apply_damage(self, amount: int) -> int:
        """Subtract health, never below zero; return the new health."""
        self.current_health = max(0, self.current_health - max(0, amount))
        return self.current_health

    def heal(self, amount: int) -> int:
        """Add health up to the maximum; return the amount actually restored."""
        before = self.current_health
        self.current_health = min(self.total_health, self.current_health + max(0, amount))
        return self.current_health - before

    def can_spend(self, cost: int) -> bool:
        return self.current_skill_points >= cost

    def spend_skill_points(self, cost: int) -> bool:
        if not self.can_spend(cost):
            return False
        self.current_skill_points -= cost
        return True

    def restore(self) -> None:
        self.current_health = self.total_health
        self.current_skill_points = self.total_skill_points

    def to_payload(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "TotalHealth": self.total_health,
            "CurrentHealth": self.current_health,
            "TotalSkillPoints": self.total_skill_points,
            "CurrentSkillPoints": self.current_skill_points,
            "Strength": self.strength,
            "Toughness": self.toughness,
            "Special": self.special,
            "SpecialDefense": self.special_defense,
            "Skills": list(self.skills),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CharacterStats":
        """Build from content/save data; missing current values default to the totals."""
        name = payload.get("Name")
        if not isinstance(name, str) or not name:
            raise ValueError("Party member requires a non-empty Name.")
        total_health = _int_or(payload.get("TotalHealth"), _int_or(payload.get("CurrentHealth"), 1))
        total_sp = _int_or(payload.get("TotalSkillPoints"), _int_or(payload.get("CurrentSkillPoints"), 0))
        skills = payload.get("Skills")
        return cls(
            name=name,
            total_health=total_health,
            current_health=_int_or(payload.get("CurrentHealth"), total_health),
            total_skill_points=total_sp,
            current_skill_points=_int_or(payload.get("CurrentSkillPoints"), total_sp),
            strength=_int_or(payload.get("Strength"), 0),
            toughness=_int_or(payload.get("Toughness"), 0),
            special=_int_or(payload.get("Special"), 0),
            special_defense=_int_or(payload.get("SpecialDefense"), 0),
            skills=[skill for skill in skills if isinstance(skill, str)] if isinstance(skills, list) else [],
        )
