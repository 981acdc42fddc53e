"""Monsters repository."""
from __future__ import annotations

from typing import Dict

from textblade.data.errors import DataValidationError
from textblade.data.repositories.base import RepositoryBase
from textblade.domain.defs import MonsterDef


class MonstersRepository(RepositoryBase[MonsterDef]):
    """Loads monster templates keyed by id."""

    kind = "monster"

    def __init__(self, base_path=None) -> None:
        super().__init__("monsters.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, MonsterDef]:
        monsters: Dict[str, MonsterDef] = {}
        for raw_id, payload in raw.items():
            context = f"monster '{raw_id}'"
            data = self._require_mapping(payload, context)
            if "Health" not in data:
                raise DataValidationError(f"{context} missing fields: ['Health']")
            health = self._require_int(data["Health"], f"{context} Health")
            if health <= 0:
                raise DataValidationError(f"{context} Health must be positive.")
            monsters[raw_id] = MonsterDef(
                id=raw_id,
                name=self._optional_str(data.get("Name"), f"{context} Name") or raw_id,
                health=health,
                strength=self._optional_int(data.get("Strength"), f"{context} Strength"),
                toughness=self._optional_int(data.get("Toughness"), f"{context} Toughness"),
                skills=tuple(self._require_str_list(data.get("Skills", []), f"{context} Skills")),
                weakness=self._optional_str(data.get("Weakness"), f"{context} Weakness"),
                gold=self._optional_int(data.get("Gold"), f"{context} Gold") or 0,
                experience_points=self._optional_int(
                    data.get("ExperiencePoints"), f"{context} ExperiencePoints"
                )
                or 0,
            )
        return monsters
