"""Skills repository."""
from __future__ import annotations

from typing import Dict

from textblade.data.errors import DataValidationError
from textblade.data.repositories.base import RepositoryBase
from textblade.domain.defs import SkillDef


class SkillsRepository(RepositoryBase[SkillDef]):
    """Loads combat skills keyed by id."""

    kind = "skill"

    def __init__(self, base_path=None) -> None:
        super().__init__("skills.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, SkillDef]:
        skills: Dict[str, SkillDef] = {}
        for raw_id, payload in raw.items():
            context = f"skill '{raw_id}'"
            data = self._require_mapping(payload, context)
            cost = self._optional_int(data.get("Cost"), f"{context} Cost") or 0
            if cost < 0:
                raise DataValidationError(f"{context} Cost must be >= 0.")
            multiplier = data.get("DamageMultiplier")
            skills[raw_id] = SkillDef(
                id=raw_id,
                cost=cost,
                damage_multiplier=(
                    1.0 if multiplier is None else self._require_number(multiplier, f"{context} DamageMultiplier")
                ),
                damage_type=self._optional_str(data.get("DamageType"), f"{context} DamageType"),
                target=self._optional_str(data.get("Target"), f"{context} Target"),
            )
        return skills
