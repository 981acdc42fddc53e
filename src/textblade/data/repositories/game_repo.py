"""Repository for the top-level game definition."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from textblade.data.errors import DataValidationError
from textblade.data.repositories.base import RepositoryBase
from textblade.domain.defs import GameDef

GAME_DEF_ID = "game"


class GameDataRepository(RepositoryBase[GameDef]):
    """Loads starting party, starting gold and starting location."""

    kind = "game data"

    def __init__(self, base_path: Path | str | None = None) -> None:
        super().__init__("game.json", base_path)

    def load(self) -> GameDef:
        return self.get(GAME_DEF_ID)

    def _build(self, raw: dict[str, object]) -> Dict[str, GameDef]:
        starting_gold = self._optional_int(raw.get("StartingGold"), "game StartingGold")
        if starting_gold is not None and starting_gold < 0:
            raise DataValidationError("game StartingGold must be >= 0.")
        party_raw = raw.get("StartingParty", [])
        if not isinstance(party_raw, list):
            raise DataValidationError("game StartingParty must be a list.")
        party: List[Dict[str, Any]] = []
        names: set[str] = set()
        for index, member in enumerate(party_raw):
            mapping = self._require_mapping(member, f"game StartingParty[{index}]")
            name = self._require_str(mapping.get("Name"), f"game StartingParty[{index}] Name")
            if not name.strip():
                raise DataValidationError(f"game StartingParty[{index}] Name must not be empty.")
            if name in names:
                raise DataValidationError(f"Duplicate party member name '{name}'.")
            names.add(name)
            party.append(dict(mapping))
        game_def = GameDef(
            starting_location_id=self._optional_str(raw.get("StartingLocationId"), "game StartingLocationId"),
            starting_gold=starting_gold,
            starting_party=tuple(party),
        )
        return {GAME_DEF_ID: game_def}
