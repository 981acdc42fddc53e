"""Repository for location definitions."""
from __future__ import annotations

import logging
from typing import Dict, List

from textblade.data.errors import DataValidationError
from textblade.data.repositories.base import RepositoryBase
from textblade.domain.defs import InvalidAction, LinkDef, LocationDef, NpcDef, ShopDef, ShopItemDef
from textblade.domain.defs.action_def import decode_action

logger = logging.getLogger(__name__)


class LocationsRepository(RepositoryBase[LocationDef]):
    """Loads and validates location definitions."""

    kind = "location"

    def __init__(self, base_path=None) -> None:
        super().__init__("locations.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, LocationDef]:
        definitions: Dict[str, LocationDef] = {}
        for location_id, payload in raw.items():
            if not location_id.strip():
                raise DataValidationError("location id must be a non-empty string.")
            context = f"location '{location_id}'"
            mapping = self._require_mapping(payload, context)
            name = self._require_str(mapping.get("Name"), f"{context} Name").strip()
            if not name:
                raise DataValidationError(f"{context} Name must not be empty.")

            price = self._optional_int(mapping.get("PricePerNight"), f"{context} PricePerNight")
            if price is not None and price < 0:
                raise DataValidationError(f"{context} PricePerNight must be >= 0.")
            num_floors = self._optional_int(mapping.get("NumFloors"), f"{context} NumFloors") or 1
            if num_floors < 1:
                raise DataValidationError(f"{context} NumFloors must be >= 1.")
            chance = mapping.get("EncounterChance")
            if chance is not None:
                chance = self._require_number(chance, f"{context} EncounterChance")
                if not 0.0 <= chance <= 1.0:
                    raise DataValidationError(f"{context} EncounterChance must be between 0 and 1.")

            definitions[location_id] = LocationDef(
                id=location_id,
                name=name,
                description=self._optional_str(mapping.get("Description"), f"{context} Description") or "",
                image=self._optional_str(mapping.get("Image"), f"{context} Image"),
                linked_locations=tuple(self._build_links(mapping.get("LinkedLocations", []), context)),
                npcs=tuple(self._build_npcs(mapping.get("NPCs", []), context)),
                shop=self._build_shop(mapping.get("Shop"), context),
                price_per_night=price,
                is_dungeon=bool(mapping.get("IsDungeon", False)),
                monsters=tuple(self._require_str_list(mapping.get("Monsters", []), f"{context} Monsters")),
                num_floors=num_floors,
                encounter_chance=chance,
            )
        return definitions

    def _build_links(self, value: object, context: str) -> List[LinkDef]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} LinkedLocations must be a list.")
        links: List[LinkDef] = []
        for index, entry in enumerate(value):
            link_context = f"{context} LinkedLocations[{index}]"
            mapping = self._require_mapping(entry, link_context)
            links.append(
                LinkDef(
                    id=self._require_str(mapping.get("Id"), f"{link_context} Id"),
                    description=self._optional_str(mapping.get("Description"), f"{link_context} Description"),
                    switch_required=self._optional_str(
                        mapping.get("SwitchRequired"), f"{link_context} SwitchRequired"
                    ),
                )
            )
        return links

    def _build_npcs(self, value: object, context: str) -> List[NpcDef]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} NPCs must be a list.")
        npcs: List[NpcDef] = []
        for index, entry in enumerate(value):
            npc_context = f"{context} NPCs[{index}]"
            mapping = self._require_mapping(entry, npc_context)
            on_talk_raw = mapping.get("OnTalk")
            on_talk = None
            if on_talk_raw is not None:
                on_talk = decode_action(self._require_mapping(on_talk_raw, f"{npc_context} OnTalk"))
                if isinstance(on_talk, InvalidAction):
                    logger.warning("%s OnTalk is not a known action: %s", npc_context, on_talk.reason)
            npcs.append(
                NpcDef(
                    name=self._require_str(mapping.get("Name"), f"{npc_context} Name"),
                    texts=tuple(self._require_str_list(mapping.get("Texts", []), f"{npc_context} Texts")),
                    on_talk=on_talk,
                )
            )
        return npcs

    def _build_shop(self, value: object, context: str) -> ShopDef | None:
        if value is None:
            return None
        mapping = self._require_mapping(value, f"{context} Shop")
        items_raw = mapping.get("ItemsForSale", [])
        if not isinstance(items_raw, list):
            raise DataValidationError(f"{context} Shop ItemsForSale must be a list.")
        items: List[ShopItemDef] = []
        for index, entry in enumerate(items_raw):
            item_context = f"{context} Shop ItemsForSale[{index}]"
            item = self._require_mapping(entry, item_context)
            price = self._optional_int(item.get("Price"), f"{item_context} Price") or 0
            if price < 0:
                raise DataValidationError(f"{item_context} Price must be >= 0.")
            items.append(
                ShopItemDef(
                    name=self._require_str(item.get("Name"), f"{item_context} Name"),
                    price=price,
                    description=self._optional_str(item.get("Description"), f"{item_context} Description"),
                )
            )
        return ShopDef(items=tuple(items))
