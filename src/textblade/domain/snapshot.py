"""Lenient coercion helpers for restoring GameState from a saved snapshot.

Every helper returns a fresh value and never raises: a missing field yields
the default silently, a present-but-invalid one yields the default and a
warning.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Set

from textblade.domain.entities import EQUIPMENT_SLOTS, CharacterStats

logger = logging.getLogger(__name__)

SNAPSHOT_KEYS: tuple[str, ...] = (
    "currentLocationId",
    "party",
    "inventory",
    "equipment",
    "switches",
    "talkCounters",
    "visited",
    "gold",
    "experience",
)

_MISSING = object()


def _invalid(key: str, value: Any) -> None:
    if value is not _MISSING and value is not None:
        logger.warning("Save field '%s' is invalid (%r); using default.", key, value)


def coerce_optional_str(snapshot: Mapping[str, Any], key: str) -> str | None:
    value = snapshot.get(key, _MISSING)
    if isinstance(value, str) and value:
        return value
    _invalid(key, value)
    return None


def coerce_non_negative_int(snapshot: Mapping[str, Any], key: str, default: int) -> int:
    value = snapshot.get(key, _MISSING)
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    _invalid(key, value)
    return default


def coerce_party(snapshot: Mapping[str, Any], key: str = "party") -> List[CharacterStats]:
    value = snapshot.get(key, _MISSING)
    if not isinstance(value, list):
        _invalid(key, value)
        return []
    party: List[CharacterStats] = []
    seen: Set[str] = set()
    for index, entry in enumerate(value):
        if not isinstance(entry, Mapping):
            logger.warning("Skipping party entry %d: expected an object.", index)
            continue
        try:
            member = CharacterStats.from_payload(entry)
        except ValueError as exc:
            logger.warning("Skipping party entry %d: %s", index, exc)
            continue
        if member.name in seen:
            logger.warning("Skipping duplicate party member '%s'.", member.name)
            continue
        seen.add(member.name)
        party.append(member)
    return party


def coerce_counts(snapshot: Mapping[str, Any], key: str, *, minimum: int) -> Dict[str, int]:
    value = snapshot.get(key, _MISSING)
    if not isinstance(value, Mapping):
        _invalid(key, value)
        return {}
    counts: Dict[str, int] = {}
    for name, count in value.items():
        if isinstance(name, str) and isinstance(count, int) and not isinstance(count, bool) and count >= minimum:
            counts[name] = count
        else:
            logger.warning("Dropping %s entry %r=%r.", key, name, count)
    return counts


def coerce_equipment(snapshot: Mapping[str, Any], key: str = "equipment") -> Dict[str, Dict[str, str | None]]:
    value = snapshot.get(key, _MISSING)
    if not isinstance(value, Mapping):
        _invalid(key, value)
        return {}
    equipment: Dict[str, Dict[str, str | None]] = {}
    for member_name, slots in value.items():
        if not isinstance(member_name, str) or not isinstance(slots, Mapping):
            logger.warning("Dropping equipment entry for %r.", member_name)
            continue
        equipment[member_name] = {
            slot: slots.get(slot) if isinstance(slots.get(slot), str) else None for slot in EQUIPMENT_SLOTS
        }
    return equipment


def coerce_switches(snapshot: Mapping[str, Any], key: str = "switches") -> Dict[str, Any]:
    value = snapshot.get(key, _MISSING)
    if not isinstance(value, Mapping):
        _invalid(key, value)
        return {}
    return {name: flag for name, flag in value.items() if isinstance(name, str)}


def coerce_visited(snapshot: Mapping[str, Any], key: str = "visited") -> Set[str]:
    value = snapshot.get(key, _MISSING)
    if not isinstance(value, (list, tuple)):
        _invalid(key, value)
        return set()
    return {entry for entry in value if isinstance(entry, str) and entry}
