"""Narrative actions attached to content (e.g. an NPC's OnTalk).

Actions are decoded once when content loads. Unknown tags become
``InvalidAction`` so the caller can report them instead of guessing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union


@dataclass(frozen=True, slots=True)
class SetSwitchAction:
    name: str
    value: Any = True


@dataclass(frozen=True, slots=True)
class GiveItemAction:
    name: str
    quantity: int = 1


@dataclass(frozen=True, slots=True)
class InvalidAction:
    raw_type: str
    reason: str = "unknown action type"


Action = Union[SetSwitchAction, GiveItemAction, InvalidAction]


def action_type_name(raw_type: str) -> str:
    """Return the short type name from a tag like ``Game.Actions.SetSwitchAction, Game``."""
    return raw_type.split(",")[0].split(".")[-1].strip()


def decode_action(payload: Mapping[str, Any]) -> Action:
    raw_type = payload.get("$type")
    if not isinstance(raw_type, str) or not raw_type.strip():
        return InvalidAction(raw_type=str(raw_type), reason="missing $type")
    kind = action_type_name(raw_type)
    if kind == "SetSwitchAction":
        name = payload.get("SwitchName")
        if not isinstance(name, str) or not name:
            return InvalidAction(raw_type=raw_type, reason="SwitchName must be a non-empty string")
        return SetSwitchAction(name=name, value=payload.get("Value", True))
    if kind == "GiveItemAction":
        name = payload.get("ItemName")
        quantity = payload.get("Quantity", 1)
        if not isinstance(name, str) or not name:
            return InvalidAction(raw_type=raw_type, reason="ItemName must be a non-empty string")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            return InvalidAction(raw_type=raw_type, reason="Quantity must be a positive integer")
        return GiveItemAction(name=name, quantity=quantity)
    return InvalidAction(raw_type=raw_type)
