"""Location hub interactions: travel choices, NPC talk, narrative actions and the inn."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List

from textblade.domain.defs import Action, GiveItemAction, InvalidAction, LocationDef, SetSwitchAction, ShopDef
from textblade.domain.state import GameState
from textblade.services.errors import FailureReason
from textblade.services.views import ChoiceView, LocationView

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocationEvent:
    """Base location event."""


@dataclass(slots=True)
class SwitchSetEvent(LocationEvent):
    name: str
    value: Any


@dataclass(slots=True)
class ItemGainedEvent(LocationEvent):
    name: str
    quantity: int
    total: int


@dataclass(slots=True)
class InvalidActionEvent(LocationEvent):
    raw_type: str
    reason: FailureReason = "invalid_action"
    message: str = "Unknown action ignored."


@dataclass(slots=True)
class NpcTalkEvent(LocationEvent):
    npc_name: str
    text: str | None
    talk_count: int
    action_events: List[LocationEvent] = field(default_factory=list)


@dataclass(slots=True)
class RestedEvent(LocationEvent):
    price: int
    total_gold: int


@dataclass(slots=True)
class LocationActionFailedEvent(LocationEvent):
    reason: FailureReason
    message: str


@dataclass(slots=True)
class LocationActions:
    """Handlers the choice builder wires into each option."""

    on_go_to_location: Callable[[str], object]
    on_talk_to_npc: Callable[[int], object]
    on_open_shop: Callable[[ShopDef], object]
    on_rest_at_inn: Callable[[int], object]
    on_enter_dungeon: Callable[[], object]


def talk_text_index(talk_count: int, text_count: int) -> int:
    """Repeat the last line once an NPC runs out of new things to say."""
    return min(talk_count, text_count - 1)


class LocationService:
    """Reads location definitions and applies their effects to GameState."""

    def __init__(self, state: GameState, *, on_state_change: Callable[[], None] | None = None) -> None:
        self._state = state
        self._on_state_change = on_state_change

    def get_location_view(self, location: LocationDef) -> LocationView:
        return LocationView(name=location.name, description=location.description, image=location.image)

    def build_location_choices(self, location: LocationDef, actions: LocationActions) -> List[ChoiceView]:
        choices: List[ChoiceView] = []
        for link in location.linked_locations:
            if link.switch_required and not self._state.is_switch_active(link.switch_required):
                continue
            newly_unlocked = bool(link.switch_required) and not self._state.has_visited(link.id)
            choices.append(
                ChoiceView(
                    label=f"{link.label} *" if newly_unlocked else link.label,
                    on_select=lambda target=link.id: actions.on_go_to_location(target),
                    kind="newly_unlocked" if newly_unlocked else "normal",
                )
            )

        for index, npc in enumerate(location.npcs):
            choices.append(
                ChoiceView(label=f"Talk to {npc.name}", on_select=lambda i=index: actions.on_talk_to_npc(i))
            )

        if location.shop is not None:
            shop = location.shop
            choices.append(ChoiceView(label="Browse Shop", on_select=lambda: actions.on_open_shop(shop)))

        if location.price_per_night:
            price = location.price_per_night
            choices.append(
                ChoiceView(label=f"Rest at Inn ({price} gold)", on_select=lambda: actions.on_rest_at_inn(price))
            )

        if location.is_dungeon:
            choices.append(ChoiceView(label="Enter Dungeon *", on_select=actions.on_enter_dungeon, kind="dungeon"))
        return choices

    def talk_to_npc(self, location: LocationDef, npc_index: int) -> List[LocationEvent]:
        if not 0 <= npc_index < len(location.npcs):
            return [LocationActionFailedEvent(reason="invalid_action", message="Nobody by that name is here.")]
        npc = location.npcs[npc_index]
        talk_count = self._state.increment_npc_talk_count(location.name, npc.name)
        text = npc.texts[talk_text_index(talk_count, len(npc.texts))] if npc.texts else None
        action_events = self.execute_action(npc.on_talk) if npc.on_talk is not None else []
        self._notify_state_change()
        return [NpcTalkEvent(npc_name=npc.name, text=text, talk_count=talk_count, action_events=action_events)]

    def execute_action(self, action: Action) -> List[LocationEvent]:
        if isinstance(action, SetSwitchAction):
            self._state.set_switch(action.name, action.value)
            return [SwitchSetEvent(name=action.name, value=action.value)]
        if isinstance(action, GiveItemAction):
            self._state.add_item(action.name, action.quantity)
            total = self._state.inventory[action.name]
            return [ItemGainedEvent(name=action.name, quantity=action.quantity, total=total)]
        if isinstance(action, InvalidAction):
            logger.warning("Ignoring invalid action %s: %s", action.raw_type, action.reason)
            return [InvalidActionEvent(raw_type=action.raw_type)]
        raise TypeError(f"Unsupported action {action!r}")

    def rest_at_inn(self, price: int) -> List[LocationEvent]:
        """Pay for the night, then restore every member's HP and SP."""
        if not self._state.spend_gold(price):
            return [LocationActionFailedEvent(reason="insufficient_gold", message="You cannot afford a room.")]
        self._state.heal_party()
        self._notify_state_change()
        return [RestedEvent(price=price, total_gold=self._state.gold)]

    def _notify_state_change(self) -> None:
        if self._on_state_change is not None:
            self._on_state_change()
