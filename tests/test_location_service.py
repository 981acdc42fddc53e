from __future__ import annotations

import logging
from typing import List

import pytest

from textblade.domain.defs import (
    GiveItemAction,
    InvalidAction,
    LinkDef,
    LocationDef,
    NpcDef,
    SetSwitchAction,
    ShopDef,
    ShopItemDef,
)
from textblade.domain.entities import CharacterStats
from textblade.domain.state import GameState
from textblade.services.location_service import (
    InvalidActionEvent,
    ItemGainedEvent,
    LocationActionFailedEvent,
    LocationActions,
    LocationService,
    NpcTalkEvent,
    RestedEvent,
    SwitchSetEvent,
    talk_text_index,
)


def _make_town() -> LocationDef:
    return LocationDef(
        id="KingsVale/KingsVale",
        name="King's Vale",
        description="A quiet town.",
        linked_locations=(
            LinkDef(id="KingsVale/Inn", description="The Inn"),
            LinkDef(id="NorthSeasideCave/Entrance", description="North Seaside Cave", switch_required="spokeToKing"),
        ),
        npcs=(
            NpcDef(
                name="King",
                texts=("Welcome, traveller.", "The cave lies north.", "Go now."),
                on_talk=SetSwitchAction(name="spokeToKing"),
            ),
            NpcDef(name="Merchant", texts=("Take this.",), on_talk=GiveItemAction(name="Potion", quantity=2)),
        ),
        shop=ShopDef(items=(ShopItemDef(name="Potion", price=25),)),
        price_per_night=10,
    )


class _Actions:
    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def build(self) -> LocationActions:
        return LocationActions(
            on_go_to_location=lambda target: self.calls.append(("go", target)),
            on_talk_to_npc=lambda index: self.calls.append(("talk", index)),
            on_open_shop=lambda shop: self.calls.append(("shop", len(shop.items))),
            on_rest_at_inn=lambda price: self.calls.append(("rest", price)),
            on_enter_dungeon=lambda: self.calls.append(("dungeon",)),
        )


@pytest.mark.parametrize("count,expected", [(0, 0), (1, 1), (2, 2), (3, 2), (10, 2)])
def test_talk_text_index_clamps_to_last_line(count: int, expected: int) -> None:
    assert talk_text_index(count, 3) == expected


def test_locked_link_is_hidden_until_switch_is_set() -> None:
    state = GameState()
    service = LocationService(state)
    actions = _Actions()

    labels = [choice.label for choice in service.build_location_choices(_make_town(), actions.build())]

    assert labels == [
        "The Inn",
        "Talk to King",
        "Talk to Merchant",
        "Browse Shop",
        "Rest at Inn (10 gold)",
    ]


def test_unlocked_link_is_marked_until_visited() -> None:
    state = GameState()
    state.set_switch("spokeToKing", True)
    service = LocationService(state)
    actions = _Actions()

    choices = service.build_location_choices(_make_town(), actions.build())
    cave = choices[1]
    assert cave.label == "North Seaside Cave *"
    assert cave.kind == "newly_unlocked"

    cave.select()
    assert actions.calls == [("go", "NorthSeasideCave/Entrance")]

    state.mark_visited("NorthSeasideCave/Entrance")
    cave = service.build_location_choices(_make_town(), actions.build())[1]
    assert cave.label == "North Seaside Cave"
    assert cave.kind == "normal"


def test_choices_dispatch_to_their_handlers() -> None:
    service = LocationService(GameState())
    actions = _Actions()

    for choice in service.build_location_choices(_make_town(), actions.build()):
        choice.select()

    assert actions.calls == [
        ("go", "KingsVale/Inn"),
        ("talk", 0),
        ("talk", 1),
        ("shop", 1),
        ("rest", 10),
    ]


def test_dungeon_location_offers_entry() -> None:
    cave = LocationDef(id="NorthSeasideCave/Entrance", name="Cave", is_dungeon=True, monsters=("Goblin",))
    service = LocationService(GameState())

    choices = service.build_location_choices(cave, _Actions().build())

    assert [(choice.label, choice.kind) for choice in choices] == [("Enter Dungeon *", "dungeon")]


def test_talking_cycles_texts_and_sets_switch() -> None:
    state = GameState()
    saves: List[int] = []
    service = LocationService(state, on_state_change=lambda: saves.append(1))
    town = _make_town()

    texts = [service.talk_to_npc(town, 0)[0].text for _ in range(4)]

    assert texts == ["Welcome, traveller.", "The cave lies north.", "Go now.", "Go now."]
    assert state.get_npc_talk_count("King's Vale", "King") == 4
    assert state.talk_counters == {"King's Vale:King": 4}
    assert state.is_switch_active("spokeToKing")
    assert len(saves) == 4


def test_talking_runs_on_talk_action() -> None:
    state = GameState()
    service = LocationService(state)

    event = service.talk_to_npc(_make_town(), 1)[0]

    assert isinstance(event, NpcTalkEvent)
    assert event.talk_count == 0
    assert event.action_events == [ItemGainedEvent(name="Potion", quantity=2, total=2)]
    assert state.inventory == {"Potion": 2}


def test_talking_to_missing_npc_fails() -> None:
    events = LocationService(GameState()).talk_to_npc(_make_town(), 5)

    assert isinstance(events[0], LocationActionFailedEvent)


def test_set_switch_action_records_value() -> None:
    state = GameState()

    events = LocationService(state).execute_action(SetSwitchAction(name="gateOpen", value="yes"))

    assert events == [SwitchSetEvent(name="gateOpen", value="yes")]
    assert state.switches == {"gateOpen": "yes"}


def test_invalid_action_is_reported_and_ignored(caplog: pytest.LogCaptureFixture) -> None:
    state = GameState()
    service = LocationService(state)

    with caplog.at_level(logging.WARNING):
        events = service.execute_action(InvalidAction(raw_type="Game.Actions.TeleportAction, Game"))

    assert isinstance(events[0], InvalidActionEvent)
    assert events[0].reason == "invalid_action"
    assert "TeleportAction" in caplog.text
    assert state.switches == {}


def test_rest_at_inn_charges_and_restores_party() -> None:
    state = GameState()
    state.gold = 15
    state.party = [
        CharacterStats(
            name="Ayla", total_health=30, current_health=3, total_skill_points=10, current_skill_points=0
        )
    ]
    service = LocationService(state)

    events = service.rest_at_inn(10)

    assert events == [RestedEvent(price=10, total_gold=5)]
    assert state.party[0].current_health == 30
    assert state.party[0].current_skill_points == 10


def test_rest_at_inn_requires_gold() -> None:
    state = GameState()
    state.gold = 5
    state.party = [CharacterStats(name="Ayla", total_health=30, current_health=3)]

    events = LocationService(state).rest_at_inn(10)

    assert isinstance(events[0], LocationActionFailedEvent)
    assert events[0].reason == "insufficient_gold"
    assert state.gold == 5
    assert state.party[0].current_health == 3
