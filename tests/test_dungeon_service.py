from __future__ import annotations

from typing import List

import pytest

from textblade.config import EngineConfig
from textblade.core.rng import ScriptedRandom
from textblade.core.scheduler import ManualScheduler
from textblade.domain.defs import LocationDef
from textblade.services.dungeon_service import (
    DungeonActionFailedEvent,
    DungeonCompletedEvent,
    DungeonEnteredEvent,
    DungeonEvent,
    DungeonExitedEvent,
    DungeonService,
    EncounterTriggeredEvent,
    FloorAdvancedEvent,
    SafePassageEvent,
)
from textblade.services.errors import EncounterActiveError

DELAY = EngineConfig().dungeon_advance_delay_ms


def _make_cave(**overrides) -> LocationDef:
    values = dict(
        id="NorthSeasideCave/Entrance",
        name="North Seaside Cave",
        is_dungeon=True,
        monsters=("Goblin", "Spider"),
        num_floors=2,
    )
    values.update(overrides)
    return LocationDef(**values)


class _Calls:
    def __init__(self) -> None:
        self.combats: List[str] = []
        self.completed: List[int] = []
        self.exits = 0
        self.events: List[DungeonEvent] = []


def _make_service(rng: ScriptedRandom, scheduler: ManualScheduler | None = None):
    calls = _Calls()

    def on_exit() -> None:
        calls.exits += 1

    service = DungeonService(
        rng=rng,
        scheduler=scheduler or ManualScheduler(),
        on_start_combat=calls.combats.append,
        on_complete=calls.completed.append,
        on_exit=on_exit,
        on_event=calls.events.append,
    )
    return service, calls


def test_enter_starts_at_the_entrance() -> None:
    service, _ = _make_service(ScriptedRandom())

    events = service.enter(_make_cave())

    assert isinstance(events[0], DungeonEnteredEvent)
    assert service.run.current_floor == 0
    assert service.run.encounter_chance == 0.7
    view = service.get_floor_view()
    assert view.name == "North Seaside Cave - Floor Entrance"
    assert [choice.label for choice in service.build_choices()] == ["Begin Exploration", "Leave Dungeon"]


def test_entering_twice_is_an_error() -> None:
    service, _ = _make_service(ScriptedRandom())
    service.enter(_make_cave())

    with pytest.raises(EncounterActiveError):
        service.enter(_make_cave())


def test_safe_floors_complete_the_dungeon_once() -> None:
    scheduler = ManualScheduler()
    service, calls = _make_service(ScriptedRandom(floats=[0.95, 0.95, 0.95]), scheduler)
    service.enter(_make_cave())

    for expected_floor in (1, 2):
        events = service.explore()
        assert isinstance(events[0], SafePassageEvent)
        assert service.is_advancing
        scheduler.advance(DELAY)
        assert service.run.current_floor == expected_floor

    assert service.get_floor_view().name == "North Seaside Cave - Floor 2"
    assert service.build_choices()[0].label == "Explore Further"

    service.explore()
    scheduler.advance(DELAY)

    assert calls.completed == [2]
    assert calls.exits == 1
    assert calls.combats == []
    assert not service.is_active
    assert sum(isinstance(event, DungeonCompletedEvent) for event in calls.events) == 1
    assert scheduler.pending == 0


def test_advance_waits_for_the_pacing_delay() -> None:
    scheduler = ManualScheduler()
    service, _ = _make_service(ScriptedRandom(floats=[0.95]), scheduler)
    service.enter(_make_cave())

    service.explore()
    scheduler.advance(DELAY - 1)
    assert service.run.current_floor == 0

    rejected = service.explore()
    assert isinstance(rejected[0], DungeonActionFailedEvent)
    assert service.build_choices()[0].enabled is False

    scheduler.advance(1)
    assert service.run.current_floor == 1


def test_low_draw_starts_combat_with_pool_monster() -> None:
    service, calls = _make_service(ScriptedRandom(floats=[0.2], ints=[1]))
    service.enter(_make_cave())

    events = service.explore()

    assert events == [EncounterTriggeredEvent(monster_id="Spider", floor=0)]
    assert calls.combats == ["Spider"]
    assert service.run.current_floor == 0


def test_empty_monster_pool_never_fights() -> None:
    scheduler = ManualScheduler()
    service, calls = _make_service(ScriptedRandom(floats=[0.0]), scheduler)
    service.enter(_make_cave(monsters=(), num_floors=1))

    events = service.explore()
    scheduler.advance(DELAY)

    assert isinstance(events[0], SafePassageEvent)
    assert calls.combats == []
    assert service.run.current_floor == 1


def test_dungeon_encounter_chance_overrides_default() -> None:
    service, calls = _make_service(ScriptedRandom(floats=[0.2]))
    service.enter(_make_cave(encounter_chance=0.1))

    events = service.explore()

    assert isinstance(events[0], SafePassageEvent)
    assert calls.combats == []


def test_victory_advances_and_completes_on_last_floor() -> None:
    service, calls = _make_service(ScriptedRandom())
    service.enter(_make_cave(num_floors=1))

    first = service.handle_victory()
    assert not first.completed
    assert isinstance(calls.events[-1], FloorAdvancedEvent)

    second = service.handle_victory()
    assert second.completed
    assert second.num_floors == 1
    assert calls.completed == [1]
    assert calls.exits == 1
    assert not service.is_active


def test_defeat_exits_the_dungeon() -> None:
    service, calls = _make_service(ScriptedRandom())
    service.enter(_make_cave())

    service.handle_defeat()

    assert not service.is_active
    assert calls.exits == 1
    assert calls.completed == []
    assert isinstance(calls.events[-1], DungeonExitedEvent)


def test_leaving_cancels_pending_advance() -> None:
    scheduler = ManualScheduler()
    service, calls = _make_service(ScriptedRandom(floats=[0.95]), scheduler)
    service.enter(_make_cave())
    service.explore()

    service.build_choices()[1].select()
    scheduler.run_all()

    assert not service.is_active
    assert calls.exits == 1
    assert not any(isinstance(event, FloorAdvancedEvent) for event in calls.events)


def test_explore_outside_a_dungeon_fails() -> None:
    service, _ = _make_service(ScriptedRandom())

    events = service.explore()

    assert isinstance(events[0], DungeonActionFailedEvent)
    assert events[0].reason == "invalid_action"
    assert service.handle_victory().completed is False
