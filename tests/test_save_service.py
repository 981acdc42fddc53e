from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

import pytest

from textblade.domain.defs import GameDef
from textblade.domain.entities import CharacterStats
from textblade.domain.state import GameState
from textblade.services.errors import SaveLoadError
from textblade.services.save_service import SaveService
from textblade.services.storage import InMemorySaveStore, JsonFileSaveStore


def _make_state() -> GameState:
    state = GameState(game_def=GameDef(starting_location_id="KingsVale/KingsVale", starting_gold=100))
    state.start_new_game()
    state.party = [
        CharacterStats(name="Ayla", total_health=30, current_health=12, total_skill_points=10, current_skill_points=4)
    ]
    state.set_current_location("KingsVale/Inn")
    state.add_item("Potion", 2)
    state.set_switch("spokeToKing", True)
    state.increment_npc_talk_count("King's Vale", "King")
    state.spend_gold(25)
    return state


def test_serialize_adds_iso_timestamp() -> None:
    payload = SaveService(InMemorySaveStore()).serialize(_make_state())

    assert payload["gold"] == 75
    assert payload["currentLocationId"] == "KingsVale/Inn"
    assert datetime.fromisoformat(payload["timestamp"]).tzinfo is not None


def test_json_file_store_round_trip(tmp_path: Path) -> None:
    store = JsonFileSaveStore(tmp_path / "saves" / "save.json")
    saves = SaveService(store)
    original = _make_state()

    saves.persist(original)
    restored = GameState()
    assert saves.load_into(restored)

    assert restored.to_json() == original.to_json()
    assert restored.party[0].current_health == 12
    assert saves.has_save()


def test_missing_file_loads_nothing(tmp_path: Path) -> None:
    store = JsonFileSaveStore(tmp_path / "absent.json")

    assert store.load() is None
    assert not SaveService(store).load_into(GameState())


def test_corrupt_file_is_logged_and_ignored(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "save.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        assert JsonFileSaveStore(path).load() is None

    assert "Failed to load save data" in caplog.text


def test_non_object_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "save.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")

    assert JsonFileSaveStore(path).load() is None


def test_write_failure_is_logged_not_raised(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileSaveStore(blocker / "save.json")

    with caplog.at_level(logging.ERROR):
        store.save({"gold": 1})

    assert "Failed to save game" in caplog.text


def test_clear_removes_the_save(tmp_path: Path) -> None:
    store = JsonFileSaveStore(tmp_path / "save.json")
    saves = SaveService(store)
    saves.persist(_make_state())

    saves.clear()
    saves.clear()

    assert not store.path.exists()
    assert not saves.has_save()


def test_in_memory_store_copies_snapshots() -> None:
    store = InMemorySaveStore()
    snapshot = {"gold": 10, "inventory": {"Potion": 1}}

    store.save(snapshot)
    snapshot["inventory"]["Potion"] = 99
    loaded = store.load()
    loaded["gold"] = 0

    assert store.load() == {"gold": 10, "inventory": {"Potion": 1}}
    assert store.save_count == 1


def test_restore_rejects_non_mapping() -> None:
    with pytest.raises(SaveLoadError):
        SaveService(InMemorySaveStore()).restore(GameState(), ["gold", 5])  # type: ignore[arg-type]


def test_load_into_falls_back_on_invalid_fields() -> None:
    store = InMemorySaveStore({"gold": -5, "inventory": {"Potion": 0, "Ether": 2}, "visited": "nope"})
    state = GameState(game_def=GameDef(starting_location_id="KingsVale/KingsVale", starting_gold=40))

    assert SaveService(store).load_into(state)

    assert state.gold == 40
    assert state.inventory == {"Ether": 2}
    assert state.visited == set()
