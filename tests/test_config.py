import json
from pathlib import Path

from textblade.config import EngineConfig, config_from_mapping, load_config, save_config


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.json")

    assert config == EngineConfig()
    assert config.encounter_chance == 0.7
    assert config.default_starting_gold == 100


def test_load_config_corrupt_file_returns_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_config(path) == EngineConfig()


def test_config_invalid_values_fall_back_per_field() -> None:
    config = config_from_mapping(
        {"encounter_chance": 1.5, "attack_delay_ms": -3, "skill_delay_ms": 50, "save_file_name": ""}
    )

    assert config.encounter_chance == 0.7
    assert config.attack_delay_ms == 900
    assert config.skill_delay_ms == 50
    assert config.save_file_name == "textblade_save.json"


def test_save_and_load_config_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    save_config(EngineConfig(encounter_chance=0.25, dungeon_advance_delay_ms=0), path)

    raw = json.loads(path.read_text(encoding="utf-8"))
    loaded = load_config(path)

    assert raw["encounter_chance"] == 0.25
    assert loaded.encounter_chance == 0.25
    assert loaded.dungeon_advance_delay_ms == 0
