"""Engine configuration helpers and options persistence."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "TextBlade"
        return Path.home() / "TextBlade"
    return Path.home() / ".config" / "textblade"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    """Return the per-user save directory."""
    return get_user_data_dir() / "saves"


@dataclass(slots=True)
class EngineConfig:
    """Tunable numbers for the simulation and its presentation pacing."""

    encounter_chance: float = 0.7
    weakness_multiplier: float = 1.5
    default_starting_gold: int = 100
    default_monster_strength: int = 10
    default_monster_toughness: int = 5
    attack_delay_ms: int = 900
    skill_delay_ms: int = 1200
    monster_turn_delay_ms: int = 800
    monster_resolve_delay_ms: int = 1000
    dungeon_advance_delay_ms: int = 1000
    save_file_name: str = "textblade_save.json"

    def save_path(self, base_dir: Path | None = None) -> Path:
        return (base_dir or get_save_dir()) / self.save_file_name


def _coerce_field(name: str, default: Any, value: Any) -> Any:
    if isinstance(default, bool) or value is None:
        return default
    if isinstance(default, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            if name == "encounter_chance" and not 0.0 <= value <= 1.0:
                return default
            return float(value)
        return default
    if isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return value
        return default
    if isinstance(default, str):
        return value if isinstance(value, str) and value.strip() else default
    return default


def config_from_mapping(raw: Dict[str, Any]) -> EngineConfig:
    """Build a config, keeping defaults for anything missing or invalid."""
    defaults = EngineConfig()
    values = {
        item.name: _coerce_field(item.name, getattr(defaults, item.name), raw.get(item.name))
        for item in fields(EngineConfig)
    }
    return EngineConfig(**values)


def load_config(path: Path | None = None) -> EngineConfig:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return EngineConfig()
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return EngineConfig()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: expected a JSON object", config_path)
        return EngineConfig()
    return config_from_mapping(raw)


def save_config(config: EngineConfig, path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(asdict(config), indent=2, sort_keys=True), encoding="utf-8")
