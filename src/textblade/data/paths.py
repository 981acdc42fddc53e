"""Where bundled game content lives."""
from __future__ import annotations

from pathlib import Path

DEFINITIONS_DIR = Path("data") / "definitions"


def get_project_root() -> Path:
    # src/textblade/data/paths.py -> project root
    return Path(__file__).resolve().parents[3]


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Content directory: ``base_path`` when given, else the bundled definitions."""
    if base_path is not None:
        return Path(base_path)
    return get_project_root() / DEFINITIONS_DIR


def get_content_file(filename: str, base_path: Path | str | None = None) -> Path:
    return get_definitions_path(base_path) / filename
