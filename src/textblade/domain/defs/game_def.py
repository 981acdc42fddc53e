"""Top-level game definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(slots=True)
class GameDef:
    """Content defaults used when a new game starts."""

    starting_location_id: str | None
    starting_gold: int | None = None
    starting_party: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)
