"""Floor-by-floor dungeon traversal."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List

from textblade.config import EngineConfig
from textblade.core.rng import RandomSource
from textblade.core.scheduler import ScheduledTask, Scheduler
from textblade.domain.defs import LocationDef
from textblade.domain.dungeon_models import DungeonRun
from textblade.services.errors import EncounterActiveError, FailureReason
from textblade.services.views import ChoiceView, LocationView

logger = logging.getLogger(__name__)

ENTRANCE_DESCRIPTION = "You enter the dungeon. The air grows cold and distant echoes swirl around you."


@dataclass(slots=True)
class DungeonEvent:
    """Base dungeon event."""


@dataclass(slots=True)
class DungeonEnteredEvent(DungeonEvent):
    name: str
    num_floors: int


@dataclass(slots=True)
class EncounterTriggeredEvent(DungeonEvent):
    monster_id: str
    floor: int


@dataclass(slots=True)
class SafePassageEvent(DungeonEvent):
    """Nothing found; the party moves on once the pacing delay elapses."""

    floor: int


@dataclass(slots=True)
class FloorAdvancedEvent(DungeonEvent):
    floor: int
    num_floors: int


@dataclass(slots=True)
class DungeonCompletedEvent(DungeonEvent):
    name: str
    num_floors: int


@dataclass(slots=True)
class DungeonExitedEvent(DungeonEvent):
    name: str


@dataclass(slots=True)
class DungeonActionFailedEvent(DungeonEvent):
    reason: FailureReason
    message: str


@dataclass(slots=True)
class DungeonProgress:
    completed: bool
    num_floors: int = 0


class DungeonService:
    """Holds at most one DungeonRun and decides encounter vs. safe advance per step."""

    def __init__(
        self,
        *,
        rng: RandomSource,
        scheduler: Scheduler,
        config: EngineConfig | None = None,
        on_start_combat: Callable[[str], None] | None = None,
        on_complete: Callable[[int], None] | None = None,
        on_exit: Callable[[], None] | None = None,
        on_event: Callable[[DungeonEvent], None] | None = None,
    ) -> None:
        self._rng = rng
        self._scheduler = scheduler
        self._config = config or EngineConfig()
        self._on_start_combat = on_start_combat
        self._on_complete = on_complete
        self._on_exit = on_exit
        self._on_event = on_event
        self._run: DungeonRun | None = None
        self._pending: ScheduledTask | None = None

    @property
    def is_active(self) -> bool:
        return self._run is not None

    @property
    def run(self) -> DungeonRun | None:
        return self._run

    @property
    def is_advancing(self) -> bool:
        return self._pending is not None and self._pending.pending

    def enter(self, location: LocationDef) -> List[DungeonEvent]:
        if self._run is not None:
            raise EncounterActiveError("A dungeon run is already active.")
        chance = location.encounter_chance
        self._run = DungeonRun(
            name=location.name,
            monster_ids=tuple(location.monsters),
            num_floors=max(1, location.num_floors),
            encounter_chance=self._config.encounter_chance if chance is None else chance,
            location_id=location.id,
        )
        logger.info("Entered dungeon %s (%d floors)", location.name, self._run.num_floors)
        return self._emit([DungeonEnteredEvent(name=location.name, num_floors=self._run.num_floors)])

    def explore(self) -> List[DungeonEvent]:
        """Roll once: fight a random pool monster, or move one floor deeper after a delay."""
        run = self._run
        if run is None:
            return self._emit([DungeonActionFailedEvent(reason="invalid_action", message="Not in a dungeon.")])
        if self.is_advancing:
            return self._emit([DungeonActionFailedEvent(reason="invalid_action", message="Already moving on.")])

        sample = self._rng.random()
        if sample < run.encounter_chance and run.monster_ids:
            monster_id = run.monster_ids[self._rng.randint(0, len(run.monster_ids) - 1)]
            logger.info("Encounter on %s floor %d: %s", run.name, run.current_floor, monster_id)
            events = self._emit([EncounterTriggeredEvent(monster_id=monster_id, floor=run.current_floor)])
            if self._on_start_combat is not None:
                self._on_start_combat(monster_id)
            return events

        events = self._emit([SafePassageEvent(floor=run.current_floor)])
        self._pending = self._scheduler.schedule(
            self._config.dungeon_advance_delay_ms, self._advance_after_safe_passage, label="dungeon:advance"
        )
        return events

    def handle_victory(self) -> DungeonProgress:
        """Advance one floor after a dungeon fight was won."""
        if self._run is None:
            return DungeonProgress(completed=False)
        return self._advance_floor()

    def handle_defeat(self) -> None:
        self.exit()

    def exit(self) -> None:
        run = self._run
        self._cancel_pending()
        self._run = None
        if run is not None:
            logger.info("Left dungeon %s", run.name)
            self._emit([DungeonExitedEvent(name=run.name)])
        if self._on_exit is not None:
            self._on_exit()

    def cancel(self) -> None:
        """Drop the run and any pending advance without notifying anyone."""
        self._cancel_pending()
        self._run = None

    # -----------------------
    # Views
    # -----------------------
    def get_floor_view(self) -> LocationView | None:
        run = self._run
        if run is None:
            return None
        if run.is_at_entrance:
            return LocationView(name=f"{run.name} - Floor Entrance", description=ENTRANCE_DESCRIPTION)
        return LocationView(
            name=f"{run.name} - Floor {run.current_floor}",
            description=f"Floor {run.current_floor} of {run.num_floors}. The path ahead coils into darkness.",
        )

    def build_choices(self) -> List[ChoiceView]:
        run = self._run
        if run is None:
            return []
        return [
            ChoiceView(
                label="Begin Exploration" if run.is_at_entrance else "Explore Further",
                on_select=self.explore,
                enabled=not self.is_advancing,
            ),
            ChoiceView(label="Leave Dungeon", on_select=self.exit),
        ]

    # -----------------------
    # Helpers
    # -----------------------
    def _advance_after_safe_passage(self) -> None:
        self._pending = None
        if self._run is not None:
            self._advance_floor()

    def _advance_floor(self) -> DungeonProgress:
        run = self._run
        assert run is not None
        run.current_floor += 1
        if not run.is_complete:
            self._emit([FloorAdvancedEvent(floor=run.current_floor, num_floors=run.num_floors)])
            return DungeonProgress(completed=False, num_floors=run.num_floors)

        num_floors = run.num_floors
        self._cancel_pending()
        self._run = None
        logger.info("Dungeon %s complete (%d floors)", run.name, num_floors)
        self._emit([DungeonCompletedEvent(name=run.name, num_floors=num_floors)])
        if self._on_complete is not None:
            self._on_complete(num_floors)
        if self._on_exit is not None:
            self._on_exit()
        return DungeonProgress(completed=True, num_floors=num_floors)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _emit(self, events: List[DungeonEvent]) -> List[DungeonEvent]:
        if self._on_event is not None:
            for event in events:
                self._on_event(event)
        return events
