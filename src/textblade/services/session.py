"""Wires the game state and subsystems together for one play session.

The session is built explicitly and handed to whatever drives the game;
there is no module-level engine instance.
"""
from __future__ import annotations

import logging
from typing import List

from textblade.config import EngineConfig
from textblade.core.rng import RNG, RandomSource
from textblade.core.scheduler import ImmediateScheduler, Scheduler
from textblade.core.types import CombatContext
from textblade.data.errors import ContentNotFoundError, DataError
from textblade.data.repositories import (
    GameDataRepository,
    LocationsRepository,
    MonstersRepository,
    SkillsRepository,
)
from textblade.domain.defs import LocationDef
from textblade.domain.entities import Monster
from textblade.domain.state import GameState
from textblade.services.combat_service import CombatEvent, CombatService
from textblade.services.dungeon_service import DungeonActionFailedEvent, DungeonEvent, DungeonService
from textblade.services.errors import EncounterActiveError, GameDataError
from textblade.services.location_service import (
    LocationActionFailedEvent,
    LocationActions,
    LocationEvent,
    LocationService,
)
from textblade.services.save_service import SaveService
from textblade.services.shop_service import ShopActionFailedEvent, ShopEvent, ShopService, ShopView
from textblade.services.storage import InMemorySaveStore, SaveStore
from textblade.services.views import ChoiceView, LocationView

logger = logging.getLogger(__name__)


class GameSession:
    """Routes player choices to the subsystems and persists after every state change."""

    def __init__(
        self,
        *,
        game_repo: GameDataRepository,
        locations_repo: LocationsRepository,
        monsters_repo: MonstersRepository,
        skills_repo: SkillsRepository,
        store: SaveStore | None = None,
        rng: RandomSource | None = None,
        scheduler: Scheduler | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self._game_repo = game_repo
        self._locations_repo = locations_repo
        self._config = config or EngineConfig()
        self._scheduler = scheduler or ImmediateScheduler()
        rng = rng or RNG()
        self.state = GameState(default_starting_gold=self._config.default_starting_gold)
        self.saves = SaveService(store or InMemorySaveStore())
        self.events: List[object] = []
        self.combat = CombatService(
            self.state,
            monsters_repo,
            skills_repo,
            rng=rng,
            scheduler=self._scheduler,
            config=self._config,
            on_victory=self._handle_victory,
            on_defeat=self._handle_defeat,
            on_state_change=self.persist,
            on_event=self._record,
        )
        self.dungeon = DungeonService(
            rng=rng,
            scheduler=self._scheduler,
            config=self._config,
            on_start_combat=self._start_dungeon_combat,
            on_complete=self._handle_dungeon_complete,
            on_event=self._record,
        )
        self.shop = ShopService(self.state, on_state_change=self.persist)
        self.locations = LocationService(self.state, on_state_change=self.persist)
        self._location: LocationDef | None = None

    # -----------------------
    # Lifecycle
    # -----------------------
    def start(self, *, new_game: bool = False) -> LocationView:
        """Load game data, restore or begin a game, and enter the current location."""
        try:
            game_def = self._game_repo.load()
        except (DataError, ContentNotFoundError) as exc:
            raise GameDataError(f"Failed to load game data: {exc}") from exc
        self.state.game_def = game_def
        if new_game or not self.saves.load_into(self.state):
            self.state.start_new_game()
        location_id = self.state.current_location_id or game_def.starting_location_id
        if not location_id:
            raise GameDataError("Game data does not define a starting location.")
        return self.go_to_location(location_id)

    def new_game(self) -> LocationView:
        self.shutdown(persist=False)
        self.saves.clear()
        return self.start(new_game=True)

    def shutdown(self, *, persist: bool = True) -> None:
        """Stop any paced combat or dungeon sequence mid-flight."""
        self.combat.cancel()
        self.dungeon.cancel()
        self._scheduler.cancel_all()
        if persist and self._location is not None:
            self.persist()

    def persist(self) -> None:
        self.saves.persist(self.state)

    # -----------------------
    # Locations
    # -----------------------
    @property
    def location(self) -> LocationDef | None:
        return self._location

    def go_to_location(self, location_id: str) -> LocationView:
        if self.combat.is_active:
            raise EncounterActiveError("Cannot travel during a fight.")
        try:
            location = self._locations_repo.get(location_id)
        except (DataError, ContentNotFoundError) as exc:
            raise GameDataError(f"Failed to load location '{location_id}': {exc}") from exc
        self._location = location
        self.state.set_current_location(location.id)
        self.persist()
        return self.locations.get_location_view(location)

    def choices(self) -> List[ChoiceView]:
        """Options for whatever the player is currently looking at."""
        if self.combat.is_active:
            return self.combat.build_choices()
        if self.dungeon.is_active:
            return self.dungeon.build_choices()
        if self._location is None:
            return []
        actions = LocationActions(
            on_go_to_location=self.go_to_location,
            on_talk_to_npc=self.talk_to_npc,
            on_open_shop=lambda shop: self.open_shop(),
            on_rest_at_inn=lambda price: self.rest_at_inn(),
            on_enter_dungeon=self.enter_dungeon,
        )
        return self.locations.build_location_choices(self._location, actions)

    def talk_to_npc(self, npc_index: int) -> List[LocationEvent]:
        location = self._require_location()
        return self._record_all(self.locations.talk_to_npc(location, npc_index))

    def rest_at_inn(self) -> List[LocationEvent]:
        location = self._require_location()
        if not location.price_per_night:
            return [LocationActionFailedEvent(reason="invalid_action", message="There is no inn here.")]
        return self._record_all(self.locations.rest_at_inn(location.price_per_night))

    # -----------------------
    # Shop
    # -----------------------
    def open_shop(self) -> ShopView | ShopActionFailedEvent:
        return self.shop.open(self._require_location().shop)

    def buy(self, item_name: str) -> List[ShopEvent]:
        shop = self._require_location().shop
        item = next((entry for entry in (shop.items if shop else ()) if entry.name == item_name), None)
        if item is None:
            return [ShopActionFailedEvent(reason="content_not_found", message=f"{item_name} is not sold here.")]
        return self._record_all(self.shop.buy(item))

    # -----------------------
    # Dungeon and Combat
    # -----------------------
    def enter_dungeon(self) -> List[DungeonEvent]:
        if self.combat.is_active:
            return self._fight_in_progress()
        location = self._require_location()
        if not location.is_dungeon:
            return []
        return self.dungeon.enter(location)

    def explore(self) -> List[DungeonEvent]:
        """Roll for the next floor; refused while a fight is still running."""
        if self.combat.is_active:
            return self._fight_in_progress()
        return self.dungeon.explore()

    def leave_dungeon(self) -> None:
        self.dungeon.exit()

    def start_combat(self, monster_id: str, context: CombatContext = "field") -> List[CombatEvent]:
        return self.combat.start_encounter(monster_id, context)

    def _start_dungeon_combat(self, monster_id: str) -> None:
        self.combat.start_encounter(monster_id, "dungeon")

    def _handle_victory(self, monster: Monster, context: CombatContext) -> None:
        self.state.add_gold(max(0, monster.gold))
        self.state.add_experience(max(0, monster.experience_points))
        logger.info("Defeated %s: +%d gold, +%d XP", monster.name, monster.gold, monster.experience_points)
        self.persist()
        if context == "dungeon" and self.dungeon.is_active:
            self.dungeon.handle_victory()

    def _handle_defeat(self, context: CombatContext) -> None:
        for member in self.state.party:
            member.current_health = min(1, member.total_health)
            member.current_skill_points = member.total_skill_points
        if self.dungeon.is_active:
            self.dungeon.handle_defeat()
        self.persist()

    def _handle_dungeon_complete(self, num_floors: int) -> None:
        logger.info("Cleared all %d floors", num_floors)
        self.persist()

    # -----------------------
    # Helpers
    # -----------------------
    def _require_location(self) -> LocationDef:
        if self._location is None:
            raise RuntimeError("The session has not been started.")
        return self._location

    def _fight_in_progress(self) -> List[DungeonEvent]:
        return self._record_all(
            [DungeonActionFailedEvent(reason="invalid_action", message="Finish the current fight first.")]
        )

    def _record(self, event: object) -> None:
        self.events.append(event)

    def _record_all(self, events: list) -> list:
        self.events.extend(events)
        return events
