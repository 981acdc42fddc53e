"""Turn-based combat between the party and a single monster."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Literal

from textblade.config import EngineConfig
from textblade.core.rng import RandomSource
from textblade.core.scheduler import ScheduledTask, Scheduler
from textblade.core.types import CombatContext
from textblade.data.errors import ContentNotFoundError
from textblade.data.repositories import MonstersRepository, SkillsRepository
from textblade.domain.battle_models import CombatEncounter
from textblade.domain.defs import SkillDef
from textblade.domain.entities import CharacterStats, Monster
from textblade.domain.state import GameState
from textblade.services.errors import EncounterActiveError, FailureReason
from textblade.services.views import ChoiceView, CombatView, HealthView

logger = logging.getLogger(__name__)

Victor = Literal["party", "monster"]


@dataclass(slots=True)
class CombatEvent:
    """Base combat event."""


@dataclass(slots=True)
class EncounterStartedEvent(CombatEvent):
    monster_id: str
    monster_name: str
    context: CombatContext


@dataclass(slots=True)
class CombatStartFailedEvent(CombatEvent):
    monster_id: str
    reason: FailureReason
    message: str


@dataclass(slots=True)
class AttackResolvedEvent(CombatEvent):
    attacker_name: str
    target_name: str
    damage: int
    target_hp: int


@dataclass(slots=True)
class SkillUsedEvent(CombatEvent):
    attacker_name: str
    skill_id: str
    target_name: str
    damage: int
    target_hp: int
    super_effective: bool = False


@dataclass(slots=True)
class HealResolvedEvent(CombatEvent):
    member_name: str
    skill_id: str
    amount: int
    current_health: int


@dataclass(slots=True)
class SkillFailedEvent(CombatEvent):
    member_name: str
    skill_id: str
    reason: FailureReason
    message: str


@dataclass(slots=True)
class ActionRejectedEvent(CombatEvent):
    reason: FailureReason
    message: str


@dataclass(slots=True)
class MonsterAttackEvent(CombatEvent):
    monster_name: str
    target_name: str
    damage: int
    target_hp: int


@dataclass(slots=True)
class CombatResolvedEvent(CombatEvent):
    victor: Victor
    monster: Monster
    context: CombatContext


def attack_damage(strength: int, toughness: int) -> int:
    """Plain attack damage; never less than 1."""
    return max(1, strength - toughness)


def skill_damage(
    member: CharacterStats, skill: SkillDef, monster: Monster, *, weakness_multiplier: float = 1.5
) -> tuple[int, bool]:
    """Return offensive skill damage and whether the monster's weakness applied.

    The weakness bonus is applied before toughness is subtracted.
    """
    damage = math.floor((member.strength + member.special) * skill.damage_multiplier)
    super_effective = skill.damage_type is not None and skill.damage_type == monster.weakness
    if super_effective:
        damage = math.floor(damage * weakness_multiplier)
    return max(1, damage - monster.toughness), super_effective


def heal_amount(member: CharacterStats, skill: SkillDef) -> int:
    return math.floor(member.special * skill.damage_multiplier)


class CombatService:
    """Resolves one encounter at a time: PlayerTurn -> MonsterTurn -> ... -> Victory | Defeat.

    Player actions resolve immediately but their consequences (turn change,
    victory, the monster's reply) are paced through the scheduler. Victory
    and defeat are reported exactly once, after the encounter is cleared.
    """

    def __init__(
        self,
        state: GameState,
        monsters_repo: MonstersRepository,
        skills_repo: SkillsRepository,
        *,
        rng: RandomSource,
        scheduler: Scheduler,
        config: EngineConfig | None = None,
        on_victory: Callable[[Monster, CombatContext], None] | None = None,
        on_defeat: Callable[[CombatContext], None] | None = None,
        on_state_change: Callable[[], None] | None = None,
        on_event: Callable[[CombatEvent], None] | None = None,
    ) -> None:
        self._state = state
        self._monsters_repo = monsters_repo
        self._skills_repo = skills_repo
        self._rng = rng
        self._scheduler = scheduler
        self._config = config or EngineConfig()
        self._on_victory = on_victory
        self._on_defeat = on_defeat
        self._on_state_change = on_state_change
        self._on_event = on_event
        self._encounter: CombatEncounter | None = None
        self._pending: ScheduledTask | None = None

    @property
    def is_active(self) -> bool:
        return self._encounter is not None

    @property
    def encounter(self) -> CombatEncounter | None:
        return self._encounter

    # -----------------------
    # Encounter Lifecycle
    # -----------------------
    def start_encounter(self, monster_id: str, context: CombatContext = "field") -> List[CombatEvent]:
        if self._encounter is not None:
            raise EncounterActiveError("A combat encounter is already active.")
        try:
            monster_def = self._monsters_repo.get(monster_id)
        except ContentNotFoundError:
            logger.error("Monster not found: %s", monster_id)
            return self._emit(
                [
                    CombatStartFailedEvent(
                        monster_id=monster_id,
                        reason="content_not_found",
                        message=f"Monster '{monster_id}' does not exist.",
                    )
                ]
            )

        monster = Monster.from_def(
            monster_def,
            default_strength=self._config.default_monster_strength,
            default_toughness=self._config.default_monster_toughness,
        )
        self._encounter = CombatEncounter(monster_id=monster_id, monster=monster, context=context)
        logger.info("Encounter started: %s (%s)", monster.name, context)
        self._notify_state_change()
        return self._emit([EncounterStartedEvent(monster_id=monster_id, monster_name=monster.name, context=context)])

    def cancel(self) -> None:
        """Drop the encounter and any paced transition without reporting an outcome."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self._encounter is not None:
            logger.info("Encounter with %s cancelled", self._encounter.monster.name)
        self._encounter = None

    # -----------------------
    # Player Actions
    # -----------------------
    def attack(self, member_index: int) -> List[CombatEvent]:
        member = self._require_actor(member_index)
        if isinstance(member, ActionRejectedEvent):
            return self._emit([member])
        assert self._encounter is not None
        monster = self._encounter.monster

        damage = attack_damage(member.strength, monster.toughness)
        monster.apply_damage(damage)
        logger.debug("%s attacks %s for %d", member.name, monster.name, damage)
        events = self._emit(
            [
                AttackResolvedEvent(
                    attacker_name=member.name,
                    target_name=monster.name,
                    damage=damage,
                    target_hp=monster.current_health,
                )
            ]
        )
        self._begin_resolution(self._config.attack_delay_ms)
        return events

    def use_skill(self, member_index: int, skill_id: str) -> List[CombatEvent]:
        member = self._require_actor(member_index)
        if isinstance(member, ActionRejectedEvent):
            return self._emit([member])
        assert self._encounter is not None
        monster = self._encounter.monster
        if skill_id not in member.skills:
            return self._emit(
                [ActionRejectedEvent(reason="invalid_action", message=f"{member.name} does not know {skill_id}.")]
            )

        try:
            skill = self._skills_repo.get(skill_id)
        except ContentNotFoundError:
            logger.error("Skill not found: %s", skill_id)
            return self._emit(
                [
                    SkillFailedEvent(
                        member_name=member.name,
                        skill_id=skill_id,
                        reason="content_not_found",
                        message=f"Skill '{skill_id}' does not exist.",
                    )
                ]
            )
        if not member.spend_skill_points(skill.cost):
            return self._emit(
                [
                    SkillFailedEvent(
                        member_name=member.name,
                        skill_id=skill_id,
                        reason="insufficient_sp",
                        message="Not enough SP!",
                    )
                ]
            )

        event: CombatEvent
        if skill.is_heal:
            amount = heal_amount(member, skill)
            member.heal(amount)
            event = HealResolvedEvent(
                member_name=member.name,
                skill_id=skill_id,
                amount=amount,
                current_health=member.current_health,
            )
        else:
            damage, super_effective = skill_damage(
                member, skill, monster, weakness_multiplier=self._config.weakness_multiplier
            )
            monster.apply_damage(damage)
            logger.debug("%s uses %s on %s for %d", member.name, skill_id, monster.name, damage)
            event = SkillUsedEvent(
                attacker_name=member.name,
                skill_id=skill_id,
                target_name=monster.name,
                damage=damage,
                target_hp=monster.current_health,
                super_effective=super_effective,
            )
        events = self._emit([event])
        self._begin_resolution(self._config.skill_delay_ms)
        return events

    # -----------------------
    # Views
    # -----------------------
    def get_combat_view(self) -> CombatView | None:
        if self._encounter is None:
            return None
        monster = self._encounter.monster
        party_lines = [
            f"{member.name}: {member.current_health}/{member.total_health} HP, "
            f"{member.current_skill_points}/{member.total_skill_points} SP"
            for member in self._state.party
        ]
        return CombatView(
            monster_name=monster.name,
            monster_health=HealthView(current=max(0, monster.current_health), total=monster.total_health),
            party_lines=party_lines,
        )

    def build_choices(self) -> List[ChoiceView]:
        """Attack and skill options for every living member while input is expected."""
        if not self.awaiting_player:
            return []
        choices: List[ChoiceView] = []
        for index, member in enumerate(self._state.party):
            if not member.is_alive:
                continue
            choices.append(ChoiceView(label=f"{member.name}: Attack", on_select=lambda i=index: self.attack(i)))
            for skill_id in member.skills:
                if not self._skills_repo.has(skill_id):
                    continue
                skill = self._skills_repo.get(skill_id)
                choices.append(
                    ChoiceView(
                        label=f"{member.name}: {skill_id} ({skill.cost} SP)",
                        on_select=lambda i=index, s=skill_id: self.use_skill(i, s),
                        enabled=member.can_spend(skill.cost),
                    )
                )
        return choices

    @property
    def awaiting_player(self) -> bool:
        encounter = self._encounter
        return encounter is not None and encounter.turn == "player" and not encounter.resolving

    # -----------------------
    # Turn Flow
    # -----------------------
    def _begin_resolution(self, delay_ms: int) -> None:
        assert self._encounter is not None
        self._encounter.resolving = True
        self._notify_state_change()
        self._pending = self._scheduler.schedule(delay_ms, self._next_turn, label="combat:next_turn")

    def _next_turn(self) -> None:
        encounter = self._encounter
        if encounter is None:
            return
        if not encounter.monster.is_alive:
            self._finish("party")
            return
        if self._state.is_party_defeated():
            self._finish("monster")
            return
        encounter.turn = "monster"
        self._pending = self._scheduler.schedule(
            self._config.monster_turn_delay_ms, self._monster_turn, label="combat:monster_turn"
        )

    def _monster_turn(self) -> None:
        encounter = self._encounter
        if encounter is None:
            return
        living = self._state.living_members()
        if not living:
            self._finish("monster")
            return
        monster = encounter.monster
        target = living[self._rng.randint(0, len(living) - 1)]
        damage = attack_damage(monster.strength, target.toughness)
        target.apply_damage(damage)
        logger.debug("%s attacks %s for %d", monster.name, target.name, damage)
        self._emit(
            [
                MonsterAttackEvent(
                    monster_name=monster.name,
                    target_name=target.name,
                    damage=damage,
                    target_hp=target.current_health,
                )
            ]
        )
        self._notify_state_change()
        self._pending = self._scheduler.schedule(
            self._config.monster_resolve_delay_ms, self._after_monster_turn, label="combat:monster_resolve"
        )

    def _after_monster_turn(self) -> None:
        encounter = self._encounter
        if encounter is None:
            return
        if self._state.is_party_defeated():
            self._finish("monster")
            return
        encounter.turn = "player"
        encounter.resolving = False
        self._pending = None
        self._notify_state_change()

    def _finish(self, victor: Victor) -> None:
        encounter = self._encounter
        assert encounter is not None
        self._encounter = None
        self._pending = None
        logger.info("Encounter with %s resolved: %s wins", encounter.monster.name, victor)
        self._emit([CombatResolvedEvent(victor=victor, monster=encounter.monster, context=encounter.context)])
        if victor == "party":
            if self._on_victory is not None:
                self._on_victory(encounter.monster, encounter.context)
        elif self._on_defeat is not None:
            self._on_defeat(encounter.context)

    # -----------------------
    # Helpers
    # -----------------------
    def _require_actor(self, member_index: int) -> CharacterStats | ActionRejectedEvent:
        if self._encounter is None:
            return ActionRejectedEvent(reason="invalid_action", message="There is no active combat.")
        if not self.awaiting_player:
            return ActionRejectedEvent(reason="not_player_turn", message="Wait for your turn.")
        if not 0 <= member_index < len(self._state.party):
            return ActionRejectedEvent(reason="invalid_actor", message="No such party member.")
        member = self._state.party[member_index]
        if not member.is_alive:
            return ActionRejectedEvent(reason="invalid_actor", message=f"{member.name} cannot act.")
        return member

    def _emit(self, events: List[CombatEvent]) -> List[CombatEvent]:
        if self._on_event is not None:
            for event in events:
                self._on_event(event)
        return events

    def _notify_state_change(self) -> None:
        if self._on_state_change is not None:
            self._on_state_change()
