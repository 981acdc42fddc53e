"""Domain definition exports."""

from .action_def import Action, GiveItemAction, InvalidAction, SetSwitchAction
from .game_def import GameDef
from .location_def import LinkDef, LocationDef, NpcDef, ShopDef, ShopItemDef
from .monster_def import MonsterDef
from .skill_def import HEAL_TARGET, SkillDef

__all__ = [
    "Action",
    "GameDef",
    "GiveItemAction",
    "HEAL_TARGET",
    "InvalidAction",
    "LinkDef",
    "LocationDef",
    "MonsterDef",
    "NpcDef",
    "SetSwitchAction",
    "ShopDef",
    "ShopItemDef",
    "SkillDef",
]
