"""Shop service for gold-for-item purchases."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from textblade.domain.defs import ShopDef, ShopItemDef
from textblade.domain.state import GameState
from textblade.services.errors import FailureReason
from textblade.services.views import ChoiceView

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ShopEvent:
    """Base class for shop-related events."""


@dataclass(slots=True)
class ShopPurchaseEvent(ShopEvent):
    item_name: str
    price: int
    total_gold: int
    owned: int


@dataclass(slots=True)
class ShopActionFailedEvent(ShopEvent):
    reason: FailureReason
    message: str


@dataclass(slots=True)
class ShopEntryView:
    name: str
    price: int
    description: str | None
    affordable: bool
    owned: int


@dataclass(slots=True)
class ShopView:
    gold: int
    entries: List[ShopEntryView] = field(default_factory=list)


class ShopService:
    """Buys items against GameState gold; spend always happens before the item is added."""

    def __init__(self, state: GameState, *, on_state_change: Callable[[], None] | None = None) -> None:
        self._state = state
        self._on_state_change = on_state_change

    def open(self, shop: ShopDef | None) -> ShopView | ShopActionFailedEvent:
        """Return the listing, or a no_items failure when nothing is for sale."""
        items = shop.items if shop is not None else ()
        if not items:
            return ShopActionFailedEvent(reason="no_items", message="No items available.")
        return self.build_shop_view(items)

    def build_shop_view(self, items: Sequence[ShopItemDef]) -> ShopView:
        gold = self._state.gold
        return ShopView(
            gold=gold,
            entries=[
                ShopEntryView(
                    name=item.name,
                    price=item.price,
                    description=item.description,
                    affordable=gold >= item.price,
                    owned=self._state.inventory.get(item.name, 0),
                )
                for item in items
            ],
        )

    def buy(self, item: ShopItemDef) -> List[ShopEvent]:
        if not self._state.spend_gold(item.price):
            return [ShopActionFailedEvent(reason="insufficient_gold", message="Not enough gold.")]
        self._state.add_item(item.name, 1)
        logger.info("Bought %s for %d gold (%d left)", item.name, item.price, self._state.gold)
        if self._on_state_change is not None:
            self._on_state_change()
        return [
            ShopPurchaseEvent(
                item_name=item.name,
                price=item.price,
                total_gold=self._state.gold,
                owned=self._state.inventory[item.name],
            )
        ]

    def build_choices(self, shop: ShopDef) -> List[ChoiceView]:
        """One Buy option per item, enabled only while it is affordable."""
        return [
            ChoiceView(
                label=f"Buy {item.name} ({item.price} gold)",
                on_select=lambda entry=item: self.buy(entry),
                enabled=self._state.gold >= item.price,
            )
            for item in shop.items
        ]
