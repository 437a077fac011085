"""
Voice Draft Orders

Reconciles matcher output with the restaurant's menu so the customer can
review a draft before it goes into the cart.

Flow:
    1. match_items() produces MatchResults keyed by item name
    2. build_draft_items() pairs each result with its menu item
    3. The customer toggles items / adjusts quantities
    4. confirmed_order_lines() yields cart lines for confirmed items

Author: Khalil Bannouri
Version: 3.0.0
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence

from app.services.matching import MatchResult

logger = logging.getLogger(__name__)

DEFAULT_AUTO_CONFIRM_THRESHOLD = 0.8


@dataclass(frozen=True)
class MenuItem:
    """A dish on the restaurant's menu."""
    id: str
    name: str
    price: float
    description: str = ""
    image: str = ""
    category: str = ""


@dataclass(frozen=True)
class OrderLine:
    """A cart line created from a confirmed draft item."""
    menu_item: MenuItem
    quantity: int
    notes: Optional[str] = None

    @property
    def total_price(self) -> float:
        return round(self.quantity * self.menu_item.price, 2)


@dataclass(frozen=True)
class DraftOrderItem:
    """
    A recognised item awaiting customer confirmation.

    Attributes:
        menu_item: Menu entry the spoken name resolved to
        quantity: Requested quantity (>= 1)
        modifiers: Modifier phrases heard around the item
        confidence: Matcher confidence
        is_confirmed: Whether the item goes into the cart
    """
    menu_item: MenuItem
    quantity: int
    modifiers: tuple[str, ...] = ()
    confidence: float = 0.0
    is_confirmed: bool = False

    @property
    def notes(self) -> Optional[str]:
        """Modifiers as kitchen notes, or None when there are none."""
        return ", ".join(self.modifiers) if self.modifiers else None

    def adjust_quantity(self, delta: int) -> "DraftOrderItem":
        """Return a copy with the quantity changed, never below 1."""
        return replace(self, quantity=max(1, self.quantity + delta))

    def toggle_confirmation(self) -> "DraftOrderItem":
        return replace(self, is_confirmed=not self.is_confirmed)


def find_menu_item(name: str, menu_items: Iterable[MenuItem]) -> Optional[MenuItem]:
    """Case-insensitive exact name lookup; first match wins."""
    wanted = name.lower()
    for item in menu_items:
        if item.name.lower() == wanted:
            return item
    return None


def build_draft_items(
    matches: Sequence[MatchResult],
    menu_items: Sequence[MenuItem],
    auto_confirm_threshold: float = DEFAULT_AUTO_CONFIRM_THRESHOLD,
) -> list[DraftOrderItem]:
    """
    Pair match results with menu items.

    Results naming an item that is not on the menu are dropped.

    Args:
        matches: Matcher output, in matcher order
        menu_items: Current menu
        auto_confirm_threshold: Items with confidence above this start confirmed

    Returns:
        list[DraftOrderItem]: Drafts in the same order as matches
    """
    drafts = []
    for match in matches:
        menu_item = find_menu_item(match.item_name, menu_items)
        if menu_item is None:
            logger.debug(f"No menu item named {match.item_name!r}, dropping")
            continue
        drafts.append(
            DraftOrderItem(
                menu_item=menu_item,
                quantity=match.quantity,
                modifiers=tuple(match.modifiers),
                confidence=match.confidence,
                is_confirmed=match.confidence > auto_confirm_threshold,
            )
        )
    return drafts


def confirmed_order_lines(drafts: Iterable[DraftOrderItem]) -> list[OrderLine]:
    """Cart lines for the confirmed drafts only."""
    return [
        OrderLine(menu_item=d.menu_item, quantity=d.quantity, notes=d.notes)
        for d in drafts
        if d.is_confirmed
    ]


def draft_subtotal(drafts: Iterable[DraftOrderItem]) -> float:
    """Sum of price x quantity over all drafts, confirmed or not."""
    return round(sum(d.menu_item.price * d.quantity for d in drafts), 2)
