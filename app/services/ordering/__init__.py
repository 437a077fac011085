"""
Ordering Module

Draft order handling for voice-recognised items.
"""

from app.services.ordering.draft import (
    DraftOrderItem,
    MenuItem,
    OrderLine,
    build_draft_items,
    confirmed_order_lines,
    draft_subtotal,
    find_menu_item,
)

__all__ = [
    "DraftOrderItem",
    "MenuItem",
    "OrderLine",
    "build_draft_items",
    "confirmed_order_lines",
    "draft_subtotal",
    "find_menu_item",
]
