"""
Cardinal Entity Lookup

Selects numeric entities reported by the speech-to-text provider and finds
the one that qualifies as the quantity for an item mention.
"""

from typing import Iterable, Optional, Sequence

from app.services.matching.types import RecognizedEntity

# Matched exactly; other casings are not numeric.
CARDINAL_TYPES = frozenset({"cardinal", "CARDINAL", "number"})

DEFAULT_MAX_DISTANCE = 50


def filter_cardinals(entities: Iterable[RecognizedEntity]) -> list[RecognizedEntity]:
    """Keep only cardinal/number entities, preserving list order."""
    return [entity for entity in entities if entity.type in CARDINAL_TYPES]


def find_preceding_cardinal(
    cardinals: Sequence[RecognizedEntity],
    before_offset: int,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> Optional[RecognizedEntity]:
    """
    Find a cardinal entity ending shortly before an offset.

    Returns the first entity in list order (not the nearest) that ends at or
    before `before_offset` and less than `max_distance` characters from it.

    Args:
        cardinals: Entities already filtered by filter_cardinals
        before_offset: Start offset of the item mention
        max_distance: Exclusive upper bound on the gap in characters

    Returns:
        The qualifying entity, or None
    """
    for entity in cardinals:
        if entity.end_char <= before_offset and before_offset - entity.end_char < max_distance:
            return entity
    return None
