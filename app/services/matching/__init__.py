"""
Transcript Matching Module

Turns a spoken-order transcript and the menu's item names into
structured order lines.

Usage:
    from app.services.matching import match_items, RecognizedEntity

    results = match_items(
        transcript="I'd like two caesar salads with extra dressing",
        candidate_terms=["Caesar Salad", "Garlic Bread"],
        entities=[RecognizedEntity("two", "cardinal", 9, 12)],
    )

Author: Khalil Bannouri
Version: 3.0.0
"""

from app.services.matching.entities import (
    CARDINAL_TYPES,
    filter_cardinals,
    find_preceding_cardinal,
)
from app.services.matching.matcher import (
    ItemMatcher,
    logging_tracer,
    match_items,
)
from app.services.matching.modifiers import (
    DEFAULT_RULES,
    ModifierExtractor,
    ModifierRule,
    extract_modifiers,
)
from app.services.matching.quantity import NUMBER_WORDS, parse_quantity
from app.services.matching.types import MatchResult, MatchTracer, RecognizedEntity

__all__ = [
    # Matcher
    "ItemMatcher",
    "match_items",
    "logging_tracer",
    # Building blocks
    "parse_quantity",
    "NUMBER_WORDS",
    "extract_modifiers",
    "ModifierExtractor",
    "ModifierRule",
    "DEFAULT_RULES",
    "filter_cardinals",
    "find_preceding_cardinal",
    "CARDINAL_TYPES",
    # Types
    "MatchResult",
    "MatchTracer",
    "RecognizedEntity",
]
