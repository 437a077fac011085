"""
Transcript Item Matcher

Scans a spoken-order transcript for known menu item names and turns each
mention into a quantified, modified order line with a confidence score.

Algorithm:
    1. Sort candidates longest-first, so "Pepperoni Pizza" is tried
       before "Pizza" (both may still match)
    2. Locate the first case-insensitive occurrence of each candidate
    3. Quantity: a cardinal entity ending within 50 chars before the
       mention, else the 50 chars of text before the mention; never below 1
    4. Modifiers: the text from 50 chars before to 50 chars after
    5. Confidence: 0.95 if the name appears as a whole word, else 0.70

Usage:
    from app.services.matching import match_items

    results = match_items(
        "two pepperoni pizzas no onions",
        ["Pepperoni Pizza", "Garlic Bread"],
    )

Author: Khalil Bannouri
Version: 3.0.0
"""

import logging
import re
from typing import Any, Optional, Sequence

from app.services.matching.entities import filter_cardinals, find_preceding_cardinal
from app.services.matching.modifiers import ModifierExtractor
from app.services.matching.quantity import DEFAULT_QUANTITY, parse_quantity
from app.services.matching.types import (
    SUBSTRING_CONFIDENCE,
    WHOLE_WORD_CONFIDENCE,
    MatchResult,
    MatchTracer,
    RecognizedEntity,
)

CONTEXT_RADIUS = 50
QUANTITY_WINDOW = 50


def logging_tracer(logger: logging.Logger, level: int = logging.DEBUG) -> MatchTracer:
    """
    Build a tracer that forwards match events to a logger.

    Args:
        logger: Destination logger
        level: Log level for every event (default: DEBUG)

    Returns:
        MatchTracer: Callable accepted by ItemMatcher
    """
    def trace(event: str, fields: dict[str, Any]) -> None:
        if logger.isEnabledFor(level):
            details = ", ".join(f"{key}={value!r}" for key, value in fields.items())
            logger.log(level, f"match.{event}: {details}")

    return trace


def _is_whole_word(term: str, transcript: str) -> bool:
    pattern = rf"(?<!\w){re.escape(term)}(?!\w)"
    return re.search(pattern, transcript, re.IGNORECASE) is not None


class ItemMatcher:
    """
    Matches candidate item names against transcripts.

    Instances hold only configuration, so a single matcher can serve
    concurrent requests.

    Attributes:
        modifier_extractor: Rule table used on context windows
        tracer: Optional diagnostic hook, called with (event, fields)
    """

    def __init__(
        self,
        modifier_extractor: Optional[ModifierExtractor] = None,
        tracer: Optional[MatchTracer] = None,
    ):
        self.modifier_extractor = modifier_extractor or ModifierExtractor()
        self.tracer = tracer

    def _trace(self, event: str, **fields: Any) -> None:
        if self.tracer is not None:
            self.tracer(event, fields)

    def _quantity_for(
        self,
        term: str,
        transcript: str,
        start: int,
        cardinals: Sequence[RecognizedEntity],
    ) -> int:
        entity = find_preceding_cardinal(cardinals, start, QUANTITY_WINDOW)
        if entity is not None:
            quantity = max(DEFAULT_QUANTITY, parse_quantity(entity.text))
            self._trace("quantity_from_entity", term=term, entity=entity.text, quantity=quantity)
            return quantity

        before = transcript[max(0, start - QUANTITY_WINDOW):start]
        quantity = max(DEFAULT_QUANTITY, parse_quantity(before))
        self._trace("quantity_from_window", term=term, window=before, quantity=quantity)
        return quantity

    def match(
        self,
        transcript: str,
        candidate_terms: Sequence[str],
        entities: Sequence[RecognizedEntity] = (),
    ) -> list[MatchResult]:
        """
        Find candidate items mentioned in a transcript.

        Args:
            transcript: Final transcript text
            candidate_terms: Menu item names (original casing is kept)
            entities: Entities recognised in the transcript, may be empty

        Returns:
            list[MatchResult]: One result per located candidate, ordered
            longest candidate first
        """
        lowered = transcript.lower()
        ordered = sorted(candidate_terms, key=len, reverse=True)
        cardinals = filter_cardinals(entities)
        self._trace("cardinals", count=len(cardinals), entities=[e.text for e in cardinals])

        results: list[MatchResult] = []
        for term in ordered:
            if not term:
                continue

            start = lowered.find(term.lower())
            if start == -1:
                continue
            end = start + len(term)

            quantity = self._quantity_for(term, transcript, start, cardinals)

            context = transcript[max(0, start - CONTEXT_RADIUS):min(len(transcript), end + CONTEXT_RADIUS)]
            modifiers = self.modifier_extractor.extract(context)

            if _is_whole_word(term, transcript):
                confidence = WHOLE_WORD_CONFIDENCE
            else:
                confidence = SUBSTRING_CONFIDENCE

            result = MatchResult(
                item_name=term,
                quantity=quantity,
                modifiers=modifiers,
                confidence=confidence,
            )
            results.append(result)
            self._trace(
                "matched",
                item=term,
                quantity=quantity,
                modifiers=list(modifiers),
                confidence=confidence,
            )

        self._trace("complete", matched=len(results), candidates=len(ordered))
        return results


def match_items(
    transcript: str,
    candidate_terms: Sequence[str],
    entities: Sequence[RecognizedEntity] = (),
    tracer: Optional[MatchTracer] = None,
) -> list[MatchResult]:
    """
    Match menu items in a transcript with the default modifier grammar.

    See ItemMatcher.match for details.
    """
    return ItemMatcher(tracer=tracer).match(transcript, candidate_terms, entities)
