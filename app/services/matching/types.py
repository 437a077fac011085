"""
Matching Value Types

Immutable values exchanged by the transcript matcher.

Author: Khalil Bannouri
Version: 3.0.0
"""

from dataclasses import dataclass, field
from typing import Any, Callable


# Diagnostic hook: receives an event name and a dict of structured fields.
MatchTracer = Callable[[str, dict[str, Any]], None]

WHOLE_WORD_CONFIDENCE = 0.95
SUBSTRING_CONFIDENCE = 0.70


@dataclass(frozen=True)
class RecognizedEntity:
    """
    A span of transcript text tagged by the speech-to-text provider.

    Offsets are half-open character positions into the transcript.

    Attributes:
        text: The entity text as it appears in the transcript
        type: Entity type label (e.g., "cardinal", "money")
        start_char: Offset of the first character
        end_char: Offset one past the last character
    """
    text: str
    type: str
    start_char: int = 0
    end_char: int = 0


@dataclass(frozen=True)
class MatchResult:
    """
    One menu item located in a transcript.

    Attributes:
        item_name: Candidate name with its original casing
        quantity: Inferred quantity (always >= 1)
        modifiers: Ordered, de-duplicated modifier phrases
        confidence: 0.95 for whole-word matches, 0.70 for substring-only
    """
    item_name: str
    quantity: int = 1
    modifiers: tuple[str, ...] = field(default_factory=tuple)
    confidence: float = SUBSTRING_CONFIDENCE

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "itemName": self.item_name,
            "quantity": self.quantity,
            "modifiers": list(self.modifiers),
            "confidence": self.confidence,
        }
