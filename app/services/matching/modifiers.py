"""
Modifier Extraction

Tags order modifiers ("no onions", "extra cheese", "spicy") in a window of
transcript text using an ordered table of regex rules.

The table is plain data. To recognise more phrases, build a
ModifierExtractor with extra rules instead of editing the matcher:

    extractor = ModifierExtractor(DEFAULT_RULES + (
        ModifierRule.phrase("light"),
    ))
    extractor.extract("light ice please")   # ("light ice",)

Author: Khalil Bannouri
Version: 3.0.0
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional


# Emission rules: map a regex match to the modifier text it contributes.
def emit_phrase(match: re.Match) -> str:
    """Emit the whole matched phrase (e.g., "no cheese")."""
    return match.group(0).lower().strip()


def emit_keyword(match: re.Match) -> str:
    """Emit the matched keyword itself."""
    return match.group(0).lower()


@dataclass(frozen=True)
class ModifierRule:
    """
    A single (pattern, emission rule) entry of the modifier grammar.

    Attributes:
        pattern: Compiled case-insensitive regex
        emit: Callable turning a match into modifier text
    """
    pattern: re.Pattern
    emit: Callable[[re.Match], str]

    @classmethod
    def phrase(cls, lead: str) -> "ModifierRule":
        """Rule for "<lead> <word>" phrases."""
        return cls(re.compile(rf"{re.escape(lead)}\s+(\w+)", re.IGNORECASE), emit_phrase)

    @classmethod
    def keyword(cls, word: str) -> "ModifierRule":
        """Rule for a bare keyword such as "spicy"."""
        return cls(re.compile(re.escape(word), re.IGNORECASE), emit_keyword)


PHRASE_LEADS = ("no", "without", "extra", "with", "add", "less", "more")
KEYWORDS = ("spicy", "mild", "hot", "cold", "large", "small", "medium")

DEFAULT_RULES: tuple[ModifierRule, ...] = (
    tuple(ModifierRule.phrase(lead) for lead in PHRASE_LEADS)
    + tuple(ModifierRule.keyword(word) for word in KEYWORDS)
)


class ModifierExtractor:
    """
    Applies an ordered rule table to text.

    Every non-overlapping occurrence of every rule contributes, in table
    order. Duplicates are dropped keeping the first occurrence.
    """

    def __init__(self, rules: Optional[Iterable[ModifierRule]] = None):
        self.rules: tuple[ModifierRule, ...] = (
            tuple(rules) if rules is not None else DEFAULT_RULES
        )

    def extract(self, text: str) -> tuple[str, ...]:
        found: list[str] = []
        for rule in self.rules:
            for match in rule.pattern.finditer(text):
                found.append(rule.emit(match))
        return tuple(dict.fromkeys(found))


_default_extractor = ModifierExtractor()


def extract_modifiers(text: str) -> tuple[str, ...]:
    """
    Extract modifiers from text using the default rule table.

    Example:
        >>> extract_modifiers("extra cheese and spicy")
        ('extra cheese', 'spicy')
    """
    return _default_extractor.extract(text)
