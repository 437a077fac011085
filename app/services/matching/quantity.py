"""
Quantity Parsing

Turns a short span of spoken-order text into an item count.

Digits take precedence over number words. Number words are looked up in
vocabulary order, first as whole words, then as plain substrings, so
"three pizzas" is 3 while "another" still yields 1 through "an".
"""

import re

DEFAULT_QUANTITY = 1

_DIGIT_RUN = re.compile(r"\d+")

# Insertion order is significant: the first word found wins.
NUMBER_WORDS: dict[str, int] = {
    "one": 1,
    "a": 1,
    "an": 1,
    "two": 2,
    "couple": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}

_WHOLE_WORDS = {word: re.compile(rf"\b{word}\b") for word in NUMBER_WORDS}


def parse_quantity(text: str) -> int:
    """
    Extract a quantity from text.

    Args:
        text: Text span preceding (or naming) an item

    Returns:
        int: First digit run, else first number word found as a whole
        word, else first number word found as a substring, else 1

    Example:
        >>> parse_quantity("order 2 for table 10")
        2
        >>> parse_quantity("three pizzas")
        3
        >>> parse_quantity("another")
        1
    """
    digits = _DIGIT_RUN.search(text)
    if digits:
        return int(digits.group())

    lowered = text.lower()
    for word, pattern in _WHOLE_WORDS.items():
        if pattern.search(lowered):
            return NUMBER_WORDS[word]

    for word, value in NUMBER_WORDS.items():
        if word in lowered:
            return value

    return DEFAULT_QUANTITY
