"""
Tests for quantity parsing.

Covers digit precedence, number words and the default quantity.
"""

import pytest

from app.services.matching import parse_quantity


class TestDigits:
    """Digit runs win over number words."""

    def test_leading_digit(self):
        assert parse_quantity("3 pizzas") == 3

    def test_first_digit_run_wins(self):
        assert parse_quantity("order 2 for table 10") == 2

    def test_digits_beat_words(self):
        assert parse_quantity("two orders, make it 4") == 4

    def test_large_values_are_not_bounded(self):
        assert parse_quantity("12345678901234567890 wings") == 12345678901234567890


class TestNumberWords:
    """English number words, case-insensitive."""

    @pytest.mark.parametrize("text,expected", [
        ("three pizzas", 3),
        ("a pizza", 1),
        ("an order of fries", 1),
        ("Two cokes", 2),
        ("a couple", 1),
        ("couple of", 2),
        ("FIVE", 5),
        ("ten", 10),
    ])
    def test_words(self, text, expected):
        assert parse_quantity(text) == expected

    def test_word_inside_longer_token(self):
        """Substring hits still count when no whole word matches."""
        assert parse_quantity("another") == 1
        assert parse_quantity("seventeen") == 7

    def test_whole_word_preferred_over_embedded_word(self):
        """The "a" inside "have" does not hide "three"."""
        assert parse_quantity("I'll have three") == 3


class TestDefault:

    def test_no_quantity(self):
        assert parse_quantity("pizza") == 1

    def test_empty_text(self):
        assert parse_quantity("") == 1

    def test_unrelated_text(self):
        assert parse_quantity("burger") == 1
