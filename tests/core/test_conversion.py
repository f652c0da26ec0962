"""Tests for failable conversions."""

import pytest

from fundamentals.conversion import parse_float, parse_int
from fundamentals.operators import INT_MAX, INT_MIN
from fundamentals.optional import ABSENT, Present


class TestParseInt:
    """parse_int returns an optional integer."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("123", 123),
            ("+7", 7),
            ("-42", -42),
            ("007", 7),
            (str(INT_MAX), INT_MAX),
            (str(INT_MIN), INT_MIN),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_int(text) == Present(expected)

    @pytest.mark.parametrize(
        "text",
        ["hello, world", "", " 1", "1 ", "1_000", "1.0", "+", "--1", "٣", str(INT_MAX + 1), str(INT_MIN - 1)],
    )
    def test_invalid(self, text):
        assert parse_int(text) is ABSENT

    def test_non_string_input(self):
        assert parse_int(123) is ABSENT


class TestParseFloat:
    """parse_float accepts decimal and exponent notation."""

    @pytest.mark.parametrize(
        "text, expected",
        [("2.5", 2.5), ("-0.5", -0.5), ("1e3", 1000.0), (".5", 0.5), ("3", 3.0)],
    )
    def test_valid(self, text, expected):
        assert parse_float(text) == Present(expected)

    @pytest.mark.parametrize("text", ["", "abc", "1.2.3", " 1.0", "1e"])
    def test_invalid(self, text):
        assert parse_float(text) is ABSENT

    def test_infinity(self):
        assert parse_float("inf").force_unwrap() == float("inf")
