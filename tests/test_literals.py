"""Tests for string, bytes and number spelling."""

import ast
import math

import pytest

from arbolito.literals import INFSTR, format_number, quote_bytes, quote_str


class TestQuoteStr:
    """quote_str picks quotes and escapes."""

    def test_plain(self) -> None:
        assert quote_str("abc") == "'abc'"

    def test_preferred_quote(self) -> None:
        assert quote_str("abc", quote='"') == '"abc"'

    def test_switches_quote_to_avoid_escape(self) -> None:
        assert quote_str("it's") == '"it\'s"'
        assert quote_str('say "hi"', quote='"') == "'say \"hi\"'"

    def test_escapes_when_both_quotes_present(self) -> None:
        assert quote_str("'\"") == "'\\'\"'"

    def test_named_escapes(self) -> None:
        assert quote_str("a\nb\tc\rd") == "'a\\nb\\tc\\rd'"

    def test_control_and_non_printable(self) -> None:
        assert quote_str("\x00\x7f") == "'\\x00\\x7f'"
        assert quote_str("\u200b") == "'\\u200b'"

    def test_non_ascii_passes_through_utf8(self) -> None:
        assert quote_str("café") == "'café'"
        assert quote_str("\U0001f600") == "'\U0001f600'"

    def test_non_ascii_escaped_for_ascii(self) -> None:
        assert quote_str("é", encoding="ascii") == "'\\xe9'"
        assert quote_str("€", encoding="ascii") == "'\\u20ac'"
        assert quote_str("\U0001f600", encoding="latin-1") == "'\\U0001f600'"

    def test_raw_when_backslashes(self) -> None:
        assert quote_str("C:\\path") == "r'C:\\path'"
        assert quote_str("\\d+") == "r'\\d+'"

    def test_raw_disabled(self) -> None:
        assert quote_str("C:\\path", raw=False) == "'C:\\\\path'"

    def test_no_raw_with_odd_trailing_backslash(self) -> None:
        assert quote_str("a\\") == "'a\\\\'"
        assert quote_str("a\\\\") == "r'a\\\\'"

    def test_no_raw_with_quote_or_newline(self) -> None:
        assert quote_str("\\'\"") == "'\\\\\\'\"'"
        assert quote_str("\\\n") == "'\\\\\\n'"

    def test_prefix_disables_raw(self) -> None:
        assert quote_str("\\", prefix="u") == "u'\\\\'"

    @pytest.mark.parametrize(
        "value",
        ["", "it's", 'a"b', "'\"", "\\", "a\\", "\\d", "\x00", "\u2028", "é", "tab\there"],
    )
    def test_literal_evaluates_back(self, value: str) -> None:
        assert ast.literal_eval(quote_str(value)) == value
        assert ast.literal_eval(quote_str(value, quote='"', encoding="ascii")) == value


class TestQuoteBytes:
    """quote_bytes always produces ASCII."""

    def test_plain(self) -> None:
        assert quote_bytes(b"abc") == "b'abc'"

    def test_high_and_control_bytes(self) -> None:
        assert quote_bytes(b"\x00\xff") == "b'\\x00\\xff'"
        assert quote_bytes(b"\n") == "b'\\n'"

    def test_raw(self) -> None:
        assert quote_bytes(b"a\\b") == "rb'a\\b'"
        assert quote_bytes(b"a\\b", raw=False) == "b'a\\\\b'"

    def test_quote_choice(self) -> None:
        assert quote_bytes(b"it's") == "b\"it's\""

    @pytest.mark.parametrize("value", [b"", b"'\"", b"\\", b"\x80\\", bytes(range(256))])
    def test_literal_evaluates_back(self, value: bytes) -> None:
        text = quote_bytes(value)
        assert text.isascii()
        assert ast.literal_eval(text) == value


class TestFormatNumber:
    """Numbers use repr with infinities replaced."""

    def test_int(self) -> None:
        assert format_number(10**30) == str(10**30)

    def test_float(self) -> None:
        assert format_number(0.1) == "0.1"
        assert format_number(-0.0) == "-0.0"

    def test_infinity(self) -> None:
        assert INFSTR == "1e309"
        assert format_number(math.inf) == "1e309"
        assert format_number(-math.inf) == "-1e309"
        assert format_number(complex(0, math.inf)) == "1e309j"

    def test_infinity_evaluates_back(self) -> None:
        assert ast.literal_eval(format_number(math.inf)) == math.inf

    def test_nan(self) -> None:
        assert format_number(math.nan) == "(1e309-1e309)"
