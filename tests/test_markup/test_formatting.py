"""
Tests for AsciiDoc span formatting.
"""
import pytest

from springbok_core.markup import formatting


def test_strike_span_with_citation():
    assert formatting.strike("ten dollars", "1") == "[.line-through .red]#ten dollars#^1^"


def test_insert_span_with_citation():
    assert formatting.insert("fifty dollars", "1") == "[.blue]#fifty dollars#^1^"


def test_no_citation_without_section_number():
    assert formatting.insert("fifty dollars") == "[.blue]#fifty dollars#"


def test_multi_line_span_uses_line_continuation():
    assert formatting.strike("(a) One.\n(b) Two.", "3") == "[.line-through .red]##(a) One. +\n(b) Two.##^3^"


def test_leading_buffer():
    assert formatting.leading_buffer(", or more") == " "
    assert formatting.leading_buffer(". Provided") == " "
    assert formatting.leading_buffer("ten dollars") == ""


def test_footnote_strips_and_italicizes():
    assert formatting.footnote("  SECTION 6. Text.\n") == "_SECTION 6. Text._"


def test_repeal_marker():
    assert formatting.repeal_marker("", "2") == "REPEALED^2^"
    assert formatting.repeal_marker("effective July 1, 2025", "2") == "REPEALED effective July 1, 2025^2^"


@pytest.mark.parametrize("text,expected", [
    ("“fifty dollars”", "fifty dollars"),
    ("\"fifty dollars\"", "fifty dollars"),
    (" “fifty dollars” ", "fifty dollars"),
    ("fifty dollars", "fifty dollars"),
    ("“a” and “b”", "“a” and “b”"),
    ("“", "“"),
])
def test_unquote(text, expected):
    assert formatting.unquote(text) == expected
