"""Tests for verse reference parsing and ordering."""

import pytest

from quran_tracker.index.refs import START_OF_TEXT, VerseRef, parse_verse_ref


def test_parse_valid_reference():
    assert parse_verse_ref("2:255") == VerseRef(2, 255)


def test_parse_tolerates_surrounding_spaces():
    assert parse_verse_ref(" 18 : 10 ") == VerseRef(18, 10)


@pytest.mark.parametrize("text", ["", "2", "2:3:4", "a:1", "1:b", ":", "2.5:1"])
def test_parse_rejects_malformed_input(text):
    """Test that malformed references return None instead of raising."""
    assert parse_verse_ref(text) is None


def test_parse_rejects_non_string():
    assert parse_verse_ref(None) is None  # type: ignore[arg-type]


def test_string_form():
    assert str(VerseRef(114, 6)) == "114:6"
    assert str(START_OF_TEXT) == "1:1"


def test_ordering_is_chapter_then_verse():
    assert VerseRef(1, 7) < VerseRef(2, 1)
    assert VerseRef(2, 10) > VerseRef(2, 9)
    assert max(VerseRef(3, 1), VerseRef(2, 286)) == VerseRef(3, 1)
