"""Tests for selections and grapheme slicing."""

import pytest

from shellvars.expansion import ALL, SelectIndex, SelectRange, parse_selection, select_items, slice_text
from shellvars.expansion.select import graphemes


class TestParseSelection:
    """Tests for parsing selection text."""

    def test_index(self):
        assert parse_selection("2") == SelectIndex(2)
        assert parse_selection("-1") == SelectIndex(-1)

    def test_exclusive_range(self):
        assert parse_selection("1..3") == SelectRange(1, 3, inclusive=False)

    def test_inclusive_range(self):
        assert parse_selection("1...3") == SelectRange(1, 3, inclusive=True)
        assert parse_selection("1..=3") == SelectRange(1, 3, inclusive=True)

    def test_open_ranges(self):
        assert parse_selection("..2") == SelectRange(None, 2)
        assert parse_selection("2..") == SelectRange(2, None)

    def test_not_a_selection(self):
        assert parse_selection("abc") is None
        assert parse_selection("") is None


class TestSelectItems:
    """Tests for applying selections to lists."""

    items = ["a", "b", "c", "d", "e"]

    def test_all(self):
        assert select_items(self.items, ALL) == self.items

    def test_index(self):
        assert select_items(self.items, SelectIndex(1)) == ["b"]
        assert select_items(self.items, SelectIndex(-1)) == ["e"]
        assert select_items(self.items, SelectIndex(9)) == []

    def test_range(self):
        assert select_items(self.items, SelectRange(1, 3)) == ["b", "c"]
        assert select_items(self.items, SelectRange(1, 3, inclusive=True)) == ["b", "c", "d"]
        assert select_items(self.items, SelectRange(-2, None)) == ["d", "e"]
        assert select_items(self.items, SelectRange(1, 99)) == ["b", "c", "d", "e"]

    def test_empty_range(self):
        assert select_items(self.items, SelectRange(3, 1)) == []
        assert select_items(self.items, SelectRange(9, None)) == []

    def test_unknown_selection(self):
        with pytest.raises(TypeError):
            select_items(self.items, "bogus")


class TestGraphemes:
    """Tests for grapheme-aware text slicing."""

    def test_combining_character_is_one_grapheme(self):
        assert graphemes("e\u0301x") == ["e\u0301", "x"]

    def test_slice_text(self):
        output = []
        slice_text(output, "e\u0301xyz", SelectRange(0, 2))
        assert output == ["e\u0301x"]

    def test_slice_text_all(self):
        output = []
        slice_text(output, "abc", ALL)
        assert output == ["abc"]
