"""Result selections: all, one index, or a range of a sequence."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeVar, Union

import regex

T = TypeVar("T")

_GRAPHEME = regex.compile(r"\X")

_INDEX = re.compile(r"\s*(-?\d+)\s*")
_RANGE = re.compile(r"\s*(-?\d+)?\s*(\.\.\.|\.\.=|\.\.)\s*(-?\d+)?\s*")


def graphemes(text: str) -> list[str]:
    """Split ``text`` into extended grapheme clusters."""
    return _GRAPHEME.findall(text)


@dataclass(frozen=True)
class SelectAll:
    """Select every element."""


@dataclass(frozen=True)
class SelectIndex:
    """Select one element; negative indexes count from the end."""

    index: int


@dataclass(frozen=True)
class SelectRange:
    """Select a run of elements.

    ``start`` and ``end`` may be negative (counted from the end) or
    ``None`` (open). ``end`` is excluded unless ``inclusive`` is set.
    """

    start: int | None = None
    end: int | None = None
    inclusive: bool = False

    def bounds(self, length: int) -> tuple[int, int] | None:
        """Return ``(start, stop)`` offsets into a sequence of ``length``."""
        start = 0 if self.start is None else self.start
        if start < 0:
            start += length
        if self.end is None:
            stop = length
        else:
            stop = self.end + length if self.end < 0 else self.end
            if self.inclusive:
                stop += 1
        if start < 0 or start > length:
            return None
        stop = min(stop, length)
        if stop < start:
            return None
        return start, stop


Select = Union[SelectAll, SelectIndex, SelectRange]

ALL = SelectAll()


def parse_selection(text: str) -> Select | None:
    """Parse the text between ``[`` and ``]`` of a selection suffix.

    ``2`` and ``-1`` are indexes; ``1..3`` is exclusive, ``1...3`` and
    ``1..=3`` are inclusive; either bound may be omitted. Returns ``None``
    when the text is not a selection.
    """
    match = _INDEX.fullmatch(text)
    if match:
        return SelectIndex(int(match.group(1)))
    match = _RANGE.fullmatch(text)
    if match:
        start, dots, end = match.groups()
        return SelectRange(
            start=int(start) if start is not None else None,
            end=int(end) if end is not None else None,
            inclusive=dots != "..",
        )
    return None


def select_items(items: list[T], selection: Select) -> list[T]:
    """Apply ``selection`` to a list."""
    if isinstance(selection, SelectAll):
        return list(items)
    elif isinstance(selection, SelectIndex):
        index = selection.index + len(items) if selection.index < 0 else selection.index
        if 0 <= index < len(items):
            return [items[index]]
        return []
    elif isinstance(selection, SelectRange):
        bounds = selection.bounds(len(items))
        if bounds is None:
            return []
        start, stop = bounds
        return items[start:stop]
    else:
        raise TypeError(f"Unknown selection: {selection!r}")


def slice_text(output: list[str], text: str, selection: Select) -> None:
    """Append the grapheme clusters of ``text`` picked by ``selection``."""
    if isinstance(selection, SelectAll):
        output.append(text)
    else:
        output.append("".join(select_items(graphemes(text), selection)))
