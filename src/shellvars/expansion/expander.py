"""Expansion of words and expressions into text.

The host provides variable lookups through an :class:`Expander`;
:func:`expand_string` turns an expression such as ``"$name"``,
``[a b c]`` or ``$join(@list ', ')`` into the sequence of words it
stands for.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from shellvars.assignments import is_array
from shellvars.expansion.select import ALL, Select, parse_selection
from shellvars.parsing.argument_splitter import ArgumentSplitter

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_ARRAY_VARIABLE = re.compile(r"@([A-Za-z_][A-Za-z0-9_]*)(?:\[([^\]]*)\])?")

# Escapes that keep their meaning inside double quotes
_DOUBLE_QUOTE_ESCAPES = '"\\$@`'


class Expander:
    """Variable lookups used during expansion.

    Subclasses override the lookups they support; the defaults report
    every variable as undefined.
    """

    def string(self, name: str) -> str | None:
        """Return the scalar value of variable ``name``."""
        return None

    def array(self, name: str, selection: Select) -> list[str] | None:
        """Return the elements of array ``name`` picked by ``selection``."""
        return None


def is_expression(text: str) -> bool:
    """Return whether ``text`` must be expanded rather than looked up by name."""
    return text.startswith(("$", "@", "[", '"', "'"))


def expand_string(text: str, expander: Expander) -> list[str]:
    """Expand ``text`` into its words.

    Array literals and array variables produce one word per element;
    anything else produces exactly one word.
    """
    if not text:
        return []
    if is_array(text):
        words: list[str] = []
        for element in ArgumentSplitter(text[1:-1]):
            words.extend(expand_string(element, expander))
        return words
    match = _ARRAY_VARIABLE.fullmatch(text)
    if match:
        selection = _selection_or_all(match.group(2))
        if selection is None:
            return []
        return expander.array(match.group(1), selection) or []
    return [WordExpander(text, expander).expand()]


def _selection_or_all(text: str | None) -> Select | None:
    if text is None:
        return ALL
    return parse_selection(text)


class WordExpander:
    """Build a single word from quoted text, escapes and substitutions."""

    def __init__(self, text: str, expander: Expander) -> None:
        self.text = text
        self.expander = expander
        self.pos = 0
        self.out: list[str] = []

    def expand(self) -> str:
        text = self.text
        in_double = False
        while self.pos < len(text):
            ch = text[self.pos]
            if ch == "\\":
                nxt = text[self.pos + 1:self.pos + 2]
                if in_double and nxt not in _DOUBLE_QUOTE_ESCAPES:
                    self.out.append(ch)
                else:
                    self.out.append(nxt)
                    self.pos += 1
                self.pos += 1
            elif ch == '"':
                in_double = not in_double
                self.pos += 1
            elif ch == "'" and not in_double:
                end = text.find("'", self.pos + 1)
                if end < 0:
                    end = len(text)
                self.out.append(text[self.pos + 1:end])
                self.pos = end + 1
            elif ch == "$":
                self._expand_dollar()
            elif ch == "@":
                self._expand_at()
            else:
                self.out.append(ch)
                self.pos += 1
        return "".join(self.out)

    def _expand_dollar(self) -> None:
        text = self.text
        start = self.pos + 1
        if text.startswith("{", start):
            end = text.find("}", start)
            if end > start and _NAME.fullmatch(text, start + 1, end):
                self.out.append(self.expander.string(text[start + 1:end]) or "")
                self.pos = end + 1
                return
        match = _NAME.match(text, start)
        if match is None:
            self.out.append("$")
            self.pos += 1
            return
        name = match.group(0)
        end = match.end()
        if text.startswith("(", end):
            close = _find_closing(text, end)
            if close is not None:
                self.pos = self._call_method(name, text[end + 1:close], close + 1)
                return
        self.out.append(self.expander.string(name) or "")
        self.pos = end

    def _expand_at(self) -> None:
        match = _NAME.match(self.text, self.pos + 1)
        if match is None:
            self.out.append("@")
            self.pos += 1
            return
        self.out.append(" ".join(self.expander.array(match.group(0), ALL) or []))
        self.pos = match.end()

    def _call_method(self, name: str, inner: str, after: int) -> int:
        """Dispatch ``$name(inner)`` and return the position after the call."""
        # Deferred import: methods expand their own arguments through this module
        from shellvars.expansion.methods import StringMethod

        variable, pattern = split_method_arguments(inner)
        selection: Select = ALL
        if self.text.startswith("[", after):
            close = _find_closing(self.text, after)
            parsed = parse_selection(self.text[after + 1:close]) if close is not None else None
            if parsed is not None and close is not None:
                selection = parsed
                after = close + 1
        method = StringMethod(method=name, variable=variable, pattern=pattern, selection=selection)
        method.handle(self.out, self.expander)
        return after


def split_method_arguments(inner: str) -> tuple[str, str]:
    """Split the text inside ``$method(...)`` into its reference and pattern."""
    splitter = ArgumentSplitter(inner)
    variable = next(splitter, "")
    return variable, inner[splitter.read:].strip()


def _find_closing(text: str, start: int) -> int | None:
    """Return the index of the bracket closing the one at ``start``."""
    opener = text[start]
    closer = {"(": ")", "[": "]", "{": "}"}[opener]
    depth = 0
    quote: str | None = None
    i = start
    while i < len(text):
        ch = text[i]
        if ch == "\\" and quote != "'":
            i += 2
            continue
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


class MethodArgs:
    """Deferred view over the raw pattern of a method call."""

    def __init__(self, args: str, expander: Expander) -> None:
        self.args = args
        self.expander = expander

    def array(self) -> Iterator[str]:
        """Yield the expanded words of each argument in turn."""
        for token in ArgumentSplitter(self.args):
            yield from expand_string(token, self.expander)

    def join(self, separator: str) -> str:
        """Expand the whole pattern and join its words with ``separator``."""
        return separator.join(expand_string(self.args, self.expander))

