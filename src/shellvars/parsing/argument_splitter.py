"""Split shell-quoted text into raw argument tokens."""

from __future__ import annotations

OPENERS = "([{"
CLOSERS = ")]}"


class ArgumentSplitter:
    """Lazily split ``data`` on whitespace that is outside of any grouping.

    Quotes, brackets, braces and parentheses group text into one token.
    Single quotes are literal; elsewhere a backslash escapes the next
    character. Tokens are returned raw, quotes and escapes included.
    """

    def __init__(self, data: str) -> None:
        self.data = data
        self.read = 0

    def __iter__(self) -> ArgumentSplitter:
        return self

    def __next__(self) -> str:
        data = self.data
        end = len(data)

        while self.read < end and data[self.read].isspace():
            self.read += 1
        if self.read >= end:
            raise StopIteration

        start = self.read
        depth = 0
        quote: str | None = None
        escape_next = False

        while self.read < end:
            ch = data[self.read]
            if escape_next:
                escape_next = False
            elif ch == "\\" and quote != "'":
                escape_next = True
            elif quote is not None:
                if ch == quote:
                    quote = None
            elif ch in "'\"":
                quote = ch
            elif ch in OPENERS:
                depth += 1
            elif ch in CLOSERS:
                depth = max(0, depth - 1)
            elif ch.isspace() and depth == 0:
                break
            self.read += 1

        return data[start:self.read]
