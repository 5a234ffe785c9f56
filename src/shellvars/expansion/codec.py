"""Convert between literal text and backslash escape sequences.

Both directions accept 7-bit ASCII only. ``unescape(escape(s)) == s``
holds for any ASCII ``s``.
"""

from __future__ import annotations

# Control characters and their two-character escape forms
CONTROL_ESCAPES: dict[str, str] = {
    "\x00": "\\0",
    "\x07": "\\a",
    "\x08": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\x0b": "\\v",
    "\x0c": "\\f",
    "\r": "\\r",
    "\x1b": "\\e",
}

# Shell metacharacters that escape() prefixes with a backslash
ESCAPED_PUNCTUATION = frozenset(
    chr(n)
    for n in (*range(33, 48), *range(58, 65), *range(91, 97), *range(123, 127))
    if n not in (59, 95)  # ';' and '_'
)

# Character following a backslash -> character it stands for
UNESCAPES: dict[str, str] = {
    "a": "\x07",
    "b": "\x08",
    "e": "\x1b",
    "f": "\x0c",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\x0b",
    "0": "\x00",
    " ": " ",
    **{ch: ch for ch in ESCAPED_PUNCTUATION},
}


class EscapeError(ValueError):
    """Raised when the input holds a character outside 7-bit ASCII."""

    def __init__(self, ch: str) -> None:
        super().__init__(f"invalid ASCII character: {ch!r}")
        self.ch = ch


def unescape(text: str) -> str:
    """Replace escape sequences in ``text`` with the characters they stand for.

    ``\\c`` discards everything produced so far and stops. An escape that
    is not recognized is kept as written, backslash included. A trailing
    lone backslash is dropped.
    """
    out: list[str] = []
    check = False
    for ch in text:
        if not ch.isascii():
            raise EscapeError(ch)
        if check:
            check = False
            if ch == "c":
                return ""
            replacement = UNESCAPES.get(ch)
            if replacement is None:
                out.append("\\")
                out.append(ch)
            else:
                out.append(replacement)
        elif ch == "\\":
            check = True
        else:
            out.append(ch)
    return "".join(out)


def escape(text: str) -> str:
    """Replace control characters and shell metacharacters with escapes."""
    out: list[str] = []
    for ch in text:
        if ord(ch) > 127:
            raise EscapeError(ch)
        if ch in CONTROL_ESCAPES:
            out.append(CONTROL_ESCAPES[ch])
        elif ch in ESCAPED_PUNCTUATION:
            out.append("\\")
            out.append(ch)
        else:
            out.append(ch)
    return "".join(out)
