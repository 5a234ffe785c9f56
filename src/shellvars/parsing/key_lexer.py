"""Lexer for the key list on the left-hand side of an assignment."""

from __future__ import annotations

import ply.lex as lex

from shellvars.parsing.ply_lexer import PlyLexer
from shellvars.parsing.type_parser import parse_annotation
from shellvars.types import STR, STR_ARRAY, InvalidTypeName, Key, KeyTypeError, Primitive


class KeyLexer(PlyLexer):
    """Lexer for key declarations like ``a b[] c:[int] d[3]:float``."""

    tokens = ["WS", "COLON", "LBRACKET", "RBRACKET", "WORD"]

    t_COLON = r":"
    t_LBRACKET = r"\["
    t_RBRACKET = r"\]"

    # Whitespace separates keys, so it is a token rather than ignored
    def t_WS(self, t: lex.LexToken) -> lex.LexToken:
        r"\s+"
        return t

    def t_WORD(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\s:\[\]]+"
        return t


_lexer: KeyLexer | None = None


def tokenize_keys(data: str) -> list[lex.LexToken]:
    """Tokenize ``data`` with a shared lexer, building it on first use."""
    global _lexer
    if _lexer is None:
        _lexer = KeyLexer()
    return _lexer.tokenize(data)


class KeyIterator:
    """Iterate over the keys declared in ``data``.

    Each whitespace-separated declaration produces exactly one item:
    a :class:`Key`, or a :class:`KeyTypeError` when the declaration is
    malformed. The iterator is lazy and cannot be restarted.
    """

    def __init__(self, data: str) -> None:
        self.data = data
        self._tokens = tokenize_keys(data)
        self._pos = 0

    def __iter__(self) -> KeyIterator:
        return self

    def __next__(self) -> Key | KeyTypeError:
        self._skip_whitespace()
        if self._pos >= len(self._tokens):
            raise StopIteration

        start = self._pos
        first = self._tokens[self._pos]
        if first.type != "WORD":
            return self._invalid(start)
        name = first.value
        self._pos += 1

        index: str | None = None
        if self._peek("LBRACKET"):
            index = self._read_bracketed()
            if index is None:
                return self._invalid(start)

        annotation: str | None = None
        if self._peek("COLON"):
            self._pos += 1
            annotation = self._read_until_whitespace()

        if not self._at_key_end():
            return self._invalid(start)

        kind: Primitive
        if annotation is not None:
            if index == "" or not annotation:
                return self._invalid(start)
            try:
                kind = parse_annotation(annotation)
            except SyntaxError:
                return InvalidTypeName(annotation)
            if index is not None:
                kind = Primitive.indexed(index, kind)
        elif index == "":
            kind = STR_ARRAY
        elif index is not None:
            kind = Primitive.indexed(index, STR)
        else:
            kind = STR

        return Key(name=name, kind=kind)

    def _peek(self, token_type: str) -> bool:
        return self._pos < len(self._tokens) and self._tokens[self._pos].type == token_type

    def _at_key_end(self) -> bool:
        return self._pos >= len(self._tokens) or self._tokens[self._pos].type == "WS"

    def _skip_whitespace(self) -> None:
        while self._peek("WS"):
            self._pos += 1

    def _read_bracketed(self) -> str | None:
        """Read a balanced ``[...]`` group and return its inner text."""
        depth = 0
        parts: list[str] = []
        while self._pos < len(self._tokens):
            tok = self._tokens[self._pos]
            self._pos += 1
            if tok.type == "LBRACKET":
                depth += 1
                if depth == 1:
                    continue
            elif tok.type == "RBRACKET":
                depth -= 1
                if depth == 0:
                    return "".join(parts)
            parts.append(tok.value)
        return None

    def _read_until_whitespace(self) -> str:
        """Read annotation text up to whitespace outside brackets."""
        depth = 0
        parts: list[str] = []
        while self._pos < len(self._tokens):
            tok = self._tokens[self._pos]
            if tok.type == "WS" and depth == 0:
                break
            if tok.type == "LBRACKET":
                depth += 1
            elif tok.type == "RBRACKET":
                depth = max(0, depth - 1)
            parts.append(tok.value)
            self._pos += 1
        return "".join(parts)

    def _invalid(self, start: int) -> InvalidTypeName:
        """Skip the rest of the current declaration and report it."""
        while self._pos < len(self._tokens) and not self._peek("WS"):
            self._pos += 1
        text = "".join(tok.value for tok in self._tokens[start:self._pos])
        return InvalidTypeName(text)
