"""Shared plumbing for the class-based ply lexers."""

from __future__ import annotations

from typing import Any

import ply.lex as lex


class PlyLexer:
    """Base for lexers whose token list and rules are class attributes.

    Subclasses define ``tokens`` and their ``t_`` rules; ``build`` hands
    the instance to ply, which collects the rules from it.
    """

    tokens: list[str] = []

    def __init__(self) -> None:
        self.lexer: lex.Lexer | None = None

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Unexpected character {t.value[0]!r} at offset {t.lexpos}")

    def build(self, **kwargs: Any) -> lex.Lexer:
        """Build the underlying ply lexer."""
        self.lexer = lex.lex(module=self, **kwargs)
        return self.lexer

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Return every token in ``data``, building the lexer on first use."""
        lexer = self.lexer if self.lexer is not None else self.build()
        lexer.input(data)
        return list(lexer)
