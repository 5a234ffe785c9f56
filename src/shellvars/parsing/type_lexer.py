"""Lexer for key type annotations (the text after ``name:``)."""

from __future__ import annotations

import ply.lex as lex

from shellvars.parsing.ply_lexer import PlyLexer


class TypeLexer(PlyLexer):
    """Splits annotations such as ``[int]`` or ``hmap[float]`` into tokens."""

    tokens = ["IDENTIFIER", "LBRACKET", "RBRACKET"]

    t_LBRACKET = r"\["
    t_RBRACKET = r"\]"

    # Annotations never span whitespace, but be lenient about it
    t_ignore = " \t"

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[A-Za-z_]\w*"
        return t
