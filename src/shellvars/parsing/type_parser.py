"""Parser for key type annotations."""

from __future__ import annotations

from typing import Any

import ply.yacc as yacc

from shellvars.parsing.type_lexer import TypeLexer
from shellvars.types import PRIMITIVE_NAMES, STR, Primitive

MAP_CONSTRUCTORS = {
    "hmap": Primitive.hash_map,
    "bmap": Primitive.btree_map,
}


class TypeAnnotationParser:
    """Parser turning annotation text into a :class:`Primitive`.

    Grammar::

        annotation : IDENTIFIER
                   | LBRACKET IDENTIFIER RBRACKET
                   | IDENTIFIER LBRACKET RBRACKET
                   | IDENTIFIER LBRACKET annotation RBRACKET

    Unknown names and malformed input raise ``SyntaxError``.
    """

    tokens = TypeLexer.tokens

    def __init__(self) -> None:
        self.lexer = TypeLexer()
        self.parser: yacc.LRParser | None = None

    def p_annotation_scalar(self, p: yacc.YaccProduction) -> None:
        """annotation : IDENTIFIER"""
        primitive = PRIMITIVE_NAMES.get(p[1])
        if primitive is None:
            raise SyntaxError(f"Unknown type '{p[1]}'")
        p[0] = primitive

    def p_annotation_array(self, p: yacc.YaccProduction) -> None:
        """annotation : LBRACKET IDENTIFIER RBRACKET"""
        primitive = PRIMITIVE_NAMES.get(f"[{p[2]}]")
        if primitive is None:
            raise SyntaxError(f"Unknown array type '[{p[2]}]'")
        p[0] = primitive

    def p_annotation_map_default(self, p: yacc.YaccProduction) -> None:
        """annotation : IDENTIFIER LBRACKET RBRACKET"""
        p[0] = self._make_map(p[1], STR)

    def p_annotation_map(self, p: yacc.YaccProduction) -> None:
        """annotation : IDENTIFIER LBRACKET annotation RBRACKET"""
        p[0] = self._make_map(p[1], p[3])

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def _make_map(self, name: str, inner: Primitive) -> Primitive:
        constructor = MAP_CONSTRUCTORS.get(name)
        if constructor is None:
            raise SyntaxError(f"Unknown map type '{name}'")
        return constructor(inner)

    def build(self, **kwargs: Any) -> yacc.LRParser:
        """Build the parser tables."""
        self.parser = yacc.yacc(module=self, **kwargs)
        return self.parser

    def parse(self, data: str) -> Primitive:
        """Parse an annotation and return its primitive."""
        parser = self.parser if self.parser is not None else self.build(debug=False, write_tables=False)
        lexer = self.lexer.lexer if self.lexer.lexer is not None else self.lexer.build()
        result = parser.parse(data, lexer=lexer)
        if result is None:
            raise SyntaxError("Empty type annotation")
        return result


_parser: TypeAnnotationParser | None = None


def parse_annotation(data: str) -> Primitive:
    """Parse ``data`` with a shared parser, building its tables on first use."""
    global _parser
    if _parser is None:
        _parser = TypeAnnotationParser()
    return _parser.parse(data)
