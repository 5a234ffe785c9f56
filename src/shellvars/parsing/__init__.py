"""Parsing module for assignment statements and argument lists."""

from shellvars.parsing.argument_splitter import ArgumentSplitter
from shellvars.parsing.assignment_lexer import assignment_lexer
from shellvars.parsing.key_lexer import KeyIterator, KeyLexer
from shellvars.parsing.type_parser import TypeAnnotationParser, parse_annotation

__all__ = [
    "ArgumentSplitter",
    "KeyIterator",
    "KeyLexer",
    "TypeAnnotationParser",
    "assignment_lexer",
    "parse_annotation",
]
