"""Shellvars - typed shell assignments and string expansion methods."""

from shellvars.assignments import (
    Action,
    AssignmentActions,
    AssignmentError,
    ExtraKeys,
    ExtraValues,
    InvalidType,
    InvalidValue,
    NoKey,
    RepeatedKey,
    is_array,
)
from shellvars.expansion import Expander, StringMethod, escape, expand_string, unescape
from shellvars.parsing import ArgumentSplitter, KeyIterator, assignment_lexer
from shellvars.types import (
    BadValue,
    InvalidTypeName,
    Key,
    KeyTypeError,
    Operator,
    Primitive,
    PrimitiveKind,
)
from shellvars.variables import ApplyError, Variables

__all__ = [
    # Assignments
    "Action",
    "AssignmentActions",
    "AssignmentError",
    "ExtraKeys",
    "ExtraValues",
    "InvalidType",
    "InvalidValue",
    "NoKey",
    "RepeatedKey",
    "is_array",
    # Parsing
    "ArgumentSplitter",
    "KeyIterator",
    "assignment_lexer",
    # Types
    "BadValue",
    "InvalidTypeName",
    "Key",
    "KeyTypeError",
    "Operator",
    "Primitive",
    "PrimitiveKind",
    # Expansion
    "Expander",
    "StringMethod",
    "escape",
    "expand_string",
    "unescape",
    # Variable store
    "ApplyError",
    "Variables",
]

__version__ = "0.1.0"
