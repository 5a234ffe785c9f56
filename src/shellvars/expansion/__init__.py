"""Expansion module: word expansion, result selection and string methods."""

from shellvars.expansion.codec import EscapeError, escape, unescape
from shellvars.expansion.expander import Expander, MethodArgs, expand_string, is_expression
from shellvars.expansion.methods import StringMethod
from shellvars.expansion.select import (
    ALL,
    Select,
    SelectAll,
    SelectIndex,
    SelectRange,
    parse_selection,
    select_items,
    slice_text,
)

__all__ = [
    "ALL",
    "EscapeError",
    "Expander",
    "MethodArgs",
    "Select",
    "SelectAll",
    "SelectIndex",
    "SelectRange",
    "StringMethod",
    "escape",
    "expand_string",
    "is_expression",
    "parse_selection",
    "select_items",
    "slice_text",
    "unescape",
]
