"""A variable store that applies assignment actions and serves expansions."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Union

from shellvars.assignments import Action, AssignmentActions, AssignmentError, is_array
from shellvars.expansion.expander import Expander, expand_string
from shellvars.expansion.select import Select, select_items
from shellvars.parsing.assignment_lexer import assignment_lexer
from shellvars.types import BadValue, KeyTypeError, Operator, Primitive, PrimitiveKind

log = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")

TRUE_WORDS = ("true", "1", "y")
FALSE_WORDS = ("false", "0", "n")


@dataclass(frozen=True)
class ApplyError:
    """An action that passed validation but could not be stored."""

    name: str
    reason: str

    def __str__(self) -> str:
        return f"{self.name}: {self.reason}"


Problem = Union[AssignmentError, KeyTypeError, ApplyError]


def convert_scalar(text: str, kind: Primitive) -> str | None:
    """Normalize ``text`` as a value of scalar type ``kind``, or return ``None``."""
    if kind.kind is PrimitiveKind.INTEGER:
        if not _INTEGER.fullmatch(text):
            return None
        try:
            return str(int(text))
        except ValueError:
            # Past the interpreter's integer string conversion limit
            return None
    elif kind.kind is PrimitiveKind.FLOAT:
        try:
            return str(float(text))
        except ValueError:
            return None
    elif kind.kind is PrimitiveKind.BOOLEAN:
        lowered = text.lower()
        if lowered in TRUE_WORDS:
            return "true"
        if lowered in FALSE_WORDS:
            return "false"
        return None
    return text


def _number(text: str) -> int | float | None:
    if _INTEGER.fullmatch(text):
        try:
            return int(text)
        except ValueError:
            return None
    try:
        return float(text)
    except ValueError:
        return None


def arithmetic(operator: Operator, left: str, right: str) -> str | None:
    """Combine two numeric strings with an arithmetic operator."""
    lhs = _number(left)
    rhs = _number(right)
    if lhs is None or rhs is None:
        return None
    try:
        if operator is Operator.ADD:
            result = lhs + rhs
        elif operator is Operator.SUBTRACT:
            result = lhs - rhs
        elif operator is Operator.MULTIPLY:
            result = lhs * rhs
        elif operator is Operator.DIVIDE:
            result = lhs / rhs
        elif operator is Operator.INTEGER_DIVIDE:
            result = lhs // rhs
        elif operator is Operator.EXPONENT:
            result = lhs ** rhs
        else:
            raise ValueError(f"Not an arithmetic operator: {operator}")
    except (ZeroDivisionError, OverflowError):
        return None
    if isinstance(result, complex):
        return None
    try:
        return str(result)
    except ValueError:
        return None


class Variables(Expander):
    """Strings, arrays and maps addressed by name."""

    def __init__(self) -> None:
        self.strings: dict[str, str] = {}
        self.arrays: dict[str, list[str]] = {}
        self.maps: dict[str, dict[str, str]] = {}
        self._ordered_maps: set[str] = set()

    # ---- Expander ----

    def string(self, name: str) -> str | None:
        return self.strings.get(name)

    def array(self, name: str, selection: Select) -> list[str] | None:
        if name in self.arrays:
            return select_items(self.arrays[name], selection)
        if name in self.maps:
            return select_items(list(self.maps[name].values()), selection)
        return None

    # ---- Store ----

    def is_defined(self, name: str) -> bool:
        return name in self.strings or name in self.arrays or name in self.maps

    def unset(self, name: str) -> None:
        self.strings.pop(name, None)
        self.arrays.pop(name, None)
        self.maps.pop(name, None)
        self._ordered_maps.discard(name)

    def set_string(self, name: str, value: str) -> None:
        self.unset(name)
        self.strings[name] = value

    def set_array(self, name: str, values: list[str]) -> None:
        self.unset(name)
        self.arrays[name] = list(values)

    def set_map(self, name: str, entries: dict[str, str], ordered: bool = False) -> None:
        self.unset(name)
        if ordered:
            entries = dict(sorted(entries.items()))
            self._ordered_maps.add(name)
        self.maps[name] = entries

    def expand(self, text: str) -> list[str]:
        """Expand ``text`` against this store."""
        return expand_string(text, self)

    # ---- Assignment ----

    def assign(self, statement: str) -> list[Problem]:
        """Run an assignment statement, applying every valid pairing.

        Each problem is logged as a warning and returned; none of them
        stops the remaining pairings from being applied.
        """
        keys, operator, values = assignment_lexer(statement)
        if operator is None:
            problem = ApplyError(statement.strip(), "no assignment operator found")
            log.warning("%s", problem)
            return [problem]

        problems: list[Problem] = []
        for outcome in AssignmentActions(keys or "", operator, values or ""):
            if isinstance(outcome, Action):
                problem = self.apply(outcome)
                if problem is None:
                    continue
            else:
                problem = outcome
            log.warning("%s", problem)
            problems.append(problem)
        return problems

    def apply(self, action: Action) -> KeyTypeError | ApplyError | None:
        """Store the value of ``action``, returning a problem if it cannot be."""
        key, operator, value = action.key, action.operator, action.value
        kind = key.kind

        if operator is Operator.OPTIONAL_EQUAL and kind.kind is not PrimitiveKind.INDEXED \
                and self.is_defined(key.name):
            return None

        if kind.kind is PrimitiveKind.INDEXED:
            return self._apply_indexed(key.name, kind, operator, value)
        if kind.is_map:
            return self._apply_map(key.name, kind, operator, value)
        if kind.is_array or (kind.kind is PrimitiveKind.STR and is_array(value)):
            return self._apply_array(key.name, kind, operator, value)
        return self._apply_scalar(key.name, kind, operator, value)

    def _apply_scalar(
        self, name: str, kind: Primitive, operator: Operator, value: str
    ) -> KeyTypeError | ApplyError | None:
        text = " ".join(self.expand(value))
        converted = convert_scalar(text, kind)
        if converted is None:
            return BadValue(kind)

        if operator in (Operator.EQUAL, Operator.OPTIONAL_EQUAL):
            self.set_string(name, converted)
            return None

        if name in self.arrays or name in self.maps:
            return ApplyError(name, f"cannot apply '{operator}' with a scalar to an array")
        current = self.strings.get(name)
        if current is None:
            return ApplyError(name, "variable is not defined")

        if operator.is_arithmetic:
            result = arithmetic(operator, current, converted)
            if result is None:
                return ApplyError(name, f"cannot compute '{current}' {operator} '{converted}'")
            if kind.kind is PrimitiveKind.INTEGER:
                result = convert_scalar(result, kind) or result
            self.strings[name] = result
        elif operator is Operator.CONCATENATE:
            self.strings[name] = current + converted
        elif operator is Operator.CONCATENATE_HEAD:
            self.strings[name] = converted + current
        elif operator is Operator.FILTER:
            return ApplyError(name, "filter requires an array")
        else:
            raise ValueError(f"Unhandled operator: {operator}")
        return None

    def _convert_elements(self, kind: Primitive, value: str) -> list[str] | None:
        element = kind.element if kind.is_array else kind
        converted: list[str] = []
        for word in self.expand(value):
            item = convert_scalar(word, element)
            if item is None:
                return None
            converted.append(item)
        return converted

    def _apply_array(
        self, name: str, kind: Primitive, operator: Operator, value: str
    ) -> KeyTypeError | ApplyError | None:
        elements = self._convert_elements(kind, value)
        if elements is None:
            return BadValue(kind)

        if operator in (Operator.EQUAL, Operator.OPTIONAL_EQUAL):
            self.set_array(name, elements)
            return None

        if operator.is_arithmetic:
            return ApplyError(name, f"'{operator}' is not supported on arrays")

        current = self.arrays.get(name)
        if current is None:
            if name in self.strings or name in self.maps:
                return ApplyError(name, "variable is not an array")
            current = []
            self.arrays[name] = current

        if operator is Operator.CONCATENATE:
            current.extend(elements)
        elif operator is Operator.CONCATENATE_HEAD:
            current[:0] = elements
        elif operator is Operator.FILTER:
            current[:] = [item for item in current if item not in elements]
        else:
            raise ValueError(f"Unhandled operator: {operator}")
        return None

    def _apply_map(
        self, name: str, kind: Primitive, operator: Operator, value: str
    ) -> KeyTypeError | ApplyError | None:
        entries: dict[str, str] = {}
        for word in self.expand(value):
            entry_key, sep, entry_value = word.partition("=")
            if not sep or not entry_key:
                return BadValue(kind)
            converted = convert_scalar(entry_value, kind.element)
            if converted is None:
                return BadValue(kind)
            entries[entry_key] = converted

        ordered = kind.kind is PrimitiveKind.BTREE_MAP
        if operator in (Operator.EQUAL, Operator.OPTIONAL_EQUAL):
            self.set_map(name, entries, ordered=ordered)
        elif operator is Operator.CONCATENATE:
            current = self.maps.get(name, {})
            self.set_map(name, {**current, **entries}, ordered=ordered)
        else:
            return ApplyError(name, f"'{operator}' is not supported on maps")
        return None

    def _apply_indexed(
        self, name: str, kind: Primitive, operator: Operator, value: str
    ) -> KeyTypeError | ApplyError | None:
        index = " ".join(self.expand(kind.index or ""))
        text = " ".join(self.expand(value))
        element = kind.element
        converted = convert_scalar(text, element)
        if converted is None:
            return BadValue(element)

        if name in self.maps:
            entries = self.maps[name]
            current = entries.get(index)
        elif name in self.arrays:
            items = self.arrays[name]
            position = _number(index) if _INTEGER.fullmatch(index) else None
            if position is None:
                return ApplyError(name, f"array index '{index}' is not an integer")
            if position < 0:
                position += len(items)
            if not 0 <= position < len(items):
                return ApplyError(name, f"array index '{index}' is out of range")
            current = items[position]
        else:
            return ApplyError(name, "no array or map with this name")

        if operator is Operator.OPTIONAL_EQUAL and current is not None:
            return None
        if operator in (Operator.EQUAL, Operator.OPTIONAL_EQUAL):
            result = converted
        elif current is None:
            return ApplyError(name, f"no element at '{index}'")
        elif operator.is_arithmetic:
            computed = arithmetic(operator, current, converted)
            if computed is None:
                return ApplyError(name, f"cannot compute '{current}' {operator} '{converted}'")
            result = computed
        elif operator is Operator.CONCATENATE:
            result = current + converted
        elif operator is Operator.CONCATENATE_HEAD:
            result = converted + current
        else:
            return ApplyError(name, f"'{operator}' is not supported on an element")

        if name in self.maps:
            self.maps[name][index] = result
            if name in self._ordered_maps:
                self.maps[name] = dict(sorted(self.maps[name].items()))
        else:
            self.arrays[name][position] = result
        return None
