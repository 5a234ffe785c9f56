"""Pair declared keys with supplied values and validate each pairing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from shellvars.parsing.argument_splitter import ArgumentSplitter
from shellvars.parsing.key_lexer import KeyIterator
from shellvars.types import STR, STR_ARRAY, InvalidTypeName, Key, KeyTypeError, Operator, Primitive


def is_array(value: str) -> bool:
    """Return whether ``value`` is written as a bracketed array, ``[...]``.

    The bracket opened by the first character must be the one closed by
    the last character, so ``[a] [b]`` is not an array.
    """
    if not (value.startswith("[") and value.endswith("]")):
        return False
    depth = 0
    for i, ch in enumerate(value):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return i == len(value) - 1
    return False


# ---- Outcomes ----


@dataclass(frozen=True)
class Action:
    """Instruction to store ``value`` under ``key``, combined via ``operator``."""

    key: Key
    operator: Operator
    value: str


@dataclass(frozen=True)
class AssignmentError:
    """Base class for problems found while pairing keys and values."""


@dataclass(frozen=True)
class InvalidValue(AssignmentError):
    expected: Primitive
    actual: Primitive

    def __str__(self) -> str:
        return f"expected {self.expected}, but received {self.actual}"


@dataclass(frozen=True)
class InvalidType(AssignmentError):
    """A key declaration the key lexer rejected."""

    error: KeyTypeError

    def __str__(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class ExtraValues(AssignmentError):
    prev_key: str
    prev_value: str

    def __str__(self) -> str:
        return (
            "extra values were supplied, and thus ignored. "
            f"Previous assignment: '{self.prev_key}' = '{self.prev_value}'"
        )


@dataclass(frozen=True)
class ExtraKeys(AssignmentError):
    prev_key: str
    prev_value: str

    def __str__(self) -> str:
        return (
            "extra keys were supplied, and thus ignored. "
            f"Previous assignment: '{self.prev_key}' = '{self.prev_value}'"
        )


@dataclass(frozen=True)
class RepeatedKey(AssignmentError):
    key: str

    def __str__(self) -> str:
        return f"repeated assignment to same key, and thus ignored. Repeated key: '{self.key}'"


@dataclass(frozen=True)
class NoKey(AssignmentError):
    value: str

    def __str__(self) -> str:
        return f"no key to assign value, thus ignored. Value: '{self.value}'"


Outcome = Union[Action, AssignmentError]


def check_value(key: Key, operator: Operator, value: str) -> Outcome:
    """Check that the shape of ``value`` matches the shape ``key`` declares."""
    kind = key.kind
    if kind.is_scalar_like:
        return Action(key, operator, value)
    if kind.is_array:
        if is_array(value):
            return Action(key, operator, value)
        return InvalidValue(kind, STR)
    if not is_array(value):
        return Action(key, operator, value)
    return InvalidValue(kind, STR_ARRAY)


class AssignmentActions:
    """Iterator over the outcomes of one assignment statement.

    Keys and values are pulled in lockstep, so a statement produces
    ``max(#keys, #values)`` outcomes. Each outcome is either an
    :class:`Action` for the caller to apply or an :class:`AssignmentError`
    describing a pairing that was rejected. Errors never end the stream.
    """

    def __init__(self, keys: str, operator: Operator, values: str) -> None:
        self.keys = KeyIterator(keys)
        self.operator = operator
        self.values = ArgumentSplitter(values)
        self.prevkeys: list[str] = []
        self.prevval = ""

    def __iter__(self) -> AssignmentActions:
        return self

    def __next__(self) -> Outcome:
        key = next(self.keys, None)
        value = next(self.values, None)

        if key is not None and value is not None:
            if isinstance(key, KeyTypeError):
                return InvalidType(key)
            if key.name in self.prevkeys:
                return RepeatedKey(key.name)
            self.prevkeys.append(key.name)
            self.prevval = value
            return check_value(key, self.operator, value)

        if value is not None:
            if self.prevkeys:
                return ExtraValues(self.prevkeys[-1], self.prevval)
            return NoKey(value)

        if key is not None:
            if self.prevkeys:
                return ExtraKeys(self.prevkeys[-1], self.prevval)
            # Nothing was assigned before the surplus key; report the key itself
            if isinstance(key, Key):
                name = key.name
            elif isinstance(key, InvalidTypeName):
                name = key.text
            else:
                name = str(key)
            return ExtraKeys(name, "")

        raise StopIteration
