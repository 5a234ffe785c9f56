"""Type tags, operators and keys for shell variable assignments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PrimitiveKind(Enum):
    """Shapes a declared assignment key can take."""

    STR = "str"
    STR_ARRAY = "[str]"
    BOOLEAN = "bool"
    BOOLEAN_ARRAY = "[bool]"
    INTEGER = "int"
    INTEGER_ARRAY = "[int]"
    FLOAT = "float"
    FLOAT_ARRAY = "[float]"
    HASH_MAP = "hmap"
    BTREE_MAP = "bmap"
    INDEXED = "indexed"


ARRAY_KINDS = frozenset({
    PrimitiveKind.STR_ARRAY,
    PrimitiveKind.BOOLEAN_ARRAY,
    PrimitiveKind.INTEGER_ARRAY,
    PrimitiveKind.FLOAT_ARRAY,
    PrimitiveKind.HASH_MAP,
    PrimitiveKind.BTREE_MAP,
})

# Kinds that accept any value text, bracketed or not
SCALAR_LIKE_KINDS = frozenset({PrimitiveKind.STR, PrimitiveKind.INDEXED})

# Element kind of each array kind (maps use their inner primitive instead)
ELEMENT_KINDS: dict[PrimitiveKind, PrimitiveKind] = {
    PrimitiveKind.STR_ARRAY: PrimitiveKind.STR,
    PrimitiveKind.BOOLEAN_ARRAY: PrimitiveKind.BOOLEAN,
    PrimitiveKind.INTEGER_ARRAY: PrimitiveKind.INTEGER,
    PrimitiveKind.FLOAT_ARRAY: PrimitiveKind.FLOAT,
}


@dataclass(frozen=True)
class Primitive:
    """A type tag: a kind plus the data some kinds carry.

    Maps carry the primitive of their values in ``inner``. Indexed keys
    (``name[index]``) carry the raw index text and the primitive of the
    element being assigned.
    """

    kind: PrimitiveKind
    inner: Primitive | None = None
    index: str | None = None

    @classmethod
    def hash_map(cls, inner: Primitive) -> Primitive:
        return cls(PrimitiveKind.HASH_MAP, inner=inner)

    @classmethod
    def btree_map(cls, inner: Primitive) -> Primitive:
        return cls(PrimitiveKind.BTREE_MAP, inner=inner)

    @classmethod
    def indexed(cls, index: str, inner: Primitive) -> Primitive:
        return cls(PrimitiveKind.INDEXED, inner=inner, index=index)

    @property
    def is_array(self) -> bool:
        """Return whether values of this type must be written as ``[...]``."""
        return self.kind in ARRAY_KINDS

    @property
    def is_map(self) -> bool:
        return self.kind in (PrimitiveKind.HASH_MAP, PrimitiveKind.BTREE_MAP)

    @property
    def is_scalar_like(self) -> bool:
        """Return whether any value text is accepted for this type."""
        return self.kind in SCALAR_LIKE_KINDS

    @property
    def element(self) -> Primitive:
        """Return the primitive of a single element of this type."""
        if self.kind in ELEMENT_KINDS:
            return Primitive(ELEMENT_KINDS[self.kind])
        if self.inner is not None:
            return self.inner
        return self

    def __str__(self) -> str:
        if self.is_map:
            return f"{self.kind.value}[{self.inner}]"
        if self.kind is PrimitiveKind.INDEXED:
            return str(self.inner)
        return self.kind.value


STR = Primitive(PrimitiveKind.STR)
STR_ARRAY = Primitive(PrimitiveKind.STR_ARRAY)
BOOLEAN = Primitive(PrimitiveKind.BOOLEAN)
BOOLEAN_ARRAY = Primitive(PrimitiveKind.BOOLEAN_ARRAY)
INTEGER = Primitive(PrimitiveKind.INTEGER)
INTEGER_ARRAY = Primitive(PrimitiveKind.INTEGER_ARRAY)
FLOAT = Primitive(PrimitiveKind.FLOAT)
FLOAT_ARRAY = Primitive(PrimitiveKind.FLOAT_ARRAY)

# Mapping from plain annotation names to primitives
PRIMITIVE_NAMES: dict[str, Primitive] = {
    p.kind.value: p
    for p in (STR, STR_ARRAY, BOOLEAN, BOOLEAN_ARRAY, INTEGER, INTEGER_ARRAY, FLOAT, FLOAT_ARRAY)
}


class Operator(Enum):
    """How an assigned value is combined with the variable's current value."""

    EQUAL = "="
    OPTIONAL_EQUAL = "?="
    ADD = "+="
    SUBTRACT = "-="
    MULTIPLY = "*="
    DIVIDE = "/="
    INTEGER_DIVIDE = "//="
    EXPONENT = "**="
    CONCATENATE = "++="
    CONCATENATE_HEAD = "::="
    FILTER = "\\\\="

    @property
    def is_arithmetic(self) -> bool:
        return self in ARITHMETIC_OPERATORS

    def __str__(self) -> str:
        return self.value


ARITHMETIC_OPERATORS = frozenset({
    Operator.ADD,
    Operator.SUBTRACT,
    Operator.MULTIPLY,
    Operator.DIVIDE,
    Operator.INTEGER_DIVIDE,
    Operator.EXPONENT,
})

# Operator token (without the trailing '=') to operator
OPERATOR_PREFIXES: dict[str, Operator] = {op.value[:-1]: op for op in Operator}


@dataclass(frozen=True)
class Key:
    """A declared assignment target."""

    name: str
    kind: Primitive = STR

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class KeyTypeError:
    """Base class for type errors reported while reading keys or values."""


@dataclass(frozen=True)
class InvalidTypeName(KeyTypeError):
    """The type annotation (or key syntax) could not be understood."""

    text: str

    def __str__(self) -> str:
        return f"invalid type supplied: {self.text}"


@dataclass(frozen=True)
class BadValue(KeyTypeError):
    """A value could not be converted to the declared type."""

    expected: Primitive

    def __str__(self) -> str:
        return f"expected {self.expected}"
