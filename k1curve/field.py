"""Arithmetic in the secp256k1 base field, integers modulo p = 2^256 - 2^32 - 977."""

from __future__ import annotations

from typing import Iterable, Optional, Union

FIELD_PRIME = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F

_SQRT_EXPONENT = (FIELD_PRIME + 1) // 4
_INVERSE_EXPONENT = FIELD_PRIME - 2
_EULER_EXPONENT = (FIELD_PRIME - 1) // 2

_Operand = Union["FieldElement", int]


def _value_of(other: _Operand) -> int:
    if isinstance(other, FieldElement):
        return other.value
    if isinstance(other, int):
        return other % FIELD_PRIME
    raise TypeError(f"cannot combine a field element with {type(other).__name__}")


class FieldElement:
    """An immutable element of the secp256k1 base field, always kept reduced."""

    __slots__ = ("_value",)

    def __init__(self, value: int = 0) -> None:
        if not isinstance(value, int):
            raise TypeError("a field element is built from an int")
        self._value = value % FIELD_PRIME

    @property
    def value(self) -> int:
        """The canonical integer in [0, p)."""
        return self._value

    @classmethod
    def from_bytes(cls, data: bytes) -> "FieldElement":
        """Parse a 32-byte big-endian value; raise ValueError if it is not below p."""
        data = bytes(data)
        if len(data) != 32:
            raise ValueError("a field element is encoded in exactly 32 bytes")
        value = int.from_bytes(data, "big")
        if value >= FIELD_PRIME:
            raise ValueError("encoded value is not below the field prime")
        return cls(value)

    def to_bytes(self) -> bytes:
        """Return the 32-byte big-endian encoding."""
        return self._value.to_bytes(32, "big")

    def is_zero(self) -> bool:
        return self._value == 0

    def is_odd(self) -> bool:
        return bool(self._value & 1)

    def compare(self, other: _Operand) -> int:
        """Return -1, 0 or 1 as this element is below, equal to or above ``other``."""
        theirs = _value_of(other)
        return (self._value > theirs) - (self._value < theirs)

    def square(self) -> "FieldElement":
        return FieldElement(self._value * self._value)

    def sqrt(self) -> Optional["FieldElement"]:
        """Return a square root that is itself a square, or None if none exists."""
        root = pow(self._value, _SQRT_EXPONENT, FIELD_PRIME)
        if root * root % FIELD_PRIME != self._value:
            return None
        return FieldElement(root)

    def inverse(self) -> "FieldElement":
        """Return the modular inverse; zero maps to zero."""
        return FieldElement(pow(self._value, _INVERSE_EXPONENT, FIELD_PRIME))

    def is_quad(self) -> bool:
        """Whether this element is a quadratic residue (zero counts as one)."""
        return pow(self._value, _EULER_EXPONENT, FIELD_PRIME) != FIELD_PRIME - 1

    def cmov(self, other: "FieldElement", flag: bool) -> "FieldElement":
        """Return ``other`` if ``flag`` is true, else this element."""
        return other if flag else self

    def __add__(self, other: _Operand) -> "FieldElement":
        return FieldElement(self._value + _value_of(other))

    __radd__ = __add__

    def __sub__(self, other: _Operand) -> "FieldElement":
        return FieldElement(self._value - _value_of(other))

    def __rsub__(self, other: _Operand) -> "FieldElement":
        return FieldElement(_value_of(other) - self._value)

    def __mul__(self, other: _Operand) -> "FieldElement":
        return FieldElement(self._value * _value_of(other))

    __rmul__ = __mul__

    def __neg__(self) -> "FieldElement":
        return FieldElement(-self._value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other % FIELD_PRIME
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __repr__(self) -> str:
        return f"FieldElement(0x{self._value:064x})"


def inverse_all(elements: Iterable[FieldElement]) -> list[FieldElement]:
    """Invert a batch of elements using a single field inversion."""
    items = list(elements)
    if not items:
        return []

    prefix = [items[0]]
    for item in items[1:]:
        prefix.append(prefix[-1] * item)

    inverse = prefix[-1].inverse()
    result: list[FieldElement] = [FieldElement()] * len(items)
    for i in range(len(items) - 1, 0, -1):
        result[i] = prefix[i - 1] * inverse
        inverse = inverse * items[i]
    result[0] = inverse
    return result