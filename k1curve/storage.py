"""Limb representations of field elements and their compact storage form.

A field element can be held as five 52-bit limbs (the top one 48 bits) or as
ten 26-bit limbs (the top one 22 bits). Limbs may be larger than their
nominal width, which is how sums are held before they are normalized. The
storage form packs a reduced element into four 64-bit words.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from .field import FIELD_PRIME, FieldElement

_M52 = 0xFFFFFFFFFFFFF
_M48 = 0x0FFFFFFFFFFFF
_M26 = 0x3FFFFFF
_M22 = 0x03FFFFF
_M64 = 0xFFFFFFFFFFFFFFFF
_M32 = 0xFFFFFFFF

# 2^256 mod p, the factor that folds bits above 256 back into the low limb.
_FOLD = 0x1000003D1
# Low limb of p in the 5x52 form.
_P0 = 0xFFFFEFFFFFC2F

_Value = Union[FieldElement, int]


def _as_int(value: _Value) -> int:
    if isinstance(value, FieldElement):
        return value.value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("expected a FieldElement or an int")
    if not 0 <= value < 1 << 256:
        raise ValueError("value must lie in [0, 2^256)")
    return value


def _checked(limbs: Iterable[int], count: int, word_bits: int) -> list[int]:
    items = list(limbs)
    if len(items) != count:
        raise ValueError(f"expected {count} limbs, got {len(items)}")
    limit = 1 << word_bits
    for limb in items:
        if isinstance(limb, bool) or not isinstance(limb, int):
            raise TypeError("limbs must be ints")
        if not 0 <= limb < limit:
            raise ValueError(f"limb out of range for a {word_bits}-bit word")
    return items


def _first_pass(limbs: Iterable[int]) -> list[int]:
    """Fold bits above 2^256 into the low limb and propagate carries once."""
    t = _checked(limbs, 5, 64)
    x = t[4] >> 48
    t[4] &= _M48
    t[0] += x * _FOLD
    for i in range(4):
        t[i + 1] += t[i] >> 52
        t[i] &= _M52
    if t[4] >> 49:
        raise ValueError("limbs exceed the magnitude a single pass can reduce")
    return t


def to_limbs52(value: _Value) -> tuple[int, int, int, int, int]:
    """Split a value below 2^256 into five 52-bit limbs, least significant first."""
    v = _as_int(value)
    return (
        v & _M52,
        (v >> 52) & _M52,
        (v >> 104) & _M52,
        (v >> 156) & _M52,
        v >> 208,
    )


def from_limbs52(limbs: Sequence[int]) -> FieldElement:
    """Return the field element that five 52-bit limbs represent."""
    items = _checked(limbs, 5, 64)
    return FieldElement(sum(limb << (52 * i) for i, limb in enumerate(items)))


def normalize_limbs52(limbs: Sequence[int]) -> tuple[int, int, int, int, int]:
    """Fully reduce five 52-bit limbs to the canonical limbs of a value below p."""
    t = _first_pass(limbs)
    m = t[1] & t[2] & t[3]
    x = (t[4] >> 48) | int(t[4] == _M48 and m == _M52 and t[0] >= _P0)
    t[0] += x * _FOLD
    for i in range(4):
        t[i + 1] += t[i] >> 52
        t[i] &= _M52
    t[4] &= _M48
    return tuple(t)  # type: ignore[return-value]


def normalizes_to_zero(limbs: Sequence[int]) -> bool:
    """Whether five 52-bit limbs represent zero modulo p."""
    t = _first_pass(limbs)
    z0 = t[0] | t[1] | t[2] | t[3] | t[4]
    z1 = (t[0] ^ 0x1000003D0) & t[1] & t[2] & t[3] & (t[4] ^ 0xF000000000000)
    return z0 == 0 or z1 == _M52


def to_limbs26(value: _Value) -> tuple[int, ...]:
    """Split a value below 2^256 into ten 26-bit limbs, least significant first."""
    v = _as_int(value)
    low = tuple((v >> (26 * i)) & _M26 for i in range(9))
    return low + (v >> 234,)


def from_limbs26(limbs: Sequence[int]) -> FieldElement:
    """Return the field element that ten 26-bit limbs represent."""
    items = _checked(limbs, 10, 32)
    return FieldElement(sum(limb << (26 * i) for i, limb in enumerate(items)))


@dataclass(frozen=True)
class FieldStorage:
    """A field element packed into four 64-bit words, least significant first."""

    words: tuple[int, int, int, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "words", tuple(_checked(self.words, 4, 64)))

    @classmethod
    def from_field(cls, element: FieldElement) -> "FieldStorage":
        """Pack a field element."""
        if not isinstance(element, FieldElement):
            raise TypeError("expected a FieldElement")
        v = element.value
        return cls(tuple((v >> (64 * i)) & _M64 for i in range(4)))  # type: ignore[arg-type]

    def to_field(self) -> FieldElement:
        """Unpack into a field element."""
        return FieldElement(sum(word << (64 * i) for i, word in enumerate(self.words)))

    @property
    def words32(self) -> tuple[int, ...]:
        """The same value as eight 32-bit words, least significant first."""
        return tuple(
            (word >> shift) & _M32 for word in self.words for shift in (0, 32)
        )

    def cmov(self, other: "FieldStorage", flag: bool) -> "FieldStorage":
        """Return ``other`` if ``flag`` is true, else this storage value."""
        return other if flag else self


__all__ = [
    "FieldStorage",
    "from_limbs26",
    "from_limbs52",
    "normalize_limbs52",
    "normalizes_to_zero",
    "to_limbs26",
    "to_limbs52",
    "FIELD_PRIME",
]