"""Computing na*A + ng*G with windowed non-adjacent forms and a precomputed G table."""

from __future__ import annotations

from typing import Optional, Sequence, Union

from .group import (
    GENERATOR,
    GROUP_ORDER,
    AffinePoint,
    GeStorage,
    JacobianPoint,
    to_affine_batch,
)

WINDOW_A = 5
"""Window size for the variable point; suits 128- and 256-bit exponents."""

WINDOW_G = 16
"""Window size for the generator table; larger trades memory for speed."""

_MAX_WNAF_LENGTH = 256

_Point = Union[JacobianPoint, AffinePoint]


def table_size(window: int) -> int:
    """Return how many odd multiples a table for ``window`` holds."""
    _check_window(window)
    return 1 << (window - 2)


def _check_window(window: int) -> None:
    if isinstance(window, bool) or not isinstance(window, int):
        raise TypeError("window must be an int")
    if not 2 <= window <= 31:
        raise ValueError("window must lie in [2, 31]")


def _scalar(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("a scalar is an int")
    return value % GROUP_ORDER


def _wnaf_with_bits(scalar: int, length: int, window: int) -> tuple[list[int], int]:
    _check_window(window)
    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError("length must be an int")
    if not 0 <= length <= _MAX_WNAF_LENGTH:
        raise ValueError("length must lie in [0, 256]")

    s = _scalar(scalar)
    sign = 1
    if (s >> 255) & 1:
        s = GROUP_ORDER - s
        sign = -1

    digits = [0] * length
    last_set_bit = -1
    carry = 0
    bit = 0
    while bit < length:
        if (s >> bit) & 1 == carry:
            bit += 1
            continue
        now = min(window, length - bit)
        word = ((s >> bit) & ((1 << now) - 1)) + carry
        carry = (word >> (window - 1)) & 1
        word -= carry << window
        digits[bit] = sign * word
        last_set_bit = bit
        bit += now

    if carry or s >> bit:
        raise ValueError("scalar does not fit in a representation of this length")
    return digits, last_set_bit + 1


def wnaf(scalar: int, length: int, window: int) -> list[int]:
    """Return the width-``window`` NAF of ``scalar`` as ``length`` digits, lowest first.

    Every digit is zero or odd with absolute value below 2^(window-1), and two
    non-zero digits are separated by at least ``window - 1`` zeroes. The digits
    sum (weighted by powers of two) to the scalar modulo the group order.
    """
    digits, _ = _wnaf_with_bits(scalar, length, window)
    return digits


def odd_multiples_table(count: int, point: _Point) -> list[JacobianPoint]:
    """Return the odd multiples [1*P, 3*P, ..., (2*count-1)*P] of a finite point."""
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError("count must be an int")
    if count < 1:
        raise ValueError("count must be at least 1")
    if isinstance(point, AffinePoint):
        point = point.to_jacobian()
    if point.infinity:
        raise ValueError("cannot tabulate multiples of the point at infinity")

    doubled = point.double()
    table = [point]
    for _ in range(count - 1):
        table.append(table[-1].add(doubled))
    return table


def _table_get(table: Sequence[AffinePoint], digit: int) -> AffinePoint:
    if digit > 0:
        return table[(digit - 1) // 2]
    return table[(-digit - 1) // 2].negate()


class EcmultContext:
    """Holds the precomputed table of odd multiples of the generator."""

    def __init__(self, window_g: int = WINDOW_G, window_a: int = WINDOW_A) -> None:
        _check_window(window_g)
        _check_window(window_a)
        self._window_g = window_g
        self._window_a = window_a
        self._pre_g: Optional[tuple[GeStorage, ...]] = None

    @property
    def window_g(self) -> int:
        return self._window_g

    @property
    def window_a(self) -> int:
        return self._window_a

    @property
    def pre_g(self) -> Optional[tuple[GeStorage, ...]]:
        """The generator table in storage form, or None before it is built."""
        return self._pre_g

    def build(self) -> None:
        """Compute the generator table; does nothing if it is already built."""
        if self._pre_g is not None:
            return
        multiples = odd_multiples_table(table_size(self._window_g), GENERATOR)
        self._pre_g = tuple(p.to_storage() for p in to_affine_batch(multiples))

    def is_built(self) -> bool:
        return self._pre_g is not None

    def clone(self) -> "EcmultContext":
        """Return an independent context with the same windows and table."""
        other = EcmultContext(self._window_g, self._window_a)
        other._pre_g = self._pre_g
        return other

    def clear(self) -> None:
        """Drop the generator table."""
        self._pre_g = None

    def multiply(self, point: _Point, na: int, ng: int) -> JacobianPoint:
        """Return na*point + ng*G."""
        if self._pre_g is None:
            raise RuntimeError("the context's generator table has not been built")
        if isinstance(point, AffinePoint):
            point = point.to_jacobian()

        na = _scalar(na)
        ng = _scalar(ng)

        if na and not point.infinity:
            wnaf_na, bits_na = _wnaf_with_bits(na, _MAX_WNAF_LENGTH, self._window_a)
            pre_a = to_affine_batch(
                odd_multiples_table(table_size(self._window_a), point)
            )
        else:
            wnaf_na, bits_na, pre_a = [], 0, []

        wnaf_ng, bits_ng = _wnaf_with_bits(ng, _MAX_WNAF_LENGTH, self._window_g)
        pre_g = self._pre_g

        result = JacobianPoint.infinity_point()
        for i in range(max(bits_na, bits_ng) - 1, -1, -1):
            result = result.double()
            if i < bits_na and wnaf_na[i]:
                result = result.add_affine(_table_get(pre_a, wnaf_na[i]))
            if i < bits_ng and wnaf_ng[i]:
                digit = wnaf_ng[i]
                entry = pre_g[(abs(digit) - 1) // 2].to_affine()
                result = result.add_affine(entry if digit > 0 else entry.negate())
        return result


__all__ = [
    "EcmultContext",
    "WINDOW_A",
    "WINDOW_G",
    "odd_multiples_table",
    "table_size",
    "wnaf",
]