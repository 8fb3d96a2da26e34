"""Points on the secp256k1 curve y^2 = x^3 + 7 in affine and Jacobian coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from .field import FieldElement, inverse_all
from .storage import FieldStorage

CURVE_B = FieldElement(7)

GROUP_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

_Coordinate = Union[FieldElement, int]

_ZERO = FieldElement(0)
_ONE = FieldElement(1)


def _fe(value: _Coordinate) -> FieldElement:
    if isinstance(value, FieldElement):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("a coordinate is a FieldElement or an int")
    return FieldElement(value)


def _curve_rhs(x: FieldElement) -> FieldElement:
    return x.square() * x + CURVE_B


@dataclass(frozen=True)
class AffinePoint:
    """A curve point in affine coordinates, or the point at infinity."""

    x: FieldElement = _ZERO
    y: FieldElement = _ZERO
    infinity: bool = False

    def __post_init__(self) -> None:
        infinity = bool(self.infinity)
        object.__setattr__(self, "infinity", infinity)
        if infinity:
            object.__setattr__(self, "x", _ZERO)
            object.__setattr__(self, "y", _ZERO)
        else:
            object.__setattr__(self, "x", _fe(self.x))
            object.__setattr__(self, "y", _fe(self.y))

    @classmethod
    def from_x_odd(cls, x: _Coordinate, odd: bool) -> "AffinePoint":
        """Return the point with this X and a Y of the given parity.

        Raise ValueError if no point has this X coordinate.
        """
        x = _fe(x)
        y = _curve_rhs(x).sqrt()
        if y is None:
            raise ValueError("no curve point has this X coordinate")
        if y.is_odd() != bool(odd):
            y = -y
        return cls(x, y)

    @classmethod
    def from_x_quad(cls, x: _Coordinate) -> "AffinePoint":
        """Return the point with this X whose Y is a quadratic residue.

        Raise ValueError if no point has this X coordinate.
        """
        x = _fe(x)
        y = _curve_rhs(x).sqrt()
        if y is None:
            raise ValueError("no curve point has this X coordinate")
        return cls(x, y)

    def is_valid(self) -> bool:
        """Whether this is a finite point that lies on the curve."""
        if self.infinity:
            return False
        return self.y.square() == _curve_rhs(self.x)

    def negate(self) -> "AffinePoint":
        """Return the point mirrored in the X axis."""
        if self.infinity:
            return self
        return AffinePoint(self.x, -self.y)

    def to_jacobian(self) -> "JacobianPoint":
        """Return the same point in Jacobian coordinates with Z = 1."""
        if self.infinity:
            return JacobianPoint.infinity_point()
        return JacobianPoint(self.x, self.y, _ONE)

    def to_storage(self) -> "GeStorage":
        """Pack a finite point into storage form."""
        if self.infinity:
            raise ValueError("the point at infinity has no storage form")
        return GeStorage(FieldStorage.from_field(self.x), FieldStorage.from_field(self.y))


AFFINE_INFINITY = AffinePoint(infinity=True)

GENERATOR = AffinePoint(
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)


def _jacobian_add(
    x1: FieldElement, y1: FieldElement, z1: FieldElement,
    x2: FieldElement, y2: FieldElement, z2: FieldElement,
) -> "JacobianPoint | None":
    """Add two finite points; return None when they are equal (caller doubles)."""
    z1z1 = z1.square()
    z2z2 = z2.square()
    u1 = x1 * z2z2
    u2 = x2 * z1z1
    s1 = y1 * z2z2 * z2
    s2 = y2 * z1z1 * z1
    h = u2 - u1
    i = s2 - s1
    if h.is_zero():
        if i.is_zero():
            return None
        return JacobianPoint.infinity_point()
    h2 = h.square()
    h3 = h2 * h
    t = u1 * h2
    x3 = i.square() - h3 - t - t
    y3 = i * (t - x3) - h3 * s1
    z3 = z1 * z2 * h
    return JacobianPoint(x3, y3, z3)


@dataclass(frozen=True)
class JacobianPoint:
    """A curve point (x/z^2, y/z^3) in Jacobian coordinates, or infinity."""

    x: FieldElement = _ZERO
    y: FieldElement = _ZERO
    z: FieldElement = _ONE
    infinity: bool = False

    def __post_init__(self) -> None:
        infinity = bool(self.infinity)
        object.__setattr__(self, "infinity", infinity)
        if infinity:
            object.__setattr__(self, "x", _ZERO)
            object.__setattr__(self, "y", _ZERO)
            object.__setattr__(self, "z", _ZERO)
        else:
            object.__setattr__(self, "x", _fe(self.x))
            object.__setattr__(self, "y", _fe(self.y))
            object.__setattr__(self, "z", _fe(self.z))

    @classmethod
    def infinity_point(cls) -> "JacobianPoint":
        """Return the point at infinity."""
        return cls(infinity=True)

    def to_affine(self) -> AffinePoint:
        """Convert to affine coordinates."""
        if self.infinity:
            return AFFINE_INFINITY
        return self._with_zinv(self.z.inverse())

    def _with_zinv(self, zinv: FieldElement) -> AffinePoint:
        zinv2 = zinv.square()
        return AffinePoint(self.x * zinv2, self.y * zinv2 * zinv)

    def negate(self) -> "JacobianPoint":
        """Return the point mirrored in the X axis."""
        if self.infinity:
            return self
        return JacobianPoint(self.x, -self.y, self.z)

    def double(self) -> "JacobianPoint":
        """Return twice this point."""
        if self.infinity or self.y.is_zero():
            return JacobianPoint.infinity_point()
        y2 = self.y.square()
        s = self.x * y2 * 4
        m = self.x.square() * 3
        x3 = m.square() - s - s
        y3 = m * (s - x3) - y2.square() * 8
        z3 = self.y * self.z * 2
        return JacobianPoint(x3, y3, z3)

    def add(self, other: "JacobianPoint") -> "JacobianPoint":
        """Return the sum with another Jacobian point."""
        if self.infinity:
            return other
        if other.infinity:
            return self
        result = _jacobian_add(self.x, self.y, self.z, other.x, other.y, other.z)
        return self.double() if result is None else result

    def add_affine(self, other: AffinePoint) -> "JacobianPoint":
        """Return the sum with an affine point."""
        if other.infinity:
            return self
        if self.infinity:
            return other.to_jacobian()
        result = _jacobian_add(self.x, self.y, self.z, other.x, other.y, _ONE)
        return self.double() if result is None else result

    def add_zinv(self, other: AffinePoint, bzinv: _Coordinate) -> "JacobianPoint":
        """Return the sum with the point whose Jacobian X, Y are ``other`` and Z is 1/``bzinv``."""
        if other.infinity:
            return self
        bzinv = _fe(bzinv)
        bzinv2 = bzinv.square()
        actual = AffinePoint(other.x * bzinv2, other.y * bzinv2 * bzinv)
        return self.add_affine(actual)

    def rescale(self, factor: _Coordinate) -> "JacobianPoint":
        """Return the same point with Z multiplied by a non-zero ``factor``."""
        factor = _fe(factor)
        if factor.is_zero():
            raise ValueError("rescale factor must be non-zero")
        if self.infinity:
            return self
        f2 = factor.square()
        return JacobianPoint(self.x * f2, self.y * f2 * factor, self.z * factor)

    def eq_x(self, x: _Coordinate) -> bool:
        """Whether the affine X coordinate of this point equals ``x``."""
        if self.infinity:
            raise ValueError("the point at infinity has no X coordinate")
        return _fe(x) * self.z.square() == self.x

    def has_quad_y(self) -> bool:
        """Whether the affine Y coordinate is a quadratic residue."""
        if self.infinity:
            return False
        # y/z^3 is a residue exactly when y*z is, since they differ by z^4.
        return (self.y * self.z).is_quad()


@dataclass(frozen=True)
class GeStorage:
    """A finite point packed as two storage field elements."""

    x: FieldStorage
    y: FieldStorage

    def to_affine(self) -> AffinePoint:
        """Unpack into an affine point."""
        return AffinePoint(self.x.to_field(), self.y.to_field())

    def cmov(self, other: "GeStorage", flag: bool) -> "GeStorage":
        """Return ``other`` if ``flag`` is true, else this value."""
        return other if flag else self


def to_affine_batch(points: Iterable[JacobianPoint]) -> list[AffinePoint]:
    """Convert many Jacobian points to affine form using one field inversion."""
    items = list(points)
    finite = [p for p in items if not p.infinity]
    inverses = iter(inverse_all(p.z for p in finite))
    return [
        AFFINE_INFINITY if p.infinity else p._with_zinv(next(inverses))
        for p in items
    ]


__all__ = [
    "AFFINE_INFINITY",
    "AffinePoint",
    "CURVE_B",
    "GENERATOR",
    "GROUP_ORDER",
    "GeStorage",
    "JacobianPoint",
    "to_affine_batch",
]