import pytest
from hypothesis import given, strategies as st

from k1curve.field import FIELD_PRIME, FieldElement, inverse_all

PRIME_BYTES = bytes.fromhex(
    "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F"
)

values = st.integers(min_value=0, max_value=FIELD_PRIME - 1)
nonzero = st.integers(min_value=1, max_value=FIELD_PRIME - 1)


def test_prime_constant_matches_encoding():
    assert FIELD_PRIME.to_bytes(32, "big") == PRIME_BYTES


def test_from_bytes_rejects_prime_and_above():
    with pytest.raises(ValueError):
        FieldElement.from_bytes(PRIME_BYTES)
    with pytest.raises(ValueError):
        FieldElement.from_bytes(b"\xff" * 32)


def test_from_bytes_rejects_wrong_length():
    with pytest.raises(ValueError):
        FieldElement.from_bytes(b"\x01" * 31)


def test_from_bytes_accepts_prime_minus_one():
    data = (FIELD_PRIME - 1).to_bytes(32, "big")
    assert FieldElement.from_bytes(data).value == FIELD_PRIME - 1


@given(values)
def test_bytes_round_trip(v):
    element = FieldElement(v)
    assert FieldElement.from_bytes(element.to_bytes()) == element
    assert len(element.to_bytes()) == 32


def test_reduction_and_parity():
    assert FieldElement(FIELD_PRIME).is_zero()
    assert FieldElement(FIELD_PRIME + 3).value == 3
    assert FieldElement(3).is_odd()
    assert not FieldElement(4).is_odd()


def test_compare():
    a, b = FieldElement(5), FieldElement(9)
    assert a.compare(b) == -1
    assert b.compare(a) == 1
    assert a.compare(FieldElement(5)) == 0


@given(nonzero)
def test_inverse(v):
    element = FieldElement(v)
    assert element * element.inverse() == FieldElement(1)


def test_inverse_of_zero_is_zero():
    assert FieldElement(0).inverse().is_zero()


@given(values)
def test_sqrt_of_square(v):
    element = FieldElement(v)
    square = element.square()
    root = square.sqrt()
    assert root is not None
    assert root.square() == square
    assert root in (element, -element)
    assert root.is_quad()


@given(nonzero)
def test_sqrt_fails_for_non_residue_negation(v):
    square = FieldElement(v).square()
    negated = -square
    assert negated.sqrt() is None
    assert not negated.is_quad()


@given(values)
def test_is_quad_agrees_with_sqrt(v):
    element = FieldElement(v)
    assert element.is_quad() == (element.sqrt() is not None)


def test_minus_one_has_no_root():
    assert FieldElement(-1).sqrt() is None


@given(st.lists(nonzero, min_size=1, max_size=8))
def test_inverse_all_matches_individual(vs):
    elements = [FieldElement(v) for v in vs]
    assert inverse_all(elements) == [e.inverse() for e in elements]


def test_inverse_all_empty():
    assert inverse_all([]) == []


def test_cmov():
    a, b = FieldElement(1), FieldElement(2)
    assert a.cmov(b, True) == b
    assert a.cmov(b, False) == a


@given(values, values)
def test_arithmetic_consistency(x, y):
    a, b = FieldElement(x), FieldElement(y)
    assert (a + b) - b == a
    assert a - a == FieldElement(0)
    assert a + (-a) == FieldElement(0)
    assert a * b == b * a
    assert a.square() == a * a


def test_combining_with_non_int_raises():
    with pytest.raises(TypeError):
        FieldElement(1) + 1.5