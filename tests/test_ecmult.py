import pytest
from hypothesis import given, settings, strategies as st

from k1curve.ecmult import EcmultContext, odd_multiples_table, table_size, wnaf
from k1curve.group import GENERATOR, GROUP_ORDER, AffinePoint, JacobianPoint

scalars = st.integers(min_value=0, max_value=GROUP_ORDER - 1)
windows = st.integers(min_value=2, max_value=16)


@pytest.fixture(scope="module")
def ctx():
    context = EcmultContext(window_g=6)
    context.build()
    return context


def _affine(p):
    return p.to_affine()


@given(scalars, windows)
@settings(max_examples=60, deadline=None)
def test_wnaf_reconstructs_scalar(scalar, window):
    digits = wnaf(scalar, 256, window)
    assert len(digits) == 256
    total = sum(d << i for i, d in enumerate(digits))
    assert total % GROUP_ORDER == scalar


@given(scalars, windows)
@settings(max_examples=60, deadline=None)
def test_wnaf_digit_properties(scalar, window):
    digits = wnaf(scalar, 256, window)
    nonzero = [i for i, d in enumerate(digits) if d]
    for i in nonzero:
        assert digits[i] % 2 == 1
        assert abs(digits[i]) <= (1 << (window - 1)) - 1
    for a, b in zip(nonzero, nonzero[1:]):
        assert b - a >= window


def test_wnaf_small_values():
    assert wnaf(0, 256, 5) == [0] * 256
    one = wnaf(1, 256, 5)
    assert one[0] == 1 and not any(one[1:])
    minus_one = wnaf(GROUP_ORDER - 1, 256, 5)
    assert minus_one[0] == -1 and not any(minus_one[1:])


def test_wnaf_errors():
    with pytest.raises(ValueError):
        wnaf(5, 256, 1)
    with pytest.raises(ValueError):
        wnaf(5, 257, 5)
    with pytest.raises(ValueError):
        wnaf(1 << 20, 16, 5)


def test_table_size():
    assert table_size(5) == 8
    assert table_size(2) == 1
    with pytest.raises(ValueError):
        table_size(32)


def test_odd_multiples_table_steps_by_double():
    table = odd_multiples_table(6, GENERATOR)
    assert len(table) == 6
    assert _affine(table[0]) == GENERATOR
    step = GENERATOR.to_jacobian().double()
    for prev, nxt in zip(table, table[1:]):
        assert _affine(prev.add(step)) == _affine(nxt)


def test_odd_multiples_table_errors():
    with pytest.raises(ValueError):
        odd_multiples_table(4, JacobianPoint.infinity_point())
    with pytest.raises(ValueError):
        odd_multiples_table(0, GENERATOR)


def test_context_lifecycle():
    context = EcmultContext(window_g=4)
    assert not context.is_built()
    with pytest.raises(RuntimeError):
        context.multiply(GENERATOR, 1, 1)
    context.build()
    assert context.is_built()
    assert len(context.pre_g) == 4
    assert context.pre_g[0].to_affine() == GENERATOR
    copy = context.clone()
    context.clear()
    assert not context.is_built()
    assert copy.is_built()
    assert _affine(copy.multiply(GENERATOR, 0, 1)) == GENERATOR


def test_multiply_simple_cases(ctx):
    g = GENERATOR.to_jacobian()
    assert _affine(ctx.multiply(g, 1, 0)) == GENERATOR
    assert _affine(ctx.multiply(g, 2, 0)) == _affine(g.double())
    assert _affine(ctx.multiply(g, 0, 3)) == _affine(g.double().add_affine(GENERATOR))
    assert _affine(ctx.multiply(g, GROUP_ORDER - 1, 0)) == GENERATOR.negate()
    assert ctx.multiply(g, 0, 0).infinity
    assert ctx.multiply(g, 1, GROUP_ORDER - 1).infinity


def test_multiply_infinite_point(ctx):
    result = ctx.multiply(JacobianPoint.infinity_point(), 12345, 7)
    assert _affine(result) == _affine(ctx.multiply(GENERATOR, 0, 7))


@given(scalars, scalars)
@settings(max_examples=15, deadline=None)
def test_multiply_linearity(ctx, a, b):
    g = GENERATOR.to_jacobian()
    combined = ctx.multiply(g, a, b)
    assert _affine(combined) == _affine(ctx.multiply(g, (a + b) % GROUP_ORDER, 0))
    assert _affine(combined) == _affine(ctx.multiply(g, 0, a + b))


@given(scalars, scalars, st.integers(min_value=1, max_value=GROUP_ORDER - 1))
@settings(max_examples=10, deadline=None)
def test_multiply_other_point(ctx, a, b, k):
    point = ctx.multiply(GENERATOR, 0, k)
    combined = ctx.multiply(point, a, b)
    expected = ctx.multiply(GENERATOR, 0, (a * k + b) % GROUP_ORDER)
    assert _affine(combined) == _affine(expected)
    rescaled = point.rescale(5)
    assert _affine(ctx.multiply(rescaled, a, b)) == _affine(expected)


def test_multiply_result_on_curve(ctx):
    result = _affine(ctx.multiply(GENERATOR, 0xDEADBEEF, 0xC0FFEE))
    assert isinstance(result, AffinePoint)
    assert result.is_valid()