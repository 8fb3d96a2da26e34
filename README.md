# k1curve

Building blocks for the secp256k1 elliptic curve, in pure Python with no
dependencies outside the standard library.

## Modules

- `k1curve.hashing` — SHA-256 (`Sha256`, `sha256`), HMAC-SHA256
  (`HmacSha256`, `hmac_sha256`) and the RFC 6979 section 3.2 deterministic
  byte generator (`Rfc6979HmacSha256`, with `generate(length)` and
  `finalize()`).
- `k1curve.field` — `FieldElement`, an immutable integer modulo
  p = 2^256 - 2^32 - 977 with `+`, `-`, `*`, negation, `square()`, `sqrt()`,
  `inverse()`, `is_quad()`, `compare()`, `is_zero()`, `is_odd()`, and 32-byte
  big-endian `from_bytes()` / `to_bytes()`. `inverse_all()` inverts a batch
  with a single inversion.
- `k1curve.storage` — `FieldStorage`, a reduced field element packed into four
  64-bit words (`from_field`, `to_field`, `words32`), and helpers for the
  5×52-bit and 10×26-bit limb layouts: `to_limbs52`, `from_limbs52`,
  `normalize_limbs52`, `normalizes_to_zero`, `to_limbs26`, `from_limbs26`.
- `k1curve.group` — `AffinePoint` and `JacobianPoint` on y² = x³ + 7, the
  constants `GENERATOR`, `GROUP_ORDER`, `CURVE_B` and `AFFINE_INFINITY`,
  `GeStorage` for packed points, and `to_affine_batch()` for converting many
  Jacobian points with one inversion.
- `k1curve.ecmult` — `wnaf()` (windowed non-adjacent form), `table_size()`,
  `odd_multiples_table()` and `EcmultContext`, which builds a table of odd
  multiples of the generator and computes `na*P + ng*G`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Hashing:

```python
from k1curve.hashing import Rfc6979HmacSha256, hmac_sha256, sha256

digest = sha256(b"abc")
mac = hmac_sha256(b"secret", b"message")

rng = Rfc6979HmacSha256(bytes(64))
nonce = rng.generate(32)
rng.finalize()
```

Field arithmetic:

```python
from k1curve.field import FieldElement

x = FieldElement.from_bytes(bytes(31) + b"\x04")  # ValueError unless 32 bytes below p
root = x.sqrt()        # None when x has no square root
inv = x.inverse()      # the inverse of zero is zero
assert (x * inv) == 1
```

Points:

```python
from k1curve.group import GENERATOR, AffinePoint

p = GENERATOR.to_jacobian().double().add_affine(GENERATOR)   # 3*G
q = AffinePoint.from_x_odd(p.to_affine().x, odd=True)         # ValueError if no such point
```

Multiplication:

```python
from k1curve.ecmult import EcmultContext
from k1curve.group import GENERATOR

ctx = EcmultContext(window_g=8)   # the default window of 16 builds 16384 table entries
ctx.build()
result = ctx.multiply(GENERATOR, 5, 7)   # 5*G + 7*G
affine = result.to_affine()
```

`multiply` raises `RuntimeError` until `build()` has been called. Scalars are
taken modulo `GROUP_ORDER`.

## What this package does not do

It provides arithmetic primitives only. There is no key generation, no
signing or signature verification, no public-key or signature encoding, no
separate scalar type, and no command-line tool. Nothing here is constant-time,
so it should not be used to protect secrets against side-channel attacks.