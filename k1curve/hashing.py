"""SHA-256, HMAC-SHA256 and the RFC 6979 HMAC-SHA256 deterministic generator."""

from __future__ import annotations

import struct

_MASK32 = 0xFFFFFFFF

_INITIAL_STATE = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

_ROUND_CONSTANTS = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3, 0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC, 0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13, 0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3, 0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208, 0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

_BLOCK_SIZE = 64
_DIGEST_SIZE = 32


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK32


def _transform(state: list[int], block: bytes) -> None:
    """Process one 64-byte block into the eight-word state in place."""
    w = list(struct.unpack(">16I", block))
    for t in range(16, 64):
        s0 = _rotr(w[t - 15], 7) ^ _rotr(w[t - 15], 18) ^ (w[t - 15] >> 3)
        s1 = _rotr(w[t - 2], 17) ^ _rotr(w[t - 2], 19) ^ (w[t - 2] >> 10)
        w.append((w[t - 16] + s0 + w[t - 7] + s1) & _MASK32)

    a, b, c, d, e, f, g, h = state
    for k, wt in zip(_ROUND_CONSTANTS, w):
        big_s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
        ch = g ^ (e & (f ^ g))
        t1 = (h + big_s1 + ch + k + wt) & _MASK32
        big_s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
        maj = (a & b) | (c & (a | b))
        t2 = (big_s0 + maj) & _MASK32
        h, g, f = g, f, e
        e = (d + t1) & _MASK32
        d, c, b = c, b, a
        a = (t1 + t2) & _MASK32

    for i, value in enumerate((a, b, c, d, e, f, g, h)):
        state[i] = (state[i] + value) & _MASK32


class Sha256:
    """Incremental SHA-256 hash."""

    digest_size = _DIGEST_SIZE
    block_size = _BLOCK_SIZE

    def __init__(self, data: bytes = b"") -> None:
        self._state = list(_INITIAL_STATE)
        self._buffer = bytearray()
        self._length = 0
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        """Feed more bytes into the hash."""
        self._buffer += data
        self._length += len(data)
        full = len(self._buffer) - len(self._buffer) % _BLOCK_SIZE
        if full:
            view = memoryview(self._buffer)
            for start in range(0, full, _BLOCK_SIZE):
                _transform(self._state, bytes(view[start:start + _BLOCK_SIZE]))
            view.release()
            del self._buffer[:full]

    def _copy(self) -> "Sha256":
        other = Sha256()
        other._state = list(self._state)
        other._buffer = bytearray(self._buffer)
        other._length = self._length
        return other

    def digest(self) -> bytes:
        """Return the 32-byte digest of everything fed so far."""
        state = list(self._state)
        pad_len = 1 + (119 - self._length % 64) % 64
        tail = bytes(self._buffer) + b"\x80" + bytes(pad_len - 1)
        tail += ((self._length << 3) & 0xFFFFFFFFFFFFFFFF).to_bytes(8, "big")
        for start in range(0, len(tail), _BLOCK_SIZE):
            _transform(state, tail[start:start + _BLOCK_SIZE])
        return struct.pack(">8I", *state)


class HmacSha256:
    """Incremental HMAC-SHA256."""

    digest_size = _DIGEST_SIZE

    def __init__(self, key: bytes, data: bytes = b"") -> None:
        key = bytes(key)
        if len(key) > _BLOCK_SIZE:
            key = Sha256(key).digest()
        rkey = key.ljust(_BLOCK_SIZE, b"\x00")
        self._outer = Sha256(bytes(byte ^ 0x5C for byte in rkey))
        self._inner = Sha256(bytes(byte ^ 0x36 for byte in rkey))
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        """Feed more message bytes into the MAC."""
        self._inner.update(data)

    def digest(self) -> bytes:
        """Return the 32-byte MAC of everything fed so far."""
        outer = self._outer._copy()
        outer.update(self._inner.digest())
        return outer.digest()


def sha256(data: bytes) -> bytes:
    """Return the SHA-256 digest of ``data``."""
    return Sha256(data).digest()


def hmac_sha256(key: bytes, data: bytes) -> bytes:
    """Return the HMAC-SHA256 of ``data`` under ``key``."""
    return HmacSha256(key, data).digest()


class Rfc6979HmacSha256:
    """Deterministic byte generator following RFC 6979 section 3.2."""

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        v = b"\x01" * 32
        k = b"\x00" * 32
        k = hmac_sha256(k, v + b"\x00" + key)
        v = hmac_sha256(k, v)
        k = hmac_sha256(k, v + b"\x01" + key)
        v = hmac_sha256(k, v)
        self._k = k
        self._v = v
        self._retry = False

    def generate(self, length: int) -> bytes:
        """Return the next ``length`` bytes of output."""
        if length < 0:
            raise ValueError("length must not be negative")
        if self._retry:
            self._k = hmac_sha256(self._k, self._v + b"\x00")
            self._v = hmac_sha256(self._k, self._v)

        chunks = []
        remaining = length
        while remaining > 0:
            self._v = hmac_sha256(self._k, self._v)
            now = min(remaining, 32)
            chunks.append(self._v[:now])
            remaining -= now

        self._retry = True
        return b"".join(chunks)

    def finalize(self) -> None:
        """Wipe the generator state."""
        self._k = bytes(32)
        self._v = bytes(32)
        self._retry = False