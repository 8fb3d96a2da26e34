"""Pure-Python secp256k1 hashing, field, point and multiplication primitives."""

__version__ = "0.1.0"
__all__ = ["hashing", "field", "storage", "group", "ecmult"]