"""
Hashing - the fast 64-bit hash shared by the accumulator and the checker

Both ZobristHashSet and BoundedMembershipChecker map an element to a
64-bit integer through the same path:

    key → encode_key(key) → bytes → murmur_hash64a(bytes, seed) → int

so the checker's probe key for an element is exactly the contribution
that element makes to the fingerprint.

Key Encoding:
    Each value is written as a one-byte type tag followed by its payload.
    Variable-length payloads carry a length prefix, so containers are
    unambiguous: (1, 23) and (12, 3) never share an encoding, nor do
    1, "1" and b"1".

    Numbers follow Python equality: True, 1, 1.0, Fraction(1), Decimal(1),
    1+0j and np.int64(1) encode identically, because a Python set treats
    them as one element. Finite reals are written as an exact ratio, so
    0.5 and Fraction(1, 2) agree as well.

    Object-dtype numpy arrays are encoded item by item; other arrays as
    dtype, shape and raw bytes.

Hash Configuration:
    HashConfig is the single source of truth for the seed:

        from .hashing import HashConfig, DEFAULT_HASH_CONFIG

        h = DEFAULT_HASH_CONFIG.hash((3, 4, "rook"))

    This is NOT a cryptographic hash. Collisions are possible and are
    neither detected nor reported.
"""

from __future__ import annotations
from typing import Any, List, Optional
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from decimal import Decimal
import math
import numbers
import struct

import numpy as np

from .constants import MASK64, SEED


# =============================================================================
# MURMURHASH64A
# =============================================================================

def murmur_hash64a(data: bytes, seed: int = 0) -> int:
    """
    MurmurHash64A over a byte string.

    Args:
        data: Bytes to hash
        seed: 64-bit seed value

    Returns:
        64-bit unsigned hash value
    """
    M = 0xc6a4a7935bd1e995
    R = 47

    length = len(data)
    h = ((seed & MASK64) ^ (length * M)) & MASK64

    # 8-byte blocks
    nblocks = length // 8
    for (k,) in struct.iter_unpack('<Q', data[:nblocks * 8]):
        k = (k * M) & MASK64
        k ^= (k >> R)
        k = (k * M) & MASK64
        h ^= k
        h = (h * M) & MASK64

    # Tail, little-endian
    tail = data[nblocks * 8:]
    if tail:
        for i in range(len(tail) - 1, -1, -1):
            h ^= tail[i] << (8 * i)
        h = (h * M) & MASK64

    # Finalize
    h ^= (h >> R)
    h = (h * M) & MASK64
    h ^= (h >> R)

    return h


# =============================================================================
# KEY ENCODING
# =============================================================================

_TAG_NONE = b'N'
_TAG_INT = b'I'
_TAG_FLOAT = b'F'
_TAG_RATIO = b'Q'
_TAG_COMPLEX = b'C'
_TAG_STR = b'S'
_TAG_BYTES = b'B'
_TAG_ENUM = b'E'
_TAG_TUPLE = b'T'
_TAG_LIST = b'L'
_TAG_SET = b'Z'
_TAG_ARRAY = b'A'
_TAG_DATACLASS = b'D'
_TAG_OBJECT = b'O'


def _length(n: int) -> bytes:
    return struct.pack('<Q', n)


def _qualified_name(cls: type) -> bytes:
    return f"{cls.__module__}.{cls.__qualname__}".encode('utf-8')


def _encode_int(n: int, out: List[bytes]):
    raw = n.to_bytes(n.bit_length() // 8 + 1, 'little', signed=True)
    out.append(_TAG_INT)
    out.append(_length(len(raw)))
    out.append(raw)


def _encode_sized(tag: bytes, payload: bytes, out: List[bytes]):
    out.append(tag)
    out.append(_length(len(payload)))
    out.append(payload)


def _encode_real(n: int, d: int, out: List[bytes]):
    # Exact ratio n/d in lowest terms: 0.5, Fraction(1, 2) and Decimal("0.5") agree
    if d == 1:
        _encode_int(n, out)
    else:
        out.append(_TAG_RATIO)
        _encode_int(n, out)
        _encode_int(d, out)


def _encode_nonfinite(value: float, out: List[bytes]):
    out.append(_TAG_FLOAT)
    out.append(struct.pack('<d', value))


def _encode(key: Any, out: List[bytes]):
    if key is None:
        out.append(_TAG_NONE)
    elif isinstance(key, Enum):
        # Before int: IntEnum members are ints too
        _encode_sized(_TAG_ENUM, _qualified_name(type(key)), out)
        _encode(key.value, out)
    elif isinstance(key, np.generic):
        # Before float: np.float64 is a float subclass
        value = key.item()
        if isinstance(value, np.generic):
            # No Python equivalent (np.longdouble): keep dtype and raw bytes
            _encode(np.asarray(key), out)
        else:
            _encode(value, out)
    elif isinstance(key, numbers.Integral):
        _encode_int(int(key), out)
    elif isinstance(key, float):
        if math.isfinite(key):
            _encode_real(*key.as_integer_ratio(), out)
        else:
            _encode_nonfinite(key, out)
    elif isinstance(key, Decimal):
        if key.is_finite():
            _encode_real(*key.as_integer_ratio(), out)
        else:
            _encode_nonfinite(math.nan if key.is_nan() else float(key), out)
    elif isinstance(key, numbers.Rational):
        _encode_real(int(key.numerator), int(key.denominator), out)
    elif isinstance(key, numbers.Complex):
        if key.imag == 0:
            _encode(key.real, out)
        else:
            out.append(_TAG_COMPLEX)
            _encode(key.real, out)
            _encode(key.imag, out)
    elif isinstance(key, str):
        _encode_sized(_TAG_STR, key.encode('utf-8', 'surrogatepass'), out)
    elif isinstance(key, (bytes, bytearray, memoryview)):
        _encode_sized(_TAG_BYTES, bytes(key), out)
    elif isinstance(key, tuple):
        out.append(_TAG_TUPLE)
        out.append(_length(len(key)))
        for item in key:
            _encode(item, out)
    elif isinstance(key, list):
        out.append(_TAG_LIST)
        out.append(_length(len(key)))
        for item in key:
            _encode(item, out)
    elif isinstance(key, (set, frozenset)):
        # Members sorted by encoding: iteration order must not matter
        members = sorted(encode_key(item) for item in key)
        out.append(_TAG_SET)
        out.append(_length(len(members)))
        for member in members:
            _encode_sized(_TAG_BYTES, member, out)
    elif isinstance(key, np.ndarray):
        _encode_sized(_TAG_ARRAY, key.dtype.str.encode('ascii'), out)
        _encode(tuple(key.shape), out)
        if key.dtype.hasobject:
            # Raw bytes would be object pointers, encode the items instead
            for item in key.ravel().tolist():
                _encode(item, out)
        else:
            _encode_sized(_TAG_BYTES, np.ascontiguousarray(key).tobytes(), out)
    elif is_dataclass(key) and not isinstance(key, type):
        _encode_sized(_TAG_DATACLASS, _qualified_name(type(key)), out)
        _encode(tuple(getattr(key, f.name) for f in fields(key)), out)
    else:
        # Builtin hash() is stable within one interpreter run
        try:
            h = hash(key)
        except TypeError:
            raise TypeError(
                f"Cannot hash element of type {type(key).__name__!r}"
            ) from None
        _encode_sized(_TAG_OBJECT, _qualified_name(type(key)), out)
        _encode_int(h, out)


def encode_key(key: Any) -> bytes:
    """Canonical byte encoding of an element."""
    out: List[bytes] = []
    _encode(key, out)
    return b"".join(out)


# =============================================================================
# HASH CONFIGURATION - SINGLE SOURCE OF TRUTH
# =============================================================================

@dataclass(frozen=True)
class HashConfig:
    """
    Hash configuration for fingerprints and probe keys.

    Two structures only agree on element identity when they share a
    config; fingerprints built under different seeds are unrelated.

    Attributes:
        seed: Seed passed to MurmurHash64A

    Example:
        >>> config = HashConfig(seed=7)
        >>> h = config.hash(("e", 4))
    """
    seed: int = SEED

    def __post_init__(self):
        if not 0 <= self.seed <= MASK64:
            raise ValueError(f"seed must fit in 64 bits, got {self.seed}")

    def hash(self, key: Any) -> int:
        """64-bit unsigned hash of an element."""
        return murmur_hash64a(encode_key(key), self.seed)


DEFAULT_HASH_CONFIG = HashConfig(seed=SEED)


def hash_key(key: Any, config: Optional[HashConfig] = None) -> int:
    """Hash an element with the given config, or the default one."""
    cfg = config or DEFAULT_HASH_CONFIG
    return cfg.hash(key)


__all__ = [
    'murmur_hash64a',
    'encode_key',
    'HashConfig',
    'DEFAULT_HASH_CONFIG',
    'hash_key',
]
