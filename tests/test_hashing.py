"""
Tests for element hashing and key encoding
"""

from dataclasses import FrozenInstanceError, dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction

import pytest
import numpy as np

from zobrist.hashing import (
    DEFAULT_HASH_CONFIG,
    HashConfig,
    encode_key,
    hash_key,
    murmur_hash64a,
)


M = 0xc6a4a7935bd1e995
MASK = (1 << 64) - 1


def reference_murmur64a(data: bytes, seed: int) -> int:
    h = (seed ^ (len(data) * M)) & MASK
    full = len(data) - len(data) % 8
    for i in range(0, full, 8):
        k = int.from_bytes(data[i:i + 8], 'little')
        k = (k * M) & MASK
        k ^= k >> 47
        k = (k * M) & MASK
        h = ((h ^ k) * M) & MASK
    if len(data) % 8:
        h = ((h ^ int.from_bytes(data[full:], 'little')) * M) & MASK
    h ^= h >> 47
    h = (h * M) & MASK
    h ^= h >> 47
    return h


class Color(Enum):
    WHITE = 1
    BLACK = 2


@dataclass(frozen=True)
class Square:
    row: int
    col: int


class TestMurmurHash64A:
    def test_empty_input_seed_zero(self):
        assert murmur_hash64a(b"", 0) == 0

    def test_matches_reference(self):
        rng = np.random.default_rng(1234)
        for length in range(0, 40):
            data = rng.integers(0, 256, size=length, dtype=np.uint8).tobytes()
            for seed in (0, 42, MASK):
                assert murmur_hash64a(data, seed) == reference_murmur64a(data, seed)

    def test_fits_in_64_bits(self):
        for data in (b"a", b"abcdefgh", b"abcdefghi" * 7):
            assert 0 <= murmur_hash64a(data, 42) <= MASK

    def test_seed_changes_hash(self):
        assert murmur_hash64a(b"zobrist", 1) != murmur_hash64a(b"zobrist", 2)


class TestEncodeKey:
    def test_deterministic(self):
        key = (1, "rook", Color.WHITE, (2.5, None))
        assert encode_key(key) == encode_key((1, "rook", Color.WHITE, (2.5, None)))

    def test_numbers_follow_python_equality(self):
        assert encode_key(1) == encode_key(True) == encode_key(1.0) == encode_key(np.int64(1))
        assert encode_key(0) == encode_key(False)

    def test_type_tags_separate_values(self):
        encodings = {encode_key(k) for k in (1, "1", b"1", (1,), [1], None, Color.WHITE, 1.5)}
        assert len(encodings) == 8

    def test_containers_are_unambiguous(self):
        assert encode_key((1, 23)) != encode_key((12, 3))
        assert encode_key(("ab", "c")) != encode_key(("a", "bc"))
        assert encode_key(((1, 2), 3)) != encode_key((1, (2, 3)))

    def test_large_and_negative_ints(self):
        values = [0, -1, 127, 128, -128, -129, 2 ** 64, -(2 ** 64), 2 ** 200]
        assert len({encode_key(v) for v in values}) == len(values)

    def test_frozenset_order_independent(self):
        a = frozenset(["x", "y", "z", 1, 2])
        b = frozenset([2, 1, "z", "y", "x"])
        assert encode_key(a) == encode_key(b)
        assert encode_key(a) != encode_key(frozenset(["x", "y"]))

    def test_enum_differs_from_value(self):
        assert encode_key(Color.WHITE) != encode_key(1)
        assert encode_key(Color.WHITE) != encode_key(Color.BLACK)

    def test_numpy_arrays(self):
        a = np.arange(6, dtype=np.int32).reshape(2, 3)
        assert encode_key(a) == encode_key(np.arange(6, dtype=np.int32).reshape(2, 3))
        assert encode_key(a) != encode_key(a.reshape(3, 2))
        assert encode_key(a) != encode_key(a.astype(np.int64))
        # Non-contiguous views encode like their contents
        assert encode_key(a.T) == encode_key(np.ascontiguousarray(a.T))

    def test_object_arrays_encode_values(self):
        a = np.array([int("100000000000000000001"), "rook", Fraction(1, 3)], dtype=object)
        b = np.array([int("100000000000000000001"), "rook", Fraction(1, 3)], dtype=object)
        assert encode_key(a) == encode_key(b)
        assert encode_key(a) != encode_key(a[::-1].copy())
        assert encode_key(a.reshape(3, 1)) != encode_key(a)

    def test_other_numeric_types_follow_python_equality(self):
        assert encode_key(Fraction(1)) == encode_key(Decimal(1)) == encode_key(complex(1, 0)) == encode_key(1)
        assert encode_key(Fraction(1, 2)) == encode_key(0.5) == encode_key(Decimal("0.5"))
        assert encode_key(Fraction(1, 3)) != encode_key(1 / 3)
        assert encode_key(complex(1, 2)) != encode_key(complex(1, 3))
        assert encode_key(complex(1, 2)) == encode_key(np.complex128(1 + 2j))
        assert encode_key(float("inf")) == encode_key(Decimal("Infinity"))
        assert encode_key(float("inf")) != encode_key(float("-inf"))

    def test_dataclass(self):
        assert encode_key(Square(1, 2)) == encode_key(Square(1, 2))
        assert encode_key(Square(1, 2)) != encode_key(Square(2, 1))
        assert encode_key(Square(1, 2)) != encode_key((1, 2))

    def test_hashable_object_fallback(self):
        marker = object()
        assert encode_key(marker) == encode_key(marker)
        assert encode_key(marker) != encode_key(object())

    def test_unhashable_object_rejected(self):
        with pytest.raises(TypeError):
            encode_key({"a": 1})


class TestHashConfig:
    def test_default_config(self):
        assert hash_key("a") == DEFAULT_HASH_CONFIG.hash("a")
        assert hash_key("a") == murmur_hash64a(encode_key("a"), DEFAULT_HASH_CONFIG.seed)

    def test_explicit_config(self):
        config = HashConfig(seed=99)
        assert hash_key((3, 4), config) == config.hash((3, 4))
        assert config.hash((3, 4)) != HashConfig(seed=100).hash((3, 4))

    def test_invalid_seed(self):
        with pytest.raises(ValueError):
            HashConfig(seed=-1)
        with pytest.raises(ValueError):
            HashConfig(seed=1 << 64)

    def test_config_is_frozen(self):
        config = HashConfig(seed=1)
        with pytest.raises(FrozenInstanceError):
            config.seed = 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
