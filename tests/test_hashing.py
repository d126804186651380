import random

import pytest

from open_hashing.errors import InvalidArgumentError
from open_hashing.hashing import HASH_BASE, Compressor, KeyHasher


def test_horner_hash_matches_polynomial():
    hasher = KeyHasher()
    assert HASH_BASE == 33
    assert hasher.hash("") == 0
    assert hasher.hash("a") == 97
    # ord("a") + ord("b") * 33
    assert hasher.hash("ab") == 3331
    assert hasher("ab") == hasher.hash("ab")


def test_hash_is_deterministic_and_order_sensitive():
    hasher = KeyHasher()
    assert hasher.hash("listen") == hasher.hash("listen")
    assert hasher.hash("listen") != hasher.hash("silent")


def test_hash_truncates_long_keys():
    hasher = KeyHasher(max_length=2)
    assert hasher.hash("abc") == hasher.hash("ab") == 3331

    unbounded = KeyHasher(max_length=None)
    assert unbounded.hash("abc") != unbounded.hash("ab")


def test_hasher_rejects_bad_arguments():
    with pytest.raises(InvalidArgumentError):
        KeyHasher(base=1)
    with pytest.raises(InvalidArgumentError):
        KeyHasher(max_length=0)
    with pytest.raises(InvalidArgumentError):
        KeyHasher().hash(42)  # type: ignore[arg-type]


def test_compressor_uses_prime_strictly_above_size():
    compressor = Compressor(11, a=1, b=0)
    assert compressor.p == 13
    assert compressor.compress(12) == 1
    assert compressor.compress(13) == 0

    compressor = Compressor(10, a=3, b=4)
    assert compressor.p == 11
    # ((3 * 5 + 4) % 11) % 10
    assert compressor.compress(5) == 8


@pytest.mark.parametrize("size", [1, 2, 11, 101, 1009])
def test_compress_is_always_in_range(size: int):
    rng = random.Random(size)
    compressor = Compressor(size, rng=rng)
    codes = [0, 1, -1, 2**64, -(2**70), *(rng.randint(-(10**12), 10**12) for _ in range(200))]
    for code in codes:
        assert 0 <= compressor.compress(code) < size


def test_seeded_coefficients_are_reproducible():
    first = Compressor(101, rng=random.Random(7))
    second = Compressor(101, rng=random.Random(7))
    assert (first.a, first.b) == (second.a, second.b)
    assert 1 <= first.a <= first.p - 1
    assert 0 <= first.b <= first.p - 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"size": 0},
        {"size": -5},
        {"size": 11, "a": 0, "b": 0},
        {"size": 11, "a": 13, "b": 0},
        {"size": 11, "a": 1, "b": -1},
        {"size": 11, "a": 1, "b": 13},
    ],
)
def test_compressor_validates_arguments(kwargs):
    with pytest.raises(InvalidArgumentError):
        Compressor(**kwargs)
