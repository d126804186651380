import pytest

from open_hashing.errors import InvalidArgumentError
from open_hashing.primes import DEFAULT_ORACLE, PrimeOracle


@pytest.mark.parametrize(
    ("n", "expected"),
    [(0, 2), (1, 2), (2, 2), (3, 3), (4, 5), (6, 7), (10, 11), (123434, 123439)],
)
def test_next_largest_prime(n: int, expected: int):
    assert PrimeOracle().next_largest_prime(n) == expected


@pytest.mark.parametrize(
    ("n", "expected"),
    [(2, 2), (3, 3), (4, 3), (6, 5), (10, 7), (123434, 123433)],
)
def test_next_smallest_prime(n: int, expected: int):
    assert PrimeOracle().next_smallest_prime(n) == expected


def test_cache_only_extends_far_enough_to_bracket_the_query():
    oracle = PrimeOracle()
    assert len(oracle) == 0

    oracle.next_largest_prime(10)
    assert oracle.primes == (2, 3, 5, 7, 11)

    # Smaller queries are answered from the cache.
    oracle.next_smallest_prime(6)
    assert len(oracle) == 5


def test_oracles_do_not_share_state():
    first = PrimeOracle()
    second = PrimeOracle()
    first.next_largest_prime(1000)

    assert len(first) > len(second) == 0


def test_is_prime():
    oracle = PrimeOracle()
    assert [n for n in range(30) if oracle.is_prime(n)] == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]


def test_rejects_negative_and_primeless_queries():
    oracle = PrimeOracle()
    with pytest.raises(InvalidArgumentError):
        oracle.next_largest_prime(-1)
    with pytest.raises(InvalidArgumentError):
        oracle.next_smallest_prime(1)


def test_default_oracle_is_shared():
    from open_hashing.primes.oracle import DEFAULT_ORACLE as same

    assert same is DEFAULT_ORACLE
    assert DEFAULT_ORACLE.next_largest_prime(100) == 101
