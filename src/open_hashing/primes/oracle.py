"""Incremental prime generation with a growing cache."""

import bisect
from typing import List, Sequence

from loguru import logger

from open_hashing.errors import InvalidArgumentError

FIRST_PRIME = 2


class PrimeOracle:
    """Answers nearest-prime queries from a monotonically growing cache.

    Candidates are tested by trial division against the primes discovered so
    far, so the cache only ever extends far enough to bracket the largest
    ``n`` requested. One oracle is usually shared by reference for the whole
    process (see :data:`DEFAULT_ORACLE`); it is never reset.
    """

    def __init__(self) -> None:
        self._primes: List[int] = []

    def __len__(self) -> int:
        return len(self._primes)

    @property
    def primes(self) -> Sequence[int]:
        return tuple(self._primes)

    def next_largest_prime(self, n: int) -> int:
        """Return the smallest prime ``>= n``."""
        self._check(n)
        self._generate_past(n)
        idx = bisect.bisect_left(self._primes, n)
        return self._primes[idx]

    def next_smallest_prime(self, n: int) -> int:
        """Return the largest prime ``<= n``."""
        self._check(n)
        if n < FIRST_PRIME:
            raise InvalidArgumentError(f"no prime is less than or equal to {n}")
        self._generate_past(n)
        idx = bisect.bisect_right(self._primes, n)
        return self._primes[idx - 1]

    def is_prime(self, n: int) -> bool:
        self._check(n)
        if n < FIRST_PRIME:
            return False
        self._generate_past(n)
        idx = bisect.bisect_left(self._primes, n)
        return self._primes[idx] == n

    @staticmethod
    def _check(n: int) -> None:
        if n < 0:
            raise InvalidArgumentError(f"prime queries need a non-negative integer, got {n}")

    def _generate_past(self, n: int) -> None:
        # Stop once the last cached prime is strictly greater than n.
        before = len(self._primes)
        while not self._primes or self._primes[-1] <= n:
            self._add_next_prime()
        if len(self._primes) != before:
            logger.debug(
                "Prime cache extended from {} to {} primes (largest={})",
                before,
                len(self._primes),
                self._primes[-1],
            )

    def _add_next_prime(self) -> None:
        if not self._primes:
            self._primes.append(FIRST_PRIME)
            return
        candidate = self._primes[-1] + 1
        while not self._indivisible(candidate):
            candidate += 1
        self._primes.append(candidate)

    def _indivisible(self, candidate: int) -> bool:
        for prime in self._primes:
            if prime * prime > candidate:
                return True
            if candidate % prime == 0:
                return False
        return True


DEFAULT_ORACLE = PrimeOracle()
