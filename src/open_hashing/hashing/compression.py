"""Universal-hashing compression of hash codes into bucket indices."""

import random
from typing import Optional

from open_hashing.errors import InvalidArgumentError
from open_hashing.primes import DEFAULT_ORACLE, PrimeOracle


class Compressor:
    """Maps any integer hash code into ``[0, size)``.

    Uses the affine map ``((a * h + b) mod p) mod size`` where ``p`` is the
    smallest prime strictly greater than ``size``. The coefficients are drawn
    from ``rng`` unless both are given explicitly.
    """

    def __init__(
        self,
        size: int,
        a: Optional[int] = None,
        b: Optional[int] = None,
        *,
        rng: Optional[random.Random] = None,
        oracle: PrimeOracle = DEFAULT_ORACLE,
    ) -> None:
        if size <= 0:
            raise InvalidArgumentError(f"table size must be a positive integer, got {size}")
        p = oracle.next_largest_prime(size + 1)

        rng = rng or random.Random()
        if a is None:
            a = rng.randint(1, p - 1)
        if b is None:
            b = rng.randint(0, p - 1)

        if not 0 < a <= p - 1:
            raise InvalidArgumentError(
                f"compression multiplier must be in [1, {p - 1}] "
                f"(p={p} is the smallest prime larger than table size {size}), got {a}"
            )
        if not 0 <= b <= p - 1:
            raise InvalidArgumentError(
                f"compression adder must be in [0, {p - 1}] "
                f"(p={p} is the smallest prime larger than table size {size}), got {b}"
            )

        self.size = size
        self.p = p
        self.a = a
        self.b = b

    def compress(self, hash_code: int) -> int:
        return (self.a * hash_code + self.b) % self.p % self.size

    def __repr__(self) -> str:
        return f"Compressor(size={self.size}, p={self.p}, a={self.a}, b={self.b})"
