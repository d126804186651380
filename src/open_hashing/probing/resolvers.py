"""Collision resolution strategies that generate probe sequences."""

from dataclasses import dataclass, field
from typing import Callable, Protocol

from open_hashing.errors import InvalidArgumentError
from open_hashing.primes import DEFAULT_ORACLE, PrimeOracle
from open_hashing.schemes import CollisionScheme


class CollisionResolver(Protocol):
    """Protocol for generators of successive candidate hash codes."""

    raw_hash: int
    counter: int

    @property
    def scheme(self) -> CollisionScheme: ...

    def reset(self, raw_hash: int) -> None:
        """Start a new probe sequence for ``raw_hash`` with the counter at zero."""

    def next_hash(self, repetitions: int = 1) -> int:
        """Advance ``repetitions`` probes and return only the last hash code."""


def _advance(resolver: CollisionResolver, probe: Callable[[int], int], repetitions: int) -> int:
    if repetitions < 1:
        raise InvalidArgumentError("number of repetitions must be a positive integer")
    code = resolver.raw_hash
    for _ in range(repetitions):
        code = probe(resolver.counter)
        resolver.counter += 1
    return code


@dataclass
class DoubleHashing:
    """Steps by ``q - raw mod q`` where ``q`` is the largest prime below the size.

    The step lies in ``[1, q]`` and ``q < size``, so with a prime size every
    step is coprime with it. A two-slot table has no smaller prime and steps
    by one.
    """

    size: int
    oracle: PrimeOracle = field(default=DEFAULT_ORACLE, repr=False)
    q: int = field(init=False)
    raw_hash: int = field(default=0, init=False)
    counter: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise InvalidArgumentError(f"table size must be a positive integer, got {self.size}")
        self.q = self.oracle.next_smallest_prime(self.size - 1) if self.size > 2 else 1

    @property
    def scheme(self) -> CollisionScheme:
        return CollisionScheme.DOUBLE

    def reset(self, raw_hash: int) -> None:
        self.raw_hash = raw_hash
        self.counter = 0

    def secondary_hash(self) -> int:
        return self.q - self.raw_hash % self.q

    def next_hash(self, repetitions: int = 1) -> int:
        return _advance(self, self._probe, repetitions)

    def _probe(self, i: int) -> int:
        return self.raw_hash + i * self.secondary_hash()


@dataclass
class QuadraticProbing:
    """Probes ``raw + c1 * i + c2 * i**2``."""

    c1: int = 0
    c2: int = 1
    raw_hash: int = field(default=0, init=False)
    counter: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.c1 == 0 and self.c2 == 0:
            raise InvalidArgumentError("quadratic probing needs a non-zero coefficient")

    @property
    def scheme(self) -> CollisionScheme:
        return CollisionScheme.QUADRATIC

    def reset(self, raw_hash: int) -> None:
        self.raw_hash = raw_hash
        self.counter = 0

    def next_hash(self, repetitions: int = 1) -> int:
        return _advance(self, self._probe, repetitions)

    def _probe(self, i: int) -> int:
        return self.raw_hash + self.c1 * i + self.c2 * i * i


def build_resolver(
    scheme: CollisionScheme,
    size: int,
    oracle: PrimeOracle = DEFAULT_ORACLE,
) -> CollisionResolver:
    if scheme == CollisionScheme.DOUBLE:
        return DoubleHashing(size=size, oracle=oracle)
    if scheme == CollisionScheme.QUADRATIC:
        return QuadraticProbing()
    raise InvalidArgumentError(f"unknown collision scheme: {scheme!r}")
