"""Probe sequence generators for open addressing."""

from open_hashing.probing.resolvers import (
    CollisionResolver,
    CollisionScheme,
    DoubleHashing,
    QuadraticProbing,
    build_resolver,
)

__all__ = [
    "CollisionResolver",
    "CollisionScheme",
    "DoubleHashing",
    "QuadraticProbing",
    "build_resolver",
]
