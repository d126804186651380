"""Key hashing and index compression."""

from open_hashing.hashing.compression import Compressor
from open_hashing.hashing.keys import HASH_BASE, MAX_HASH_LENGTH, KeyHasher

__all__ = ["Compressor", "HASH_BASE", "KeyHasher", "MAX_HASH_LENGTH"]
