"""Polynomial string hashing."""

from typing import Optional

from open_hashing.errors import InvalidArgumentError

HASH_BASE = 33  # 33, 37, 39 and 41 all spread English words well
MAX_HASH_LENGTH = 128


class KeyHasher:
    """Horner-rule polynomial hash of a string key.

    ``hash(key) = sum(ord(key[i]) * base**i)`` evaluated from the last
    character down to the first. Only the first ``max_length`` characters
    contribute so very long keys cost a bounded amount of work; pass
    ``max_length=None`` to hash the whole key.
    """

    def __init__(self, base: int = HASH_BASE, max_length: Optional[int] = MAX_HASH_LENGTH) -> None:
        if base <= 1:
            raise InvalidArgumentError("hash base must be greater than 1")
        if max_length is not None and max_length <= 0:
            raise InvalidArgumentError("max_length must be positive or None")
        self.base = base
        self.max_length = max_length

    def hash(self, key: str) -> int:
        if not isinstance(key, str):
            raise InvalidArgumentError(f"keys must be strings, got {type(key).__name__}")
        length = len(key)
        if self.max_length is not None:
            length = min(length, self.max_length)

        code = 0
        for i in range(length - 1, -1, -1):
            code = ord(key[i]) + code * self.base
        return code

    __call__ = hash
