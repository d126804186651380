"""Exception taxonomy shared by the hash table components."""


class HashTableError(Exception):
    """Base class for every error raised by the hash table package."""


class InvalidArgumentError(HashTableError, ValueError):
    """A constructor, resize or scheme argument was out of range."""


class InvalidStateError(HashTableError, RuntimeError):
    """The operation is not allowed in the table's current state."""


class TableFullError(InvalidStateError):
    """No free slot is reachable and automatic growth is disabled."""


class InternalInconsistencyError(HashTableError, AssertionError):
    """The slot array violates a probing invariant. Never recoverable."""
