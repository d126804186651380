"""Slot representation and the scheme-aware slot classifier."""

import dataclasses
from enum import Enum, auto
from typing import Optional, Union

from open_hashing.schemes import EmptyMarkerScheme

NEGATIVE_PREFIX = "-"


@dataclasses.dataclass(slots=True)
class Entry:
    key: str
    value: str
    collision_count: int = 0
    # Raw key hash before compression; valid across resizes.
    hash_code: Optional[int] = dataclasses.field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        return f"({self.key}, {self.value})"


class _Tombstone:
    __slots__ = ()

    def __repr__(self) -> str:
        return "TOMBSTONE"


TOMBSTONE = _Tombstone()

# None is a never-used slot.
Slot = Optional[Union[Entry, _Tombstone]]


class SlotStatus(Enum):
    FREE = auto()  # never used; ends every probe sequence
    TOMBSTONE = auto()  # formerly occupied; reusable, does not end lookups
    OCCUPIED = auto()


def slot_status(slot: Slot, scheme: EmptyMarkerScheme) -> SlotStatus:
    """Classify ``slot`` under ``scheme``.

    Every probe loop in the table goes through this function so put, get,
    remove and the scheme conversions agree on what a slot means. Under
    NEGATIVE any key that starts with ``-`` reads as removed, including keys
    that were put that way.
    """
    if slot is None:
        return SlotStatus.FREE
    if slot is TOMBSTONE:
        return SlotStatus.TOMBSTONE
    if scheme == EmptyMarkerScheme.NEGATIVE and slot.key.startswith(NEGATIVE_PREFIX):
        return SlotStatus.TOMBSTONE
    return SlotStatus.OCCUPIED
