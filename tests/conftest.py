from typing import Callable

import pytest

from open_hashing.hashing import Compressor
from open_hashing.table import HashTable
from open_hashing.workflow.configuration import HashTableConfig


class ConstantHasher:
    """Sends every key down the same probe sequence."""

    def __init__(self, code: int = 7) -> None:
        self.code = code

    def hash(self, key: str) -> int:
        return self.code


@pytest.fixture
def colliding_table() -> Callable[..., HashTable]:
    """Build a size-11 table whose keys all collide.

    With raw hash 7 and compression ``h % 13 % 11``, double hashing (q = 7)
    visits slots 7, 1, 8, 2, ... Quadratic probing only ever reaches the
    seven slots 7, 8, 0, 3, 10, 6 and 4.
    """

    def _build(empty_marker_scheme: str = "A", collision_scheme: str = "D", **overrides) -> HashTable:
        config = HashTableConfig(
            initial_size=10,
            collision_scheme=collision_scheme,
            empty_marker_scheme=empty_marker_scheme,
            **overrides,
        )
        table = HashTable(config=config)
        table._hasher = ConstantHasher()
        table._compressor = Compressor(table.size(), a=1, b=0)
        return table

    return _build


_TEXT = (
    "the quick brown fox jumps over the lazy dog while seven wizards "
    "quietly hex a jovial band of zebras near twelve misty lagoons under "
    "pale violet skies as merchants haggle over amber spices and copper kettles"
)


@pytest.fixture
def words() -> list[str]:
    """Distinct words in first-seen order."""
    return list(dict.fromkeys(_TEXT.split()))
