"""Collision statistics aggregated over the live entries of a table."""

import dataclasses
from typing import Iterable

from open_hashing.table.slots import Entry


@dataclasses.dataclass(slots=True)
class HashTableStatistics:
    size: int
    element_count: int
    total_collisions: int
    collided_entries: int
    max_collisions: int

    @property
    def load_factor(self) -> float:
        if self.size == 0:
            return 0.0
        return self.element_count / self.size

    @property
    def average_collisions(self) -> float:
        """Mean collisions over entries that collided at least once."""
        if self.collided_entries == 0:
            return 0.0
        return self.total_collisions / self.collided_entries

    @property
    def collision_rate(self) -> float:
        if self.element_count == 0:
            return 0.0
        return self.total_collisions / self.element_count


def collect_statistics(entries: Iterable[Entry], size: int, element_count: int) -> HashTableStatistics:
    total = 0
    collided = 0
    worst = 0
    for entry in entries:
        count = entry.collision_count
        total += count
        if count > 0:
            collided += 1
        worst = max(worst, count)

    return HashTableStatistics(
        size=size,
        element_count=element_count,
        total_collisions=total,
        collided_entries=collided,
        max_collisions=worst,
    )
