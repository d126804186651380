"""Open addressing hash table and its slot model."""

from open_hashing.table.hash_table import HashTable
from open_hashing.table.slots import TOMBSTONE, Entry, SlotStatus, slot_status
from open_hashing.table.statistics import HashTableStatistics, collect_statistics

__all__ = [
    "Entry",
    "HashTable",
    "HashTableStatistics",
    "SlotStatus",
    "TOMBSTONE",
    "collect_statistics",
    "slot_status",
]
