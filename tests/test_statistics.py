import math

from open_hashing.table import Entry, HashTable, collect_statistics
from open_hashing.workflow.reporting import StatisticsReporter


def test_empty_table_statistics_are_zero():
    stats = HashTable(10).hash_table_statistics()
    assert stats.size == 11
    assert stats.element_count == 0
    assert stats.total_collisions == 0
    assert stats.collided_entries == 0
    assert stats.max_collisions == 0
    assert stats.average_collisions == 0.0
    assert stats.collision_rate == 0.0
    assert stats.load_factor == 0.0


def test_collect_statistics_aggregates_counters():
    entries = [Entry("a", "1", 0), Entry("b", "2", 3), Entry("c", "3", 1)]
    stats = collect_statistics(entries, size=11, element_count=3)

    assert stats.total_collisions == 4
    assert stats.collided_entries == 2
    assert stats.max_collisions == 3
    assert stats.average_collisions == 2.0
    assert math.isclose(stats.collision_rate, 4 / 3)
    assert math.isclose(stats.load_factor, 3 / 11)


def test_skipped_slots_accumulate_collisions(colliding_table):
    table = colliding_table("A")
    table.put("a", "1")
    table.put("b", "2")
    table.put("c", "3")

    stats = table.hash_table_statistics()
    assert stats.total_collisions == 3
    assert stats.collided_entries == 2
    assert stats.max_collisions == 2
    assert stats.average_collisions == 1.5
    assert stats.collision_rate == 1.0


def test_removed_entries_drop_out_of_statistics(colliding_table):
    table = colliding_table("A")
    table.put("a", "1")
    table.put("b", "2")
    table.put("c", "3")
    table.remove("a")

    stats = table.hash_table_statistics()
    assert stats.element_count == 2
    assert stats.total_collisions == 1
    assert stats.max_collisions == 1


def test_reset_statistics_keeps_contents(words):
    table = HashTable(10)
    for word in words:
        table.put(word, word)

    table.reset_hash_table_statistics()

    stats = table.hash_table_statistics()
    assert stats.total_collisions == 0
    assert stats.max_collisions == 0
    assert stats.element_count == len(words)
    assert all(table.get(word) == word for word in words)


def test_printed_statistics_lines():
    entries = [Entry("a", "1", 0), Entry("b", "2", 3), Entry("c", "3", 1)]
    lines = StatisticsReporter().report(collect_statistics(entries, size=11, element_count=3))

    assert "Total collisions: 4" in lines
    assert "Max collisions: 3" in lines
    assert "Average collisions (collided entries): 2.0000" in lines
    assert "Collision rate: 1.3333" in lines

    table_lines = HashTable(10).print_hash_table_statistics()
    assert "Size: 11" in table_lines
    assert "Elements: 0" in table_lines
