"""Reporting helpers for table statistics and contents."""

from __future__ import annotations

from typing import List, Sequence

from loguru import logger


class StatisticsReporter:
    """Formats table statistics for terminal output."""

    def format(self, stats) -> List[str]:
        return [
            "=" * 40,
            "HASH TABLE STATISTICS",
            "=" * 40,
            f"Size: {stats.size}",
            f"Elements: {stats.element_count}",
            f"Load factor: {stats.load_factor:.4f}",
            f"Total collisions: {stats.total_collisions}",
            f"Entries with collisions: {stats.collided_entries}",
            f"Average collisions (collided entries): {stats.average_collisions:.4f}",
            f"Max collisions: {stats.max_collisions}",
            f"Collision rate: {stats.collision_rate:.4f}",
        ]

    def report(self, stats) -> List[str]:
        lines = self.format(stats)
        for line in lines:
            logger.info("{}", line)
        return lines

    def report_contents(self, lines: Sequence[str]) -> None:
        logger.info("\n{}", "\n".join(lines))
