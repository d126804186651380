"""Example script that drives the hash table from a word file.

Each whitespace-separated word is put into the table (or removed, for a
negative batch size) and the collision statistics are logged after every
batch, mirroring how the table is exercised by hand.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Iterator, Optional

from loguru import logger
from pydantic import ValidationError

from open_hashing.errors import HashTableError
from open_hashing.table import HashTable
from open_hashing.workflow.configuration import ConfigLoader, HashTableConfig

_CONFIG_LOADER = ConfigLoader()
_DEFAULT_CONFIG_PATH = Path(__file__).parent / "configs" / "default_table.yaml"


def _read_words(path: Path) -> Iterator[str]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            yield from line.split()


def _load_config(config_file: Optional[str]) -> HashTableConfig:
    path = Path(config_file) if config_file else _DEFAULT_CONFIG_PATH
    if not path.exists():
        logger.warning("Config file {} not found; using defaults", path)
        return HashTableConfig()
    return _CONFIG_LOADER.load(path)


def demo_put_from_file(
    words_file: str,
    batch_size: int = 500,
    config_file: Optional[str] = None,
) -> HashTable:
    """Feed ``words_file`` into a table in batches and report after each one."""
    table = HashTable(config=_load_config(config_file))
    logger.info("Created {}", table)

    words = _read_words(Path(words_file))
    remove = batch_size < 0
    batch_size = abs(batch_size)

    while True:
        batch = [word for _, word in zip(range(batch_size), words)]
        if not batch:
            break
        started = time.perf_counter()
        for word in batch:
            if remove:
                table.remove(word)
            else:
                table.put(word)
        elapsed_ms = (time.perf_counter() - started) * 1e3
        logger.info("Processed {} words in {:.2f} ms", len(batch), elapsed_ms)
        table.print_hash_table_statistics()

    return table


def demo_scheme_tour(words_file: str, config_file: Optional[str] = None) -> None:
    """Load the same words under every scheme combination and compare collisions."""
    words = list(_read_words(Path(words_file)))
    base = _load_config(config_file)

    for collision in ("D", "Q"):
        for empty in ("A", "N", "R"):
            try:
                config = HashTableConfig.model_validate(
                    {**base.model_dump(), "collision_scheme": collision, "empty_marker_scheme": empty}
                )
            except ValidationError as exc:
                logger.error("Invalid scheme selection {}/{}: {}", collision, empty, exc)
                continue

            table = HashTable(config=config)
            try:
                for word in words:
                    table.put(word)
                for word in words[::2]:
                    table.remove(word)
            except HashTableError as exc:
                logger.error("Scheme {}/{} failed: {}", collision, empty, exc)
                continue

            stats = table.hash_table_statistics()
            logger.info(
                "{}/{}: size={}, elements={}, collisions={}, max={}, rate={:.4f}",
                collision,
                empty,
                stats.size,
                stats.element_count,
                stats.total_collisions,
                stats.max_collisions,
                stats.collision_rate,
            )


if __name__ == "__main__":
    demo_put_from_file("hash_test_file1.txt", batch_size=500)
