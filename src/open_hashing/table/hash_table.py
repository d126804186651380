"""Open addressing hash table with pluggable probing and removal schemes.

The table stores every entry directly in its slot array. Each operation
hashes the key, walks the collision resolver's probe sequence through the
compressor, and classifies each visited slot with :func:`slot_status` under
the active empty-marker scheme:

* ``FREE`` slots end every probe sequence;
* ``TOMBSTONE`` slots can be reused by ``put`` but lookups walk past them;
* ``OCCUPIED`` slots either match the key or are skipped (a collision).

Resizing never mutates the live slot array. A replacement state is built on
a throwaway table and installed in one step.
"""

import dataclasses
import math
import random
from typing import Iterator, List, Optional, Union

from loguru import logger
from pydantic import ValidationError

from open_hashing.errors import (
    InternalInconsistencyError,
    InvalidArgumentError,
    InvalidStateError,
    TableFullError,
)
from open_hashing.hashing import Compressor, KeyHasher
from open_hashing.primes import DEFAULT_ORACLE, PrimeOracle
from open_hashing.probing import CollisionResolver, build_resolver
from open_hashing.schemes import (
    CollisionScheme,
    EmptyMarkerScheme,
    parse_collision_scheme,
    parse_empty_marker_scheme,
)
from open_hashing.table.slots import (
    NEGATIVE_PREFIX,
    TOMBSTONE,
    Entry,
    Slot,
    SlotStatus,
    slot_status,
)
from open_hashing.table.statistics import HashTableStatistics, collect_statistics
from open_hashing.workflow.configuration import HashTableConfig
from open_hashing.workflow.reporting import StatisticsReporter


@dataclasses.dataclass(frozen=True, slots=True)
class _TableState:
    slots: List[Slot]
    compressor: Compressor
    resolver: CollisionResolver
    collision_scheme: CollisionScheme
    empty_marker_scheme: EmptyMarkerScheme
    element_count: int


@dataclasses.dataclass(slots=True)
class _ProbeResult:
    match: Optional[int] = None
    vacancy: Optional[int] = None
    passed: List[int] = dataclasses.field(default_factory=list)
    passed_before_vacancy: int = 0


class HashTable:
    """String-to-string map using open addressing.

    ``initial_size`` and the two schemes override the matching fields of
    ``config``. Schemes may be given as enum members or single-character
    codes (``"D"``/``"Q"`` and ``"A"``/``"N"``/``"R"``).
    """

    def __init__(
        self,
        initial_size: Optional[int] = None,
        collision_scheme: Union[str, CollisionScheme, None] = None,
        empty_marker_scheme: Union[str, EmptyMarkerScheme, None] = None,
        *,
        config: Optional[HashTableConfig] = None,
        oracle: PrimeOracle = DEFAULT_ORACLE,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = self._merge_config(
            config or HashTableConfig(),
            initial_size=initial_size,
            collision_scheme=collision_scheme,
            empty_marker_scheme=empty_marker_scheme,
        )
        self._oracle = oracle
        self._rng = rng or random.Random(self.config.seed)
        self._hasher = KeyHasher(self.config.hash_base, self.config.max_hash_length)
        self._reporter = StatisticsReporter()

        size = oracle.next_largest_prime(self.config.initial_size)
        self._install(
            self._empty_state(size, self.config.collision_scheme, self.config.empty_marker_scheme)
        )

    @staticmethod
    def _merge_config(config: HashTableConfig, **overrides) -> HashTableConfig:
        updates = {name: value for name, value in overrides.items() if value is not None}
        if not updates:
            return config
        try:
            return HashTableConfig.model_validate({**config.model_dump(), **updates})
        except ValidationError as exc:
            raise InvalidArgumentError(str(exc)) from exc

    # ------------------------------------------------------------------
    # Accessors

    def size(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return self._element_count

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __repr__(self) -> str:
        return (
            f"HashTable(size={self.size()}, elements={self._element_count}, "
            f"collision={self._collision_scheme.name}, empty_marker={self._empty_marker_scheme.name})"
        )

    @property
    def element_count(self) -> int:
        return self._element_count

    @property
    def load_factor(self) -> float:
        return self._element_count / self.size()

    @property
    def collision_scheme(self) -> CollisionScheme:
        return self._collision_scheme

    @property
    def empty_marker_scheme(self) -> EmptyMarkerScheme:
        return self._empty_marker_scheme

    @property
    def compressor(self) -> Compressor:
        return self._compressor

    def is_empty(self) -> bool:
        return self._element_count == 0

    def is_full(self) -> bool:
        return self._element_count >= self.size()

    def position_is_empty(self, index: int) -> bool:
        return slot_status(self._slots[index], self._empty_marker_scheme) is not SlotStatus.OCCUPIED

    def position_is_formerly_occupied(self, index: int) -> bool:
        return slot_status(self._slots[index], self._empty_marker_scheme) is SlotStatus.TOMBSTONE

    # ------------------------------------------------------------------
    # Core operations

    def put(self, key: str, value: Optional[str] = None) -> Optional[str]:
        """Insert or update ``key`` and return the value it replaced.

        A missing ``value`` stores the key as its own value.
        """
        if value is None:
            value = key
        self._check_item(key, value)

        code = self._hasher.hash(key)
        while True:
            probe = self._probe(key, code, for_insert=True)
            if probe.match is not None or probe.vacancy is not None:
                break
            if not self.config.auto_resize:
                raise TableFullError(
                    f"no free slot is reachable for {key!r} in a table of size {self.size()}"
                )
            logger.debug("Probe sequence for {!r} exhausted at size {}; expanding", key, self.size())
            self._expand()

        if probe.match is not None:
            for index in probe.passed:
                self._slots[index].collision_count += 1
            entry = self._slots[probe.match]
            previous, entry.value = entry.value, value
            return previous

        for index in probe.passed[: probe.passed_before_vacancy]:
            self._slots[index].collision_count += 1
        entry = Entry(key, value, hash_code=code)
        self._slots[probe.vacancy] = entry

        if slot_status(entry, self._empty_marker_scheme) is not SlotStatus.OCCUPIED:
            logger.warning(
                "Key {!r} starts with {!r} and reads as removed under the {} scheme",
                key,
                NEGATIVE_PREFIX,
                self._empty_marker_scheme.name,
            )
            return None

        self._element_count += 1
        self._check_load()
        return None

    def get(self, key: str) -> Optional[str]:
        self._check_key(key)
        index = self._find(key)
        if index is None:
            return None
        return self._slots[index].value

    def remove(self, key: str) -> Optional[str]:
        """Remove ``key`` and return its value, marking the slot per scheme."""
        self._check_key(key)
        index = self._find(key)
        if index is None:
            return None

        entry = self._slots[index]
        self._element_count -= 1
        scheme = self._empty_marker_scheme
        if scheme == EmptyMarkerScheme.AVAILABLE:
            self._slots[index] = TOMBSTONE
        elif scheme == EmptyMarkerScheme.NEGATIVE:
            self._slots[index] = Entry(NEGATIVE_PREFIX + entry.key, entry.value, entry.collision_count)
        else:
            self._slots[index] = None
            if self._element_count:
                self._backfill(index)

        self._check_load()
        return entry.value

    def resize(
        self,
        new_size: Optional[int] = None,
        collision_scheme: Union[str, CollisionScheme, None] = None,
        empty_marker_scheme: Union[str, EmptyMarkerScheme, None] = None,
    ) -> None:
        """Rebuild the table at ``new_size`` (rounded up to a prime).

        Omitted arguments keep the current size or schemes, so
        ``resize(collision_scheme="Q")`` only swaps strategies. Live entries
        are re-inserted; markers left by removals are discarded.
        """
        size = self.size() if new_size is None else new_size
        collision = (
            self._collision_scheme
            if collision_scheme is None
            else parse_collision_scheme(collision_scheme)
        )
        empty = (
            self._empty_marker_scheme
            if empty_marker_scheme is None
            else parse_empty_marker_scheme(empty_marker_scheme)
        )
        if size <= 0:
            raise InvalidArgumentError(f"table size must be a positive integer, got {size}")
        if size < self._element_count:
            raise InvalidArgumentError(
                f"cannot resize to {size}: the table holds {self._element_count} elements"
            )

        old_size = self.size()
        state = self._rebuild(self._oracle.next_largest_prime(size), collision, empty)
        self._install(state)
        logger.debug(
            "Resized table {} -> {} (collision={}, empty_marker={}, elements={})",
            old_size,
            self.size(),
            collision.name,
            empty.name,
            self._element_count,
        )
        self._check_load()

    def set_collision_handling_scheme(self, scheme: Union[str, CollisionScheme]) -> bool:
        scheme = parse_collision_scheme(scheme)
        if scheme == self._collision_scheme:
            return False
        if not self.is_empty():
            raise InvalidStateError("hash table must be empty to change the collision handling scheme")

        self._resolver = build_resolver(scheme, self.size(), self._oracle)
        self._collision_scheme = scheme
        logger.debug("Collision handling scheme set to {}", scheme.name)
        return True

    def set_empty_marker_scheme(self, scheme: Union[str, EmptyMarkerScheme]) -> bool:
        """Switch removal markers, converting existing ones. Returns whether it changed."""
        new = parse_empty_marker_scheme(scheme)
        old = self._empty_marker_scheme
        if new == old:
            return False

        markers: List[int] = []
        for index, slot in enumerate(self._slots):
            before = slot_status(slot, old)
            if before is SlotStatus.TOMBSTONE:
                markers.append(index)
            elif before is SlotStatus.OCCUPIED and slot_status(slot, new) is not SlotStatus.OCCUPIED:
                logger.warning("Key {!r} reads as removed under the {} scheme", slot.key, new.name)
                self._element_count -= 1

        if new == EmptyMarkerScheme.REPLACE:
            for index in markers:
                self._slots[index] = None
                if self._element_count:
                    self._backfill(index)
        elif new == EmptyMarkerScheme.AVAILABLE:
            for index in markers:
                self._slots[index] = TOMBSTONE
        else:
            for index in markers:
                slot = self._slots[index]
                if slot is TOMBSTONE:
                    self._slots[index] = Entry(NEGATIVE_PREFIX, "")

        self._empty_marker_scheme = new
        logger.debug("Empty marker scheme {} -> {} ({} markers converted)", old.name, new.name, len(markers))
        return True

    # ------------------------------------------------------------------
    # Reporting

    def display(self) -> List[str]:
        """Describe every slot, one line per index."""
        lines = []
        for index, slot in enumerate(self._slots):
            status = slot_status(slot, self._empty_marker_scheme)
            if status is SlotStatus.FREE:
                text = "Never used"
            elif slot is TOMBSTONE:
                text = "Available"
            elif status is SlotStatus.TOMBSTONE:
                text = f"Removed {slot}"
            else:
                text = f"{slot} collisions={slot.collision_count}"
            lines.append(f"{index}: {text}")
        self._reporter.report_contents(lines)
        return lines

    def hash_table_statistics(self) -> HashTableStatistics:
        return collect_statistics(self._live_entries(), self.size(), self._element_count)

    def print_hash_table_statistics(self) -> List[str]:
        return self._reporter.report(self.hash_table_statistics())

    def reset_hash_table_statistics(self) -> None:
        for entry in self._live_entries():
            entry.collision_count = 0

    # ------------------------------------------------------------------
    # Probing

    def _probe_indices(self, code: int) -> Iterator[int]:
        # Both probe families are periodic in p once compressed, so p probes
        # visit every index the sequence can ever reach.
        self._resolver.reset(code)
        for _ in range(self._compressor.p):
            yield self._compressor.compress(self._resolver.next_hash())

    def _probe(self, key: str, code: int, for_insert: bool = False) -> _ProbeResult:
        result = _ProbeResult()
        seen = set()
        for index in self._probe_indices(code):
            slot = self._slots[index]
            status = slot_status(slot, self._empty_marker_scheme)
            if status is SlotStatus.FREE:
                if result.vacancy is None:
                    result.vacancy = index
                    result.passed_before_vacancy = len(result.passed)
                return result
            if status is SlotStatus.TOMBSTONE:
                if result.vacancy is None:
                    result.vacancy = index
                    result.passed_before_vacancy = len(result.passed)
            elif slot.key == key:
                result.match = index
                return result
            else:
                result.passed.append(index)
                seen.add(index)

            # Once every live entry has been inspected the key cannot be
            # further along the sequence.
            if len(seen) >= self._element_count and (result.vacancy is not None or not for_insert):
                return result
        return result

    def _find(self, key: str) -> Optional[int]:
        if self._element_count == 0:
            return None
        return self._probe(key, self._hasher.hash(key)).match

    def _backfill(self, gap: int) -> None:
        """Pull entries whose probe path crosses ``gap`` back into it."""
        if self._element_count == 0:
            raise InvalidStateError("cannot back-fill a gap in an empty table")
        moves = 0
        hole: Optional[int] = gap
        while hole is not None:
            hole = self._pull_into(hole)
            if hole is not None:
                moves += 1
        if moves:
            logger.debug("Back-filled gap at {} with {} moves", gap, moves)

    def _pull_into(self, hole: int) -> Optional[int]:
        checked = 0
        for index, slot in enumerate(self._slots):
            if checked >= self._element_count:
                break
            if slot_status(slot, self._empty_marker_scheme) is not SlotStatus.OCCUPIED:
                continue
            checked += 1
            if self._path_crosses(slot, hole, index):
                self._slots[hole] = slot
                self._slots[index] = None
                return index
        return None

    def _path_crosses(self, entry: Entry, hole: int, home: int) -> bool:
        code = entry.hash_code
        if code is None:
            code = entry.hash_code = self._hasher.hash(entry.key)
        for index in self._probe_indices(code):
            if index == home:
                return False
            if index == hole:
                return True
        raise InternalInconsistencyError(
            f"{entry.key!r} is stored at {home} but its probe sequence never reaches that slot"
        )

    # ------------------------------------------------------------------
    # Growth and rebuilds

    def _check_load(self) -> None:
        if self.config.auto_resize and self.load_factor >= self.config.rehash_threshold:
            self._expand()

    def _expand(self) -> None:
        self.resize(self._grown_size(self.size()))

    def _grown_size(self, size: int) -> int:
        if self.config.expand_by_factor:
            target = math.floor(size * self.config.expansion_factor)
        else:
            target = size + self.config.expansion_increment
        return max(target, size + 1)

    def _rebuild(
        self, size: int, collision: CollisionScheme, empty: EmptyMarkerScheme
    ) -> _TableState:
        # The scratch table never resizes itself; unplaced entries retry larger.
        while True:
            config = self.config.model_copy(
                update={
                    "initial_size": size,
                    "collision_scheme": collision,
                    "empty_marker_scheme": empty,
                    "auto_resize": False,
                }
            )
            table = HashTable(config=config, oracle=self._oracle, rng=self._rng)
            table._hasher = self._hasher
            try:
                for entry in self._live_entries():
                    table.put(entry.key, entry.value)
            except TableFullError:
                logger.debug("Rebuild at size {} left entries unplaced; growing", size)
                size = self._oracle.next_largest_prime(self._grown_size(size))
                continue
            return table._snapshot()

    def _empty_state(
        self, size: int, collision: CollisionScheme, empty: EmptyMarkerScheme
    ) -> _TableState:
        return _TableState(
            slots=[None] * size,
            compressor=Compressor(size, rng=self._rng, oracle=self._oracle),
            resolver=build_resolver(collision, size, self._oracle),
            collision_scheme=collision,
            empty_marker_scheme=empty,
            element_count=0,
        )

    def _snapshot(self) -> _TableState:
        return _TableState(
            slots=self._slots,
            compressor=self._compressor,
            resolver=self._resolver,
            collision_scheme=self._collision_scheme,
            empty_marker_scheme=self._empty_marker_scheme,
            element_count=self._element_count,
        )

    def _install(self, state: _TableState) -> None:
        self._slots = state.slots
        self._compressor = state.compressor
        self._resolver = state.resolver
        self._collision_scheme = state.collision_scheme
        self._empty_marker_scheme = state.empty_marker_scheme
        self._element_count = state.element_count

    def _live_entries(self) -> Iterator[Entry]:
        for slot in self._slots:
            if slot_status(slot, self._empty_marker_scheme) is SlotStatus.OCCUPIED:
                yield slot

    @staticmethod
    def _check_key(key: str) -> None:
        if not isinstance(key, str):
            raise InvalidArgumentError(f"keys must be strings, got {type(key).__name__}")

    @classmethod
    def _check_item(cls, key: str, value: str) -> None:
        cls._check_key(key)
        if not isinstance(value, str):
            raise InvalidArgumentError(f"values must be strings, got {type(value).__name__}")
