"""Bounded LRU cache keyed by the values it stores."""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Generic, Hashable, Iterable, List, Optional, TypeVar

from ..core.config import get_settings
from ..core.errors import (
    InvalidArgumentError,
    InvalidCapacityError,
    IteratorStateError,
    PositionOutOfRangeError,
)

logger = logging.getLogger(__name__)

V = TypeVar("V", bound=Hashable)


@dataclass
class _Entry(Generic[V]):
    """Arena slot: a value plus the slot indices of its neighbours."""

    value: V
    prev: Optional[int] = None
    next: Optional[int] = None


class LRUCache(Generic[V]):
    """
    Thread-safe LRU cache where every value is also its own key.

    Values must be hashable, with equality consistent with their hash. None
    cannot be stored; lookups return None to mean "no value".

    Entries live in an arena (a list of slots) linked by slot index from the
    head (least recently used, next to be evicted) to the tail (most
    recently used). A dict maps each value to its slot, so insert, get and
    evict are all O(1).
    """

    def __init__(self, capacity: Optional[int] = None):
        if capacity is None:
            capacity = get_settings().default_capacity
        if (
            isinstance(capacity, bool)
            or not isinstance(capacity, int)
            or capacity <= 0
        ):
            raise InvalidCapacityError(capacity)

        self._capacity = capacity
        self._slots: List[Optional[_Entry[V]]] = []
        self._free: List[int] = []
        self._index: Dict[V, int] = {}
        self._head: Optional[int] = None
        self._tail: Optional[int] = None
        # Bumped on every structural change; iterators use it to detect
        # mutation behind their back.
        self._mutations = 0
        self._lock = threading.Lock()
        logger.debug(f"Created LRU cache with capacity {capacity}")

    # -------------------------------------------------------------------------
    # Arena and list primitives (caller holds the lock)
    # -------------------------------------------------------------------------

    def _allocate(self, value: V) -> int:
        entry = _Entry(value)
        if self._free:
            slot = self._free.pop()
            self._slots[slot] = entry
        else:
            slot = len(self._slots)
            self._slots.append(entry)
        return slot

    def _unlink(self, slot: int) -> None:
        entry = self._slots[slot]
        if entry.prev is None:
            self._head = entry.next
        else:
            self._slots[entry.prev].next = entry.next
        if entry.next is None:
            self._tail = entry.prev
        else:
            self._slots[entry.next].prev = entry.prev
        entry.prev = None
        entry.next = None

    def _append(self, slot: int) -> None:
        entry = self._slots[slot]
        entry.prev = self._tail
        entry.next = None
        if self._tail is None:
            self._head = slot
        else:
            self._slots[self._tail].next = slot
        self._tail = slot

    def _move_to_tail(self, slot: int) -> None:
        self._unlink(slot)
        self._append(slot)
        self._mutations += 1

    def _remove_slot(self, slot: int) -> V:
        entry = self._slots[slot]
        self._unlink(slot)
        del self._index[entry.value]
        self._slots[slot] = None
        self._free.append(slot)
        self._mutations += 1
        return entry.value

    def _evict_head(self) -> Optional[V]:
        if self._head is None:
            return None
        value = self._remove_slot(self._head)
        logger.debug("Evicted %r from LRU cache", value)
        return value

    def _insert(self, value: V) -> None:
        slot = self._index.get(value)
        if slot is not None:
            if slot == self._tail:
                return
            self._slots[slot].value = value
            self._move_to_tail(slot)
            return

        if len(self._index) >= self._capacity:
            self._evict_head()

        slot = self._allocate(value)
        self._append(slot)
        self._index[value] = slot
        self._mutations += 1

    def _walk(self, limit: int) -> List[V]:
        values: List[V] = []
        slot = self._head
        while slot is not None and len(values) < limit:
            entry = self._slots[slot]
            values.append(entry.value)
            slot = entry.next
        return values

    @staticmethod
    def _check_length(target_length: int) -> None:
        if target_length is None:
            raise InvalidArgumentError("target_length must not be None")
        if isinstance(target_length, bool) or not isinstance(target_length, int):
            raise InvalidArgumentError(
                f"target_length must be an int, got {type(target_length).__name__}"
            )
        if target_length < 0:
            raise InvalidArgumentError(
                f"target_length must be >= 0, got {target_length}"
            )

    # -------------------------------------------------------------------------
    # Mutating operations
    # -------------------------------------------------------------------------

    def insert(self, value: V) -> None:
        """Add value as most recently used, evicting the oldest entry if full.

        Re-inserting a value already present moves it to the tail without
        evicting anything. Re-inserting the current tail is a no-op.
        """
        if value is None:
            raise InvalidArgumentError("cannot insert None")
        with self._lock:
            self._insert(value)

    def evict(self) -> Optional[V]:
        """Remove and return the least recently used value, or None if empty."""
        with self._lock:
            return self._evict_head()

    def get(self, key: V) -> Optional[V]:
        """Return the stored value equal to key and mark it most recently used.

        Returns None when key is not cached. Raises InvalidArgumentError if
        key is None.
        """
        if key is None:
            raise InvalidArgumentError("key must not be None")
        with self._lock:
            slot = self._index.get(key)
            if slot is None:
                return None
            if slot != self._tail:
                self._move_to_tail(slot)
            return self._slots[slot].value

    def from_array(self, values: Iterable[V]) -> None:
        """Insert every value in order, as one atomic batch.

        The whole batch is validated before anything is inserted, so a
        rejected call leaves the cache unchanged.
        """
        if values is None:
            raise InvalidArgumentError("values must not be None")
        batch = list(values)
        for position, value in enumerate(batch):
            if value is None:
                raise InvalidArgumentError(f"values[{position}] is None")
            hash(value)

        with self._lock:
            for value in batch:
                self._insert(value)

    def pop(self, key: V, default: Optional[V] = None) -> Optional[V]:
        """Remove the entry equal to key from any position and return it."""
        if key is None:
            return default
        with self._lock:
            slot = self._index.get(key)
            if slot is None:
                return default
            return self._remove_slot(slot)

    def clear(self) -> None:
        """Clear all items."""
        with self._lock:
            self._slots.clear()
            self._free.clear()
            self._index.clear()
            self._head = None
            self._tail = None
            self._mutations += 1

    # -------------------------------------------------------------------------
    # Read-only operations
    # -------------------------------------------------------------------------

    def peek_next_eviction(self) -> Optional[V]:
        """Return the value that evict() would remove, without touching it."""
        with self._lock:
            if self._head is None:
                return None
            return self._slots[self._head].value

    def peek_last_eviction(self) -> Optional[V]:
        """Return the most recently used value, without touching it."""
        with self._lock:
            if self._tail is None:
                return None
            return self._slots[self._tail].value

    def value_at(self, position: int) -> V:
        """Return the value at position, counting from the least recently used.

        O(n) and does not promote the entry; use get() for keyed access.
        """
        if isinstance(position, bool) or not isinstance(position, int):
            raise InvalidArgumentError(
                f"position must be an int, got {type(position).__name__}"
            )
        with self._lock:
            size = len(self._index)
            if position < 0 or position >= size:
                raise PositionOutOfRangeError(position, size)

            # Walk from whichever end is closer
            if position < size // 2:
                slot = self._head
                for _ in range(position):
                    slot = self._slots[slot].next
            else:
                slot = self._tail
                for _ in range(size - 1 - position):
                    slot = self._slots[slot].prev
            return self._slots[slot].value

    def size(self) -> int:
        with self._lock:
            return len(self._index)

    def capacity(self) -> int:
        return self._capacity

    def to_array(self, target_length: int) -> Optional[List[V]]:
        """Return up to target_length values, least recently used first.

        Returns None when the cache is empty. The list holds
        min(target_length, size()) values; it is never padded.
        """
        self._check_length(target_length)
        with self._lock:
            if not self._index:
                return None
            return self._walk(target_length)

    def to_reverse_array(self, target_length: int) -> Optional[List[V]]:
        """Like to_array() but filled from the back.

        The least recently used value lands in the last position, so a
        target_length of at least size() yields most recently used first.
        A shorter target_length holds the oldest entries, newest of them first.
        """
        self._check_length(target_length)
        with self._lock:
            if not self._index:
                return None
            values = self._walk(target_length)
        values.reverse()
        return values

    def iterate(self) -> "CacheIterator[V]":
        """Return a one-shot iterator from least to most recently used."""
        return CacheIterator(self)

    def __iter__(self) -> "CacheIterator[V]":
        return self.iterate()

    def __contains__(self, key: V) -> bool:
        if key is None:
            return False
        with self._lock:
            return key in self._index

    def __len__(self) -> int:
        with self._lock:
            return len(self._index)

    def __repr__(self) -> str:
        return f"LRUCache(size={len(self)}, capacity={self._capacity})"


class CacheIterator(Generic[V]):
    """
    Forward iterator over an LRUCache that can remove the current entry.

    Only remove() may change the cache while iterating. Any other mutation
    makes the next call to __next__ raise RuntimeError.
    """

    def __init__(self, cache: LRUCache[V]):
        self._cache = cache
        with cache._lock:
            self._next_slot = cache._head
            self._expected_mutations = cache._mutations
        self._current: Optional[int] = None

    def _check_unmodified(self) -> None:
        if self._cache._mutations != self._expected_mutations:
            raise RuntimeError("LRUCache mutated during iteration")

    def __iter__(self) -> "CacheIterator[V]":
        return self

    def __next__(self) -> V:
        cache = self._cache
        with cache._lock:
            self._check_unmodified()
            if self._next_slot is None:
                self._current = None
                raise StopIteration
            slot = self._next_slot
            entry = cache._slots[slot]
            self._next_slot = entry.next
            self._current = slot
            return entry.value

    def remove(self) -> None:
        """Remove the entry most recently returned by __next__."""
        cache = self._cache
        with cache._lock:
            self._check_unmodified()
            if self._current is None:
                raise IteratorStateError(
                    "remove() needs a preceding next() that returned an entry"
                )
            cache._remove_slot(self._current)
            self._current = None
            self._expected_mutations = cache._mutations
