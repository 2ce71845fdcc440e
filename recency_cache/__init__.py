"""Thread-safe, bounded LRU cache keyed by value identity."""

from .core.errors import (
    CacheError,
    InvalidArgumentError,
    InvalidCapacityError,
    IteratorStateError,
    PositionOutOfRangeError,
)
from .utils.lru_cache import CacheIterator, LRUCache

__all__ = [
    "LRUCache",
    "CacheIterator",
    "CacheError",
    "InvalidArgumentError",
    "InvalidCapacityError",
    "IteratorStateError",
    "PositionOutOfRangeError",
]
