"""
Exception types raised by the cache.

Not-found and empty-cache outcomes are not errors: those operations return
None. Everything here signals a rejected call that left the cache untouched.
"""


class CacheError(Exception):
    """Base class for cache errors."""

    pass


class InvalidArgumentError(CacheError, ValueError):
    """An argument was missing or outside its accepted domain."""

    pass


class InvalidCapacityError(InvalidArgumentError):
    """Capacity was not a positive integer."""

    def __init__(self, capacity: object):
        self.capacity = capacity
        super().__init__(f"capacity must be a positive int, got {capacity!r}")


class PositionOutOfRangeError(CacheError, IndexError):
    """Positional access outside 0 <= position < size."""

    def __init__(self, position: int, size: int):
        self.position = position
        self.size = size
        super().__init__(
            f"position {position} is invalid; the size of the cache is {size}"
        )


class IteratorStateError(CacheError, RuntimeError):
    """CacheIterator.remove() called with no current entry."""

    pass
