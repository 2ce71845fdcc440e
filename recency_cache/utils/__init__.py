"""Utility modules for recency_cache."""

from . import lru_cache

__all__ = ["lru_cache"]
