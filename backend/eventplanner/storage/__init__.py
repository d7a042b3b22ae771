"""Storage layer for the event planner.

This package provides the in-memory result cache that memoizes successful
pipeline runs, keyed by normalized request text.
"""

from .cache import (
    CacheEntry,
    CacheStats,
    ResultCache,
    make_cache_key,
    normalize_text,
)

__all__ = [
    "CacheEntry",
    "CacheStats",
    "ResultCache",
    "make_cache_key",
    "normalize_text",
]
