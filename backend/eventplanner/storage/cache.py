"""In-memory result cache with per-entry expiry and bounded size.

Successful non-refinement runs are memoized under a key derived from the
normalized request text. Access is guarded by a lock so request handlers
and the periodic sweep can share one instance.
"""

import hashlib
import logging
import re
import threading
import time
from typing import Generic, TypeVar

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from pydantic import BaseModel

from eventplanner.config import CacheConfig

logger = logging.getLogger(__name__)

ValueT = TypeVar("ValueT")

CACHE_KEY_PREFIX = "event_plan_"

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lower-case, strip punctuation and collapse whitespace."""
    lowered = _PUNCTUATION.sub("", text.lower())
    return _WHITESPACE.sub(" ", lowered).strip()


def make_cache_key(raw_text: str) -> str:
    digest = hashlib.sha256(normalize_text(raw_text).encode("utf-8")).hexdigest()
    return f"{CACHE_KEY_PREFIX}{digest[:32]}"


class CacheEntry(BaseModel, Generic[ValueT]):
    """A cached value with its creation and expiry times (monotonic seconds)."""

    value: ValueT
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class CacheStats(BaseModel):
    """Counters exposed through the stats endpoint."""

    hits: int = 0
    misses: int = 0
    sets: int = 0
    deletes: int = 0
    clears: int = 0
    evictions: int = 0
    expired: int = 0
    size: int = 0
    max_size: int = 0
    hit_rate: float = 0.0


class ResultCache(Generic[ValueT]):
    """Thread-safe TTL cache that evicts the oldest entry when full."""

    def __init__(self, config: CacheConfig | None = None, clock=time.monotonic):
        self.config = config or CacheConfig()
        self._clock = clock
        self._entries: dict[str, CacheEntry[ValueT]] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats(max_size=self.config.max_size)
        self._scheduler: BackgroundScheduler | None = None

    @property
    def ttl_seconds(self) -> float:
        return self.config.expiry_minutes * 60

    def get(self, key: str) -> ValueT | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats.misses += 1
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._stats.expired += 1
                self._stats.misses += 1
                return None
            self._stats.hits += 1
            return entry.value

    def set(self, key: str, value: ValueT, ttl_seconds: float | None = None) -> None:
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        now = self._clock()
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.config.max_size:
                self._evict_oldest()
            self._entries[key] = CacheEntry(
                value=value, created_at=now, expires_at=now + ttl
            )
            self._stats.sets += 1

    def delete(self, key: str) -> bool:
        with self._lock:
            removed = self._entries.pop(key, None) is not None
            if removed:
                self._stats.deletes += 1
            return removed

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._stats.clears += 1
        logger.info(f"Cache cleared ({count} entries)")
        return count

    def sweep(self) -> int:
        """Remove expired entries. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
            self._stats.expired += len(expired)
        if expired:
            logger.debug(f"Cache sweep removed {len(expired)} expired entries")
        return len(expired)

    def stats(self) -> CacheStats:
        with self._lock:
            lookups = self._stats.hits + self._stats.misses
            return self._stats.model_copy(
                update={
                    "size": len(self._entries),
                    "hit_rate": round(self._stats.hits / lookups * 100, 2) if lookups else 0.0,
                }
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict_oldest(self) -> None:
        # Caller holds the lock.
        oldest_key = min(self._entries, key=lambda k: self._entries[k].created_at)
        del self._entries[oldest_key]
        self._stats.evictions += 1

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start_sweeper(self) -> None:
        """Run ``sweep`` on a background interval until ``stop_sweeper``."""
        if self._scheduler is not None:
            return

        scheduler = BackgroundScheduler(daemon=True)
        scheduler.add_job(
            self.sweep,
            IntervalTrigger(minutes=self.config.sweep_interval_minutes),
            id="cache-sweep",
            name="Result cache: expiry sweep",
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info(
            f"Registered job: Cache Sweep (every {self.config.sweep_interval_minutes} min)"
        )

    def stop_sweeper(self) -> None:
        if self._scheduler is None:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("✓ Cache sweeper stopped")
