"""
TTL Cache

Bounded key -> value store with per-entry expiry and FIFO eviction.

Rules:
- An entry is visible iff now < expires_at. Expired entries are treated
  as absent by get() even before sweep() removes them.
- At capacity, set() evicts exactly one entry, the oldest inserted,
  regardless of how recently it was read (FIFO, not LRU).
- Overwriting a key removes the old entry first, so the key moves to the
  newest insertion position.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

V = TypeVar("V")


def monotonic_ms() -> float:
    """Default clock: monotonic milliseconds"""
    return time.monotonic() * 1000


@dataclass
class CacheEntry(Generic[V]):
    """Cached value with absolute expiry (clock milliseconds)"""

    value: V
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


@dataclass
class CacheStats:
    """Cache counters for monitoring"""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def to_dict(self) -> dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
            "hit_rate": round(self.hit_rate, 3),
        }


class TTLCache(Generic[V]):
    """
    Bounded TTL cache with FIFO eviction.

    Usage:
        cache: TTLCache[list] = TTLCache(max_entries=100, default_ttl_ms=300_000)
        cache.set("owner:D-42", videos)
        videos = cache.get("owner:D-42")  # None once expired
    """

    def __init__(
        self,
        max_entries: int,
        default_ttl_ms: float,
        clock: Callable[[], float] = monotonic_ms,
    ):
        """
        Initialize cache.

        Args:
            max_entries: Capacity (must be positive)
            default_ttl_ms: TTL used when set() is called without one
            clock: Millisecond clock (injectable for tests)
        """
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")

        self.logger = logging.getLogger(__name__)
        self.max_entries = max_entries
        self.default_ttl_ms = default_ttl_ms
        self._clock = clock

        # dict keeps insertion order: first key is the FIFO eviction victim
        self._store: Dict[str, CacheEntry[V]] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats()

        self._sweeper_thread: Optional[threading.Thread] = None
        self._sweeper_stop_event = threading.Event()

    # =========================================================================
    # CORE OPERATIONS
    # =========================================================================

    def set(self, key: str, value: V, ttl_ms: Optional[float] = None) -> None:
        """
        Insert or overwrite a value.

        Args:
            key: Cache key
            value: Value to store
            ttl_ms: Time to live (None = default_ttl_ms)
        """
        ttl = self.default_ttl_ms if ttl_ms is None else ttl_ms

        with self._lock:
            self._store.pop(key, None)

            if len(self._store) >= self.max_entries:
                oldest_key = next(iter(self._store))
                del self._store[oldest_key]
                self._stats.evictions += 1
                self.logger.debug(f"Evicted oldest cache entry: {oldest_key}")

            self._store[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)

    def get(self, key: str) -> Optional[V]:
        """
        Get a live value.

        Expired entries are deleted on read.

        Returns:
            The value, or None if absent or expired
        """
        with self._lock:
            entry = self._store.get(key)

            if entry is None:
                self._stats.misses += 1
                return None

            if entry.is_expired(self._clock()):
                del self._store[key]
                self._stats.expirations += 1
                self._stats.misses += 1
                return None

            self._stats.hits += 1
            return entry.value

    def delete(self, key: str) -> bool:
        """Remove one key. Returns True if it was present."""
        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        """Remove all entries unconditionally"""
        with self._lock:
            self._store.clear()
        self.logger.debug("Cache cleared")

    def sweep(self) -> int:
        """
        Remove every expired entry.

        Never needed for correctness (get() expires lazily); keeps memory
        bounded by live entries.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._store.items() if entry.is_expired(now)]
            for key in expired:
                del self._store[key]
            self._stats.expirations += len(expired)

        if expired:
            self.logger.debug(f"Swept {len(expired)} expired cache entries")
        return len(expired)

    # =========================================================================
    # BACKGROUND SWEEPER
    # =========================================================================

    def start_sweeper(self, interval_seconds: float) -> None:
        """Run sweep() every interval_seconds on a daemon thread"""
        if self._sweeper_thread and self._sweeper_thread.is_alive():
            self.logger.warning("Cache sweeper already running")
            return

        self._sweeper_stop_event.clear()
        self._sweeper_thread = threading.Thread(
            target=self._sweeper_worker,
            args=(interval_seconds,),
            daemon=True,
            name="TTLCache-Sweeper",
        )
        self._sweeper_thread.start()
        self.logger.info(f"Cache sweeper started (every {interval_seconds}s)")

    def stop_sweeper(self) -> None:
        """Stop the background sweeper (no-op if not running)"""
        self._sweeper_stop_event.set()
        if self._sweeper_thread and self._sweeper_thread.is_alive():
            self._sweeper_thread.join(timeout=2.0)
        self._sweeper_thread = None

    def _sweeper_worker(self, interval_seconds: float) -> None:
        while not self._sweeper_stop_event.wait(interval_seconds):
            try:
                self.sweep()
            except Exception as e:
                self.logger.error(f"Cache sweep failed: {e}")

    # =========================================================================
    # INSPECTION
    # =========================================================================

    @property
    def stats(self) -> CacheStats:
        return self._stats

    def __len__(self) -> int:
        """Physically stored entries (may include not-yet-swept expired ones)"""
        with self._lock:
            return len(self._store)

    def __contains__(self, key: str) -> bool:
        """True if key holds a live (unexpired) value; does not count as a hit"""
        with self._lock:
            entry = self._store.get(key)
            return entry is not None and not entry.is_expired(self._clock())

    def __repr__(self) -> str:
        return f"TTLCache(size={len(self)}, max={self.max_entries})"
