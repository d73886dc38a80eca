import threading
from collections import OrderedDict

from pydantic import BaseModel, computed_field


class CacheStats(BaseModel, frozen=True):
    """Point-in-time counters of a ``SimpleCache``."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0
    maxsize: int | None = None

    @computed_field
    @property
    def hit_rate(self) -> float:
        """Share of lookups answered from the cache, as a percentage."""
        lookups = self.hits + self.misses
        return 100 * self.hits / lookups if lookups else 0.0


class ModificationTracker:
    """Thread-safe tracker for file modification times, keyed by path.

    The locale catalogs are reloaded only when one of their files changes, was
    added, or disappeared since the previous check.
    """

    _lock: threading.Lock
    _mtimes: dict[str, float]

    def __init__(self):
        self._lock = threading.Lock()
        self._mtimes = {}

    def has_changed(self, mtimes: dict[str, float]) -> bool:
        """Compare a fresh ``{path: mtime}`` listing with the tracked one.

        Returns:
            True (and records the new listing) if anything differs.
        """
        with self._lock:
            if mtimes != self._mtimes:
                self._mtimes = dict(mtimes)
                return True
            return False

    def reset(self):
        with self._lock:
            self._mtimes = {}


class SimpleCache[VT, *KTs]:
    """Thread-safe LRU cache counting its hits, misses and evictions."""

    _cache: OrderedDict[tuple[*KTs], VT]
    _lock: threading.Lock
    _maxsize: int | None
    _hits: int
    _misses: int
    _evictions: int

    def __init__(self, maxsize: int | None = None):
        """
        Args:
            maxsize: Entries kept before the least recently used one is
                dropped. None keeps everything until flushed.
        """
        self._cache = OrderedDict()
        self._lock = threading.Lock()
        self._maxsize = maxsize
        self._hits = self._misses = self._evictions = 0

    def get(self, *query: *KTs) -> VT | None:
        with self._lock:
            if query not in self._cache:
                self._misses += 1
                return None
            self._cache.move_to_end(query)
            self._hits += 1
            return self._cache[query]

    def set(self, value: VT, *query: *KTs):
        with self._lock:
            self._cache[query] = value
            self._cache.move_to_end(query)
            while self._maxsize is not None and len(self._cache) > self._maxsize:
                self._cache.popitem(last=False)
                self._evictions += 1

    def flush(self):
        with self._lock:
            self._cache.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                size=len(self._cache),
                maxsize=self._maxsize,
            )

    def size(self) -> int:
        with self._lock:
            return len(self._cache)
