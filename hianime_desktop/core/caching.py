# core/caching.py
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

CACHE_DURATION = 300  # 5 minutes
STALE_DURATION = 1800  # 30 minutes


class ResultCache:
    """
    Time-boxed memoization of scraped results keyed by logical query.

    Entries are served while younger than ``freshness`` seconds and physically
    removed by ``sweep`` once older than ``staleness`` seconds. Sweeping is
    driven from outside; the cache never schedules anything itself.

    Every access to the entry table holds the instance lock.
    """

    def __init__(
        self,
        freshness: float = CACHE_DURATION,
        staleness: float = STALE_DURATION,
        clock: Callable[[], float] = time.time,
    ):
        self.freshness = freshness
        self.staleness = staleness
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """
        Return the cached payload for key.

        Returns None both when the key was never stored and when its entry
        is older than the freshness window.
        """
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        payload, fetched_at = entry
        if self._clock() - fetched_at > self.freshness:
            return None
        return payload

    def put(self, key: str, payload: Any) -> None:
        """Store payload under key, replacing any previous entry."""
        fetched_at = self._clock()
        with self._lock:
            self._entries[key] = (payload, fetched_at)

    def sweep(self, now: Optional[float] = None) -> int:
        """
        Remove entries older than the staleness window.

        Args:
            now: Reference time in seconds (defaults to the cache clock)

        Returns:
            Number of cache entries removed
        """
        if now is None:
            now = self._clock()

        with self._lock:
            keys_to_remove = [
                key for key, (_, fetched_at) in self._entries.items()
                if now - fetched_at > self.staleness
            ]
            for key in keys_to_remove:
                del self._entries[key]

        if keys_to_remove:
            logger.debug(f"[ResultCache] Swept {len(keys_to_remove)} stale entries")
        return len(keys_to_remove)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def stats(self) -> Dict[str, Any]:
        """
        Get statistics about the current cache state.

        Returns:
            Dictionary containing cache statistics
        """
        current_time = self._clock()
        with self._lock:
            timestamps = [fetched_at for _, fetched_at in self._entries.values()]

        if not timestamps:
            return {
                "total_entries": 0,
                "oldest_entry_age": 0,
                "newest_entry_age": 0,
                "average_age": 0
            }

        ages = [current_time - fetched_at for fetched_at in timestamps]

        return {
            "total_entries": len(ages),
            "oldest_entry_age": max(ages),
            "newest_entry_age": min(ages),
            "average_age": sum(ages) / len(ages)
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries
