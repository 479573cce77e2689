"""Cache store using diskcache with FanoutCache (SQLite backend).

Entries carry their own timestamp, TTL and format version so that:
- get() can discard stale or outdated entries (deleting them on read)
- get_stats() can count expired entries without removing them
- cleanup() can sweep expired entries once at start-up

Every storage failure is logged and swallowed: a failed write is a no-op and
a failed read is a cache miss.
"""

import json
import sqlite3
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from diskcache import FanoutCache, Timeout

from models.config import settings
from models.models import CacheEntry, CacheStats
from utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 48 * 3600
DEFAULT_VERSION = "1.0.0"

_CACHE_ERRORS = (OSError, sqlite3.Error, Timeout, ValueError, TypeError)


def generate_cache_key(kind: str, **params: Any) -> str:
    """Derive a cache key from a request kind and its parameters.

    Examples:
        generate_cache_key("anime-basic", season="winter", year=2024) -> "anime-basic-winter-2024"
        generate_cache_key("streaming-anime", anime_id=52991) -> "streaming-anime-52991"
    """
    if kind in ("anime-basic", "streaming-batch"):
        season = getattr(params["season"], "value", params["season"])
        return f"{kind}-{season}-{params['year']}"
    if kind == "streaming-anime":
        return f"{kind}-{params['anime_id']}"
    return f"cache-{json.dumps(params, sort_keys=True, default=str)}"


class CacheStore:
    """Key -> versioned, timestamped value store with TTL expiry.

    Args:
        directory: Cache directory (one store per directory)
        default_ttl: TTL in seconds used when set() gets none
        default_version: Version used by set() and expected by get() by default
        clock: Epoch-seconds time source (injectable for tests)
    """

    def __init__(
        self,
        directory: Path | str,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        default_version: str = DEFAULT_VERSION,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.directory = Path(directory)
        self.default_ttl = default_ttl
        self.default_version = default_version
        self._clock = clock
        # 4 SQLite shards = less contention between worker threads
        self._cache = FanoutCache(directory=str(self.directory), shards=4, timeout=1.0)

    def set(self, key: str, data: Any, ttl: float | None = None, version: str | None = None) -> None:
        """Store ``data`` under ``key``, replacing any existing entry.

        Args:
            key: Cache key
            data: JSON-serializable value
            ttl: Seconds until stale (default: store default)
            version: Format version tag (default: store default)
        """
        try:
            entry = CacheEntry(
                key=key,
                data=data,
                timestamp=self._clock(),
                ttl=ttl or self.default_ttl,
                version=version or self.default_version,
            )
            self._cache.set(key, entry.model_dump_json())
            logger.debug(f"Cache: stored '{key}'")
        except _CACHE_ERRORS as e:
            logger.error(f"Cache: failed to store '{key}': {e}")

    def _load(self, key: str) -> CacheEntry | None:
        raw = self._cache.get(key)
        if raw is None:
            return None
        return CacheEntry.model_validate_json(raw)

    def get(self, key: str, expected_version: str | None = None) -> Any | None:
        """Return cached data, or None when missing, expired or outdated.

        Expired, version-mismatched and unreadable entries are deleted before
        returning.

        Args:
            key: Cache key
            expected_version: Version the caller understands (default: store default)
        """
        expected_version = expected_version or self.default_version
        try:
            entry = self._load(key)
        except ValueError as e:
            logger.warning(f"Cache: dropping unreadable entry '{key}': {e}")
            self.delete(key)
            return None
        except _CACHE_ERRORS as e:
            logger.error(f"Cache: failed to read '{key}': {e}")
            return None

        if entry is None:
            logger.debug(f"Cache: miss '{key}'")
            return None

        now = self._clock()
        if entry.is_expired(now):
            logger.debug(f"Cache: expired '{key}'")
            self.delete(key)
            return None
        if entry.version != expected_version:
            logger.debug(f"Cache: version mismatch for '{key}' ({entry.version} != {expected_version})")
            self.delete(key)
            return None

        remaining = entry.ttl - (now - entry.timestamp)
        logger.debug(f"Cache: hit '{key}' ({remaining / 60:.0f} minutes remaining)")
        return entry.data

    def delete(self, key: str) -> None:
        try:
            self._cache.delete(key)
        except _CACHE_ERRORS as e:
            logger.error(f"Cache: failed to delete '{key}': {e}")

    def clear(self) -> None:
        try:
            self._cache.clear()
            logger.info("Cache: cleared all entries")
        except _CACHE_ERRORS as e:
            logger.error(f"Cache: failed to clear: {e}")

    def _entries(self) -> list[tuple[str, str]]:
        """Snapshot of (key, raw entry) pairs."""
        pairs = []
        for key in list(self._cache):
            raw = self._cache.get(key)
            if raw is not None:
                pairs.append((key, raw))
        return pairs

    def cleanup(self) -> int:
        """Delete every expired entry, ignoring versions.

        Unreadable entries are deleted too and counted as removed.

        Returns:
            Number of entries removed
        """
        removed = 0
        try:
            now = self._clock()
            entries = self._entries()
        except _CACHE_ERRORS as e:
            logger.error(f"Cache: cleanup failed: {e}")
            return 0

        for key, raw in entries:
            try:
                expired = CacheEntry.model_validate_json(raw).is_expired(now)
            except _CACHE_ERRORS as e:
                logger.warning(f"Cache: dropping unreadable entry '{key}': {e}")
                expired = True
            if expired:
                self.delete(key)
                removed += 1

        if removed:
            logger.info(f"Cache: cleaned up {removed} expired entries")
        return removed

    def get_stats(self) -> CacheStats:
        """Count entries, expired entries and total serialized size (bytes).

        Expired entries are counted, not removed. Unreadable entries count
        toward the total and size but not as expired.
        """
        stats = CacheStats()
        try:
            now = self._clock()
            entries = self._entries()
        except _CACHE_ERRORS as e:
            logger.error(f"Cache: failed to compute stats: {e}")
            return stats

        for key, raw in entries:
            stats.total_entries += 1
            stats.total_size += len(str(raw).encode("utf-8"))
            try:
                if CacheEntry.model_validate_json(raw).is_expired(now):
                    stats.expired_entries += 1
            except _CACHE_ERRORS as e:
                logger.warning(f"Cache: unreadable entry '{key}': {e}")
        return stats

    def close(self) -> None:
        self._cache.close()


# Cache global
_cache: CacheStore | None = None


def get_cache() -> CacheStore:
    """Lazy init of global cache."""
    global _cache
    if _cache is None:
        _cache = CacheStore(
            directory=settings.cache.cache_dir,
            default_ttl=settings.cache.ttl_hours * 3600,
            default_version=settings.cache.version,
        )
    return _cache
