"""Process-wide caches for TheTVDB lookups."""
import logging
import threading
from typing import Optional, Dict

logger = logging.getLogger(__name__)


class ShowMatchCache:
    """In-memory cache mapping "{base_name}-{season}" to a TheTVDB series id.

    Entries are never expired: show names do not change within a process.
    """

    def __init__(self):
        """Initialize the cache."""
        self._cache: Dict[str, str] = {}
        self._lock = threading.Lock()

    @staticmethod
    def make_key(base_name: str, season: int) -> str:
        """Create a cache key from a base show name and season number."""
        return f"{base_name}-{season}"

    def get(self, base_name: str, season: int) -> Optional[str]:
        """
        Get a cached series id.

        Args:
            base_name: Show name without the "Season N" suffix
            season: Season number

        Returns:
            Cached series id or None if not found
        """
        with self._lock:
            return self._cache.get(self.make_key(base_name, season))

    def set(self, base_name: str, season: int, show_id: str) -> None:
        """Store a resolved series id."""
        key = self.make_key(base_name, season)
        with self._lock:
            self._cache[key] = show_id
        logger.debug(f"Cached TVDB id {show_id} for: {key}")

    def clear(self) -> None:
        """Clear all cached ids."""
        with self._lock:
            self._cache.clear()
        logger.info("Show match cache cleared")

    def size(self) -> int:
        """Get the number of cached items."""
        with self._lock:
            return len(self._cache)


class TVDBState:
    """Bearer token and show cache shared by every call of one TVDB client."""

    def __init__(self, cache: Optional[ShowMatchCache] = None):
        self.cache = cache or ShowMatchCache()
        self._token: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    def set_token(self, token: Optional[str]) -> None:
        with self._lock:
            self._token = token

    def invalidate_token(self, token: str) -> None:
        """Drop the stored token if it is still the one that was rejected."""
        with self._lock:
            if self._token == token:
                self._token = None
