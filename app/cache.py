import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

from app.config import CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)


class GridCache:
    """Time-limited snapshots of fetched sheets, one entry per source key.

    A failed fetch is never stored. Entries are only replaced, never evicted.
    """

    def __init__(
        self,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}

    def get_or_fetch(
        self, key: str, fetcher: Callable[[], Any], ttl: Optional[float] = None
    ) -> Any:
        ttl = self.ttl if ttl is None else ttl
        entry = self._entries.get(key)
        if entry is not None:
            stored_at, value = entry
            if self._clock() - stored_at < ttl:
                logger.info("Using cached data for %s", key)
                return value

        logger.info("Fetching fresh data for %s", key)
        value = fetcher()
        self._entries[key] = (self._clock(), value)
        return value

    def invalidate(self, key: Optional[str] = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
