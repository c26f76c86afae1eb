# vehicle_data/cache.py
import logging
from typing import Any, Dict, List, Optional

from vehicle_data.models import CacheKey

logger = logging.getLogger(__name__)


class ResultCache:
    """
    Session-scoped read-through cache for catalog lists.
    No time-based expiry; entries are replaced only by a forced refresh.
    """

    def __init__(self):
        self._entries: Dict[CacheKey, List[Any]] = {}

    def get(self, key: CacheKey) -> Optional[List[Any]]:
        hit = self._entries.get(key)
        if hit is not None:
            logger.debug("cache hit %s", key)
            return list(hit)
        return None

    def put(self, key: CacheKey, value: List[Any]) -> None:
        self._entries[key] = list(value)

    def invalidate(self, key: CacheKey) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
