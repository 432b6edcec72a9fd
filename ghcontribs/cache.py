"""
Short-lived in-memory cache for fetched resources.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from .consts import CACHE_TTL

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class ResourceCache:
    """
    Cache of resources keyed by name, each entry expiring `ttl` seconds after it was set.
    """

    def __init__(
        self, ttl: float = CACHE_TTL, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.ttl: float = ttl
        self._clock: Callable[[], float] = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, name: str) -> Any | None:
        """
        Look up a resource.

        Args:
            name: Resource name.

        Return:
            Any | None: Cached value, or `None` if missing or expired.

        """

        entry = self._entries.get(name)
        if entry is None:
            return None

        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl:
            logger.debug("Cache entry %r expired", name)
            del self._entries[name]
            return None

        return value

    def set(self, name: str, value: Any) -> None:
        self._entries[name] = (self._clock(), value)

    def get_or_load(self, name: str, loader: Callable[[], Any]) -> Any:
        """
        Return a cached resource, calling `loader` to refresh it on a miss.

        Args:
            name:   Resource name.
            loader: Zero-argument callable producing the resource.

        Return:
            Any: Cached or freshly loaded value.

        """

        value = self.get(name)
        if value is None:
            value = loader()
            self.set(name, value)
        else:
            logger.debug("Cache hit for %r", name)

        return value

    def clear(self) -> None:
        self._entries.clear()
