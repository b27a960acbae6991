"""In-process single-slot TTL cache.

Holds the most recent successful dashboard summary and the moment it was
captured. One writer (the orchestrator); no locking, since all access
happens on the event loop between awaits.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from adminpanel.core.constants import DEFAULT_SUMMARY_TTL_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Cached value plus its capture time (clock seconds)."""

    data: T
    timestamp: float


class TTLCacheCell(Generic[T]):
    """Single entry cache with a fixed time-to-live.

    An entry is valid while now - timestamp < ttl; at exactly ttl it is
    stale. put() always replaces the whole entry.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_SUMMARY_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cell.

        Args:
            ttl_seconds: Time-to-live in seconds (must be positive).
            clock: Monotonic seconds source; injectable for tests.
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: CacheEntry[T] | None = None

    def is_valid(self) -> bool:
        """Return True iff an entry exists and is younger than the TTL."""
        if self._entry is None:
            return False
        return self._clock() - self._entry.timestamp < self.ttl_seconds

    def get(self) -> T | None:
        """Return the stored value (valid or not) or None when empty."""
        if self._entry is None:
            return None
        return self._entry.data

    def put(self, data: T) -> None:
        """Store data with the current clock reading, overwriting any entry."""
        self._entry = CacheEntry(data=data, timestamp=self._clock())
        logger.debug("Cache SET: summary (TTL: %ss)", self.ttl_seconds)

    def clear(self) -> None:
        """Drop the entry."""
        self._entry = None

    def age(self) -> float | None:
        """Seconds since the entry was captured, or None when empty."""
        if self._entry is None:
            return None
        return self._clock() - self._entry.timestamp
