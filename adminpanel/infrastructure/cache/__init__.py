"""Cache: single-slot TTL cell for the dashboard summary.

The orchestrator owns one TTLCacheCell; CacheCellProtocol lets tests and
alternative backends stand in for it.
"""

from adminpanel.infrastructure.cache.cache_protocol import CacheCellProtocol
from adminpanel.infrastructure.cache.ttl_cell import CacheEntry, TTLCacheCell

__all__ = [
    "CacheCellProtocol",
    "CacheEntry",
    "TTLCacheCell",
]
