"""In-process caching primitives."""

from __future__ import annotations

from .memory import NO_EXPIRY, CachePolicy, CacheStats, MemoryCache
from .single_flight import KeyedLocks

__all__ = ["NO_EXPIRY", "CachePolicy", "CacheStats", "KeyedLocks", "MemoryCache"]
