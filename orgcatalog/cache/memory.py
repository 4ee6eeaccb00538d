"""Process-wide in-memory cache with sliding and absolute expiration.

Entries are evicted lazily: an expired entry is dropped the next time its
key is read. Each entry carries a :class:`CachePolicy`; a policy with
neither window set keeps the entry until it is removed explicitly.

Usage
-----
>>> cache = MemoryCache()
>>> cache.set("repositories", ["atc-core"])
>>> cache.get("repositories")
['atc-core']

"""

from __future__ import annotations

import dataclasses
import datetime as dt
import time
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dataclasses.dataclass(frozen=True, slots=True)
class CachePolicy:
    """Expiration settings for one cache key.

    Attributes
    ----------
    sliding
        Idle window; every read of the entry restarts it.
    absolute
        Ceiling measured from when the entry was stored, regardless of
        reads.

    """

    sliding: dt.timedelta | None = None
    absolute: dt.timedelta | None = None

    def __post_init__(self) -> None:
        """Reject zero or negative windows."""
        for label, window in (("sliding", self.sliding), ("absolute", self.absolute)):
            if window is not None and window <= dt.timedelta(0):
                msg = f"{label} expiration must be positive, got: {window}"
                raise ValueError(msg)

    @property
    def expires(self) -> bool:
        """Return True when either window is configured."""
        return self.sliding is not None or self.absolute is not None


NO_EXPIRY = CachePolicy()


@dataclasses.dataclass(slots=True)
class CacheStats:
    """Counters updated by every cache operation."""

    hit: int = 0
    miss: int = 0
    write: int = 0
    expired: int = 0


@dataclasses.dataclass(slots=True)
class _CacheEntry:
    value: typ.Any
    policy: CachePolicy
    stored_at: float
    last_access: float

    def is_expired(self, now: float) -> bool:
        absolute = self.policy.absolute
        if absolute is not None and now - self.stored_at >= absolute.total_seconds():
            return True
        sliding = self.policy.sliding
        return sliding is not None and now - self.last_access >= sliding.total_seconds()


class MemoryCache:
    """Key/value store shared by every catalog component in a process."""

    def __init__(self, *, clock: cabc.Callable[[], float] = time.monotonic) -> None:
        """Create an empty cache using ``clock`` as its time source."""
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}
        self.stats = CacheStats()

    def _live_entry(self, key: str) -> _CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            self.stats.expired += 1
            return None
        return entry

    def __contains__(self, key: object) -> bool:
        """Return True when ``key`` holds an unexpired entry; reads don't slide."""
        return isinstance(key, str) and self._live_entry(key) is not None

    def __len__(self) -> int:
        """Return the number of unexpired entries."""
        for key in list(self._entries):
            self._live_entry(key)
        return len(self._entries)

    def get(self, key: str, default: typ.Any = None) -> typ.Any:  # noqa: ANN401
        """Return the value stored under ``key`` or ``default`` on a miss.

        A hit restarts the entry's sliding window.
        """
        entry = self._live_entry(key)
        if entry is None:
            self.stats.miss += 1
            return default
        entry.last_access = self._clock()
        self.stats.hit += 1
        return entry.value

    def set(
        self,
        key: str,
        value: typ.Any,  # noqa: ANN401
        policy: CachePolicy = NO_EXPIRY,
    ) -> None:
        """Store ``value`` under ``key``, replacing any existing entry."""
        now = self._clock()
        self._entries[key] = _CacheEntry(
            value=value, policy=policy, stored_at=now, last_access=now
        )
        self.stats.write += 1

    def remove(self, key: str) -> bool:
        """Drop ``key``; return True when an entry was present."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Drop every entry. Counters are kept."""
        self._entries.clear()

    async def get_or_create[T](
        self,
        key: str,
        factory: cabc.Callable[[], cabc.Awaitable[T]],
        *,
        policy: CachePolicy = NO_EXPIRY,
        should_store: cabc.Callable[[T], bool] | None = None,
    ) -> tuple[T, bool]:
        """Return the cached value for ``key``, populating it on a miss.

        ``should_store`` lets the caller decline to cache a populated value,
        for example an empty collection. The cache does not serialise
        concurrent populations of the same key; callers that need that hold
        a lock from :class:`~orgcatalog.cache.single_flight.KeyedLocks`.

        Returns
        -------
        tuple[T, bool]
            The value and whether it came from the cache.

        """
        sentinel = object()
        cached = self.get(key, sentinel)
        if cached is not sentinel:
            return (typ.cast("T", cached), True)

        value = await factory()
        if should_store is None or should_store(value):
            self.set(key, value, policy)
        return (value, False)
