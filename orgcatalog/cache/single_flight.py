"""Per-key asyncio locks for single-flight cache population."""

from __future__ import annotations

import asyncio
import contextlib
import dataclasses
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dataclasses.dataclass(slots=True)
class _Flight:
    lock: asyncio.Lock = dataclasses.field(default_factory=asyncio.Lock)
    completed: int = 0
    result: typ.Any = None


class KeyedLocks:
    """Hand out one :class:`asyncio.Lock` per cache key.

    Populations of different keys never wait on each other. Locks are
    created on first use and kept for the life of the process; the key
    space is a handful of constants.
    """

    def __init__(self) -> None:
        """Start with no locks."""
        self._flights: dict[str, _Flight] = {}

    def _flight(self, key: str) -> _Flight:
        flight = self._flights.get(key)
        if flight is None:
            flight = self._flights[key] = _Flight()
        return flight

    def lock_for(self, key: str) -> asyncio.Lock:
        """Return the lock guarding ``key``, creating it if needed."""
        return self._flight(key).lock

    def locked(self, key: str) -> bool:
        """Return True while some task holds the lock for ``key``."""
        flight = self._flights.get(key)
        return flight is not None and flight.lock.locked()

    @contextlib.asynccontextmanager
    async def hold(self, key: str) -> typ.AsyncIterator[None]:
        """Hold the lock for ``key`` for the duration of the block.

        The lock is released however the block exits, including
        cancellation while waiting or while holding it.
        """
        async with self.lock_for(key):
            yield

    async def join[T](
        self, key: str, factory: cabc.Callable[[], cabc.Awaitable[T]]
    ) -> tuple[T, bool]:
        """Run ``factory`` under the lock for ``key`` unless a run finished meanwhile.

        A caller that queued behind a run which completed while it waited
        receives that run's result instead of running ``factory`` itself.
        This holds whatever the result is, so an empty population that was
        never cached is still shared with the callers that waited on it.
        A run that raised or was cancelled shares nothing; the next caller
        runs ``factory``.

        Returns
        -------
        tuple[T, bool]
            The result and whether it came from another caller's run.

        """
        flight = self._flight(key)
        seen = flight.completed
        async with flight.lock:
            if flight.completed != seen:
                return (typ.cast("T", flight.result), True)
            result = await factory()
            flight.result = result
            flight.completed += 1
            return (result, False)
