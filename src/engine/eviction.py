"""Eviction policy dispatch.

Runs only when a put finds the cache at or over capacity:

- OldestFirst: repair the head, pop the head, delete the victim.
- NewestFirst: repair both ends, pop the tail, delete the victim.
- Reject: touch nothing and raise StorageFullError.

Deleting a victim that already disappeared is not an error: the slot it
held is free either way.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Dict, Optional

from core.errors import StorageFullError
from core.interfaces import KeyValueStore
from core.models import EvictionPolicy
from engine.tracking_queue import TrackingQueue

logger = logging.getLogger(__name__)


class Evictor:
    def __init__(self, store: KeyValueStore, queue: TrackingQueue, policy: EvictionPolicy) -> None:
        self._store = store
        self._queue = queue
        self._policy = EvictionPolicy.parse(policy)
        self._strategies: Dict[EvictionPolicy, Callable[[], Awaitable[Optional[str]]]] = {
            EvictionPolicy.OLDEST_FIRST: self._evict_oldest,
            EvictionPolicy.NEWEST_FIRST: self._evict_newest,
            EvictionPolicy.REJECT: self._reject,
        }

    @property
    def policy(self) -> EvictionPolicy:
        return self._policy

    async def evict(self) -> Optional[str]:
        """Free one slot according to the policy; returns the victim key, if any."""
        return await self._strategies[self._policy]()

    async def _evict_oldest(self) -> Optional[str]:
        await self._queue.repair_head()
        victim = await self._queue.pop_oldest()
        return await self._discard(victim)

    async def _evict_newest(self) -> Optional[str]:
        # Head repair is not needed to pick the victim but keeps the queue short
        await self._queue.repair_head()
        await self._queue.repair_tail()
        victim = await self._queue.pop_newest()
        return await self._discard(victim)

    async def _reject(self) -> Optional[str]:
        raise StorageFullError("Object out of storage")

    async def _discard(self, victim: Optional[str]) -> Optional[str]:
        if victim is None:
            logger.warning(
                "Cache at capacity but tracking queue is empty; nothing to evict",
                extra={"policy": self._policy.value, "queue": self._queue.name},
            )
            return None

        removed = await self._store.delete(victim)
        if removed:
            logger.info("Evicted key", extra={"key": victim, "policy": self._policy.value})
        else:
            logger.warning("Eviction victim was already gone", extra={"key": victim})
        return victim
