"""Tracking queue: insertion-ordered record of keys written through the cache.

The queue lives in the store as a named list and is allowed to go stale:
keys that expired or were removed behind the cache's back stay in it until
a repair pass reaches them. Repairs are local to the end being evicted from
and read the list in fixed-size batches:

- repair_head() pops dead keys from the head until the first live key.
- repair_tail() does the same walking inward from the tail.

Neither pass looks past the first live key, so the cost is proportional to
the run of stale entries at that end, not to the queue length.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional

from core.errors import ValidationError
from core.interfaces import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_NAME = "trackKeyList"
DEFAULT_BATCH_SIZE = 1000


class TrackingQueue:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        name: str = DEFAULT_QUEUE_NAME,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if int(batch_size) < 1:
            raise ValidationError("batch_size must be a positive integer")
        self._store = store
        self._name = name
        self._batch_size = int(batch_size)

    @property
    def name(self) -> str:
        return self._name

    async def append(self, key: str) -> None:
        await self._store.push_tail(self._name, key)

    async def pop_oldest(self) -> Optional[str]:
        return await self._store.pop_head(self._name)

    async def pop_newest(self) -> Optional[str]:
        return await self._store.pop_tail(self._name)

    async def remove(self, key: str) -> int:
        """Remove every occurrence of key; returns how many were dropped."""
        removed = await self._store.remove_all(self._name, key)
        if removed:
            logger.debug("Removed key from tracking queue", extra={"key": key, "occurrences": removed})
        return removed

    async def length(self) -> int:
        return await self._store.length(self._name)

    async def exists(self) -> bool:
        # Redis drops empty lists, so an empty queue has no key of its own
        return await self._store.exists(self._name)

    async def repair_head(self) -> int:
        """Pop stale keys off the head; returns the number popped."""
        popped = await self._repair(self._store.range_from_head, self._store.pop_head)
        if popped:
            logger.debug("Repaired tracking queue head", extra={"queue": self._name, "popped": popped})
        return popped

    async def repair_tail(self) -> int:
        """Pop stale keys off the tail; returns the number popped."""
        popped = await self._repair(self._store.range_from_tail, self._store.pop_tail)
        if popped:
            logger.debug("Repaired tracking queue tail", extra={"queue": self._name, "popped": popped})
        return popped

    async def _repair(
        self,
        read_batch: Callable[[str, int, int], Awaitable[List[str]]],
        pop: Callable[[str], Awaitable[Optional[str]]],
    ) -> int:
        popped = 0
        while True:
            # Stale keys already read were popped, so each batch starts at offset 0
            batch = await read_batch(self._name, 0, self._batch_size)
            for key in batch:
                if await self._store.exists(key):
                    return popped
                await pop(self._name)
                popped += 1

            # A short batch means the end of the queue was reached
            if len(batch) < self._batch_size:
                return popped
