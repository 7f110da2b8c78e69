"""Capacity-bounded cache engine over a TTL key-value store.

CacheEngine is an explicitly constructed object owned by the server and
injected into the tool layer. It keeps no private copy of the tracking
queue; all state lives in the store.

Every store call is awaited in order: the value write happens before the
tracking-queue append, and a victim is popped before it is deleted. Nothing
spans a transaction, so concurrent puts against a nearly full cache can
each evict a victim (set serialize_evictions to guard this in-process).
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Tuple

from core.errors import NotFoundError, StoreUnavailableError, ValidationError
from core.interfaces import KeyValueStore
from core.models import CacheConfig, PutResult
from engine.eviction import Evictor
from engine.store_factory import get_store
from engine.tracking_queue import TrackingQueue

logger = logging.getLogger(__name__)


def serialize_value(value: Any) -> str:
    """Encode a caller value the way it is stored (compact JSON)."""
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Value is not JSON serializable: {e}") from e


def _clean_key(key: str) -> str:
    if not isinstance(key, str) or not key.strip():
        raise ValidationError("Missing key")
    return key


def _clean_ttl(ttl_seconds: Optional[int]) -> Optional[int]:
    # None means "use the default"; 0 means "no expiry for this entry"
    if ttl_seconds is None:
        return None
    if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, int) or ttl_seconds < 0:
        raise ValidationError(f"ttl must be a non-negative number of seconds, got {ttl_seconds!r}")
    return ttl_seconds


def _check_not_reserved(key: str, queue: TrackingQueue) -> None:
    if key == queue.name:
        raise ValidationError(f"Key {key!r} is reserved for the tracking queue")


class CacheEngine:
    """Bounded cache: get/put/delete with oldest-first, newest-first or reject eviction.

    Construct with a CacheConfig (and optionally an injected store), or
    construct empty and call configure() later. Operations on an
    unconfigured engine raise StoreUnavailableError.
    """

    def __init__(self, config: Optional[CacheConfig] = None, *, store: Optional[KeyValueStore] = None) -> None:
        self._config: Optional[CacheConfig] = None
        self._store: Optional[KeyValueStore] = None
        self._queue: Optional[TrackingQueue] = None
        self._evictor: Optional[Evictor] = None
        self._eviction_lock = asyncio.Lock()

        if config is not None:
            self._install(config, get_store(config, store=store))

    @property
    def config(self) -> Optional[CacheConfig]:
        return self._config

    @property
    def configured(self) -> bool:
        return self._store is not None

    async def configure(self, config: CacheConfig, *, store: Optional[KeyValueStore] = None) -> None:
        """(Re)initialize the store connection and policy, replacing any prior one."""
        new_store = get_store(config, store=store)
        old_store = self._store
        self._install(config, new_store)

        if old_store is not None and old_store is not new_store:
            await old_store.close()

        logger.info(
            "Cache configured",
            extra={
                "host": config.host,
                "port": config.port,
                "db": config.db,
                "capacity": config.capacity,
                "default_ttl_seconds": config.default_ttl_seconds,
                "policy": config.policy.value,
            },
        )

    async def close(self) -> None:
        store = self._store
        self._config = self._store = self._queue = self._evictor = None
        if store is not None:
            await store.close()

    async def resident_count(self) -> int:
        """Number of cached entries, not counting the tracking queue's own key."""
        store, queue, _, _ = self._require()
        return await self._resident_count(store, queue)

    async def get(self, key: str) -> str:
        key = _clean_key(key)
        store, queue, _, _ = self._require()
        _check_not_reserved(key, queue)

        value = await store.get(key)
        if value is None:
            logger.debug("Cache miss", extra={"key": key})
            raise NotFoundError("Object not found or expired")

        logger.debug("Cache hit", extra={"key": key})
        return value

    async def put(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> PutResult:
        key = _clean_key(key)
        ttl_override = _clean_ttl(ttl_seconds)
        payload = serialize_value(value)
        store, queue, evictor, config = self._require()
        _check_not_reserved(key, queue)

        if config.serialize_evictions:
            async with self._eviction_lock:
                await self._make_room(store, queue, evictor, config)
        else:
            await self._make_room(store, queue, evictor, config)

        if ttl_override is None:
            ttl = config.default_ttl_seconds
        else:
            ttl = ttl_override or None
        await store.set_with_expiry(key, payload, ttl)
        # Append only after the value is written so the queue never leads the store
        await queue.append(key)

        logger.debug("Cache set", extra={"key": key, "ttl_seconds": ttl, "value_length": len(payload)})
        return PutResult(key=key, value=value)

    async def delete(self, key: str) -> str:
        key = _clean_key(key)
        store, queue, _, _ = self._require()
        _check_not_reserved(key, queue)

        removed = await store.delete(key)
        if not removed:
            raise NotFoundError("Object not found or expired")

        await queue.remove(key)
        logger.debug("Cache delete", extra={"key": key})
        return key

    async def stats(self) -> Dict[str, Any]:
        store, queue, _, config = self._require()
        return {
            "resident": await self._resident_count(store, queue),
            "capacity": config.capacity,
            "policy": config.policy.value,
            "queue_name": queue.name,
            "queue_length": await queue.length(),
        }

    async def _make_room(
        self,
        store: KeyValueStore,
        queue: TrackingQueue,
        evictor: Evictor,
        config: CacheConfig,
    ) -> None:
        resident = await self._resident_count(store, queue)
        if resident >= config.capacity:
            logger.debug(
                "Cache at capacity",
                extra={"resident": resident, "capacity": config.capacity, "policy": config.policy.value},
            )
            await evictor.evict()

    async def _resident_count(self, store: KeyValueStore, queue: TrackingQueue) -> int:
        total = await store.count()
        if total <= 0:
            return 0
        if await queue.exists():
            total -= 1
        return max(0, total)

    def _install(self, config: CacheConfig, store: KeyValueStore) -> None:
        queue = TrackingQueue(store, name=config.queue_name, batch_size=config.repair_batch_size)
        self._config = config
        self._store = store
        self._queue = queue
        self._evictor = Evictor(store, queue, config.policy)

    def _require(self) -> Tuple[KeyValueStore, TrackingQueue, Evictor, CacheConfig]:
        # Snapshot the active components so a concurrent reconfigure cannot mix them
        if self._store is None or self._queue is None or self._evictor is None or self._config is None:
            raise StoreUnavailableError("Uninitialized store client")
        return self._store, self._queue, self._evictor, self._config
