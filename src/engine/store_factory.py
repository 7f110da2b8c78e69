"""Factory for building the KeyValueStore behind a configured engine.

Exposes get_store which returns an injected store when one is given and a
RedisStore for the configured host/port/db otherwise.
"""

from __future__ import annotations

from typing import Optional

from clients.redis_store import RedisStore
from core.interfaces import KeyValueStore
from core.models import CacheConfig


def get_store(config: CacheConfig, *, store: Optional[KeyValueStore] = None) -> KeyValueStore:
    if store is not None:
        return store
    return RedisStore(host=config.host, port=config.port, db=config.db)
