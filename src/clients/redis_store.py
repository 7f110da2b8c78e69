"""Redis adapter implementing the KeyValueStore protocol.

Wraps a single shared ``redis.asyncio.Redis`` client (connection pool) and
maps redis-py failures onto the project error taxonomy: connectivity
problems become StoreUnavailableError, anything else ExternalServiceError.
"""

from __future__ import annotations

import logging
from typing import Awaitable, List, Optional, TypeVar

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from core.errors import ExternalServiceError, StoreUnavailableError
from core.keyspace import parse_keyspace_keys

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RedisStore:
    def __init__(
        self,
        *,
        host: str,
        port: int,
        db: int = 0,
        socket_timeout: Optional[float] = 5.0,
        client: Optional["redis.Redis"] = None,
    ) -> None:
        self._host = host
        self._port = int(port)
        self._db = int(db)
        # Connections are opened lazily by the pool on first command
        self._client = client or redis.Redis(
            host=host,
            port=self._port,
            db=self._db,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            decode_responses=True,
        )

    @property
    def address(self) -> str:
        return f"{self._host}:{self._port}/{self._db}"

    async def count(self) -> int:
        info = await self._run("INFO keyspace", self._client.info("keyspace"))
        return parse_keyspace_keys(info, self._db)

    async def get(self, key: str) -> Optional[str]:
        return await self._run("GET", self._client.get(key))

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: Optional[int]) -> None:
        if ttl_seconds:
            await self._run("SET EX", self._client.set(key, value, ex=int(ttl_seconds)))
        else:
            await self._run("SET", self._client.set(key, value))

    async def delete(self, key: str) -> int:
        return int(await self._run("DEL", self._client.delete(key)))

    async def exists(self, key: str) -> bool:
        return int(await self._run("EXISTS", self._client.exists(key))) > 0

    async def push_tail(self, name: str, value: str) -> None:
        await self._run("RPUSH", self._client.rpush(name, value))

    async def pop_head(self, name: str) -> Optional[str]:
        return await self._run("LPOP", self._client.lpop(name))

    async def pop_tail(self, name: str) -> Optional[str]:
        return await self._run("RPOP", self._client.rpop(name))

    async def range_from_head(self, name: str, start: int, end: int) -> List[str]:
        if end <= start:
            return []
        # LRANGE bounds are inclusive
        return list(await self._run("LRANGE", self._client.lrange(name, start, end - 1)))

    async def range_from_tail(self, name: str, start: int, end: int) -> List[str]:
        if end <= start:
            return []
        # Tail offsets [start, end) are list indices [-end, -start - 1]
        items = await self._run("LRANGE", self._client.lrange(name, -end, -start - 1))
        return list(reversed(items))

    async def remove_all(self, name: str, value: str) -> int:
        # LREM with count 0 removes every occurrence
        return int(await self._run("LREM", self._client.lrem(name, 0, value)))

    async def length(self, name: str) -> int:
        return int(await self._run("LLEN", self._client.llen(name)))

    async def close(self) -> None:
        try:
            await self._client.aclose()
        except RedisError as e:
            logger.warning("Closing redis client failed", extra={"address": self.address, "error": str(e)})

    async def _run(self, context: str, call: Awaitable[T]) -> T:
        try:
            return await call
        except (RedisConnectionError, RedisTimeoutError, OSError) as e:
            raise StoreUnavailableError(f"Store unreachable at {self.address} ({context}): {e}") from e
        except RedisError as e:
            raise ExternalServiceError(f"Store command failed ({context}): {e}") from e
