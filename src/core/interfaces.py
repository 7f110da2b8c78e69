"""Core protocol and interface definitions.

Defines the KeyValueStore protocol: the store capability the cache engine
drives (per-key values with expiry, keyspace introspection, and a named
ordered list used as the tracking queue).
"""

from __future__ import annotations

from typing import List, Optional, Protocol


class KeyValueStore(Protocol):
    """Contract for any backing store (Redis, in-memory fakes, etc.).

    List ranges are half-open: [start, end). range_from_tail returns keys in
    tail-to-head order, so index 0 is the most recently pushed element.
    """

    async def count(self) -> int:
        ...

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: Optional[int]) -> None:
        ...

    async def delete(self, key: str) -> int:
        ...

    async def exists(self, key: str) -> bool:
        ...

    async def push_tail(self, name: str, value: str) -> None:
        ...

    async def pop_head(self, name: str) -> Optional[str]:
        ...

    async def pop_tail(self, name: str) -> Optional[str]:
        ...

    async def range_from_head(self, name: str, start: int, end: int) -> List[str]:
        ...

    async def range_from_tail(self, name: str, start: int, end: int) -> List[str]:
        ...

    async def remove_all(self, name: str, value: str) -> int:
        ...

    async def length(self, name: str) -> int:
        ...

    async def close(self) -> None:
        ...
