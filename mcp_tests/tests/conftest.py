from typing import Dict, List, Optional

import pytest

from core.errors import ExternalServiceError


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool and resource registration."""

    def __init__(self) -> None:
        self.tools = {}
        self.resources = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator

    def resource(self, uri: str, **kwargs):
        def _decorator(fn):
            self.resources[uri] = fn
            return fn
        return _decorator


class FakeStore:
    """In-memory KeyValueStore with Redis-like keyspace accounting.

    Lists share one keyspace with plain values and vanish when emptied:
    SET over a list replaces it, and list commands on a plain value fail
    the way the Redis adapter reports WRONGTYPE.
    Every call is recorded in `calls` as (method, first_arg).
    """

    def __init__(self) -> None:
        self.values: Dict[str, str] = {}
        self.ttls: Dict[str, Optional[int]] = {}
        self.lists: Dict[str, List[str]] = {}
        self.calls: List[tuple] = []
        self.closed = False

    def _record(self, method: str, arg=None) -> None:
        self.calls.append((method, arg))

    def count_calls(self, method: str) -> int:
        return sum(1 for m, _ in self.calls if m == method)

    def expire(self, key: str) -> None:
        # Simulates store-side expiry: the value goes, the queue is not told
        self.values.pop(key, None)
        self.ttls.pop(key, None)

    def _check_list(self, name: str) -> None:
        if name in self.values:
            raise ExternalServiceError(f"WRONGTYPE Operation against a key holding the wrong kind of value: {name}")

    def _prune(self, name: str) -> None:
        if name in self.lists and not self.lists[name]:
            del self.lists[name]

    async def count(self) -> int:
        self._record("count")
        return len(self.values) + len(self.lists)

    async def get(self, key):
        self._record("get", key)
        return self.values.get(key)

    async def set_with_expiry(self, key, value, ttl_seconds):
        self._record("set_with_expiry", key)
        self.lists.pop(key, None)
        self.values[key] = value
        self.ttls[key] = ttl_seconds

    async def delete(self, key):
        self._record("delete", key)
        if key in self.values:
            self.expire(key)
            return 1
        if key in self.lists:
            del self.lists[key]
            return 1
        return 0

    async def exists(self, key):
        self._record("exists", key)
        return key in self.values or key in self.lists

    async def push_tail(self, name, value):
        self._record("push_tail", value)
        self._check_list(name)
        self.lists.setdefault(name, []).append(value)

    async def pop_head(self, name):
        self._record("pop_head", name)
        self._check_list(name)
        items = self.lists.get(name)
        if not items:
            return None
        out = items.pop(0)
        self._prune(name)
        return out

    async def pop_tail(self, name):
        self._record("pop_tail", name)
        self._check_list(name)
        items = self.lists.get(name)
        if not items:
            return None
        out = items.pop()
        self._prune(name)
        return out

    async def range_from_head(self, name, start, end):
        self._record("range_from_head", (start, end))
        self._check_list(name)
        return list(self.lists.get(name, [])[start:end])

    async def range_from_tail(self, name, start, end):
        self._record("range_from_tail", (start, end))
        self._check_list(name)
        return list(reversed(self.lists.get(name, [])))[start:end]

    async def remove_all(self, name, value):
        self._record("remove_all", value)
        items = self.lists.get(name, [])
        kept = [k for k in items if k != value]
        removed = len(items) - len(kept)
        if name in self.lists:
            self.lists[name] = kept
            self._prune(name)
        return removed

    async def length(self, name):
        self._record("length", name)
        return len(self.lists.get(name, []))

    async def close(self):
        self._record("close")
        self.closed = True


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def fake_store():
    return FakeStore()
