"""MCP tools for reading, storing and removing cached objects.

Registers 'get_object', 'put_object' and 'delete_object', which delegate
to the injected CacheEngine. Engine errors (ValidationError,
NotFoundError, StorageFullError, StoreUnavailableError) propagate to the
MCP layer with their kind intact.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from engine.cache_engine import CacheEngine


def register(mcp: FastMCP, *, engine: CacheEngine) -> None:
    @mcp.tool(name="get_object")
    async def get_object(key: str) -> str:
        """Return the stored (JSON-serialized) value for a key.

        Params:
          - key: cache key (required).

        Raises:
          NotFoundError if the key is absent, expired or never written.
        """
        return await engine.get(key)

    @mcp.tool(name="put_object")
    async def put_object(key: str, value: Any, ttl: Optional[int] = None) -> Dict[str, Any]:
        """Store a JSON value under key, evicting per policy when the cache is full.

        Params:
          - key: cache key (required).
          - value: any JSON value; stored in serialized form.
          - ttl: optional expiry in seconds; 0 stores without expiry,
            omitted uses the configured TTL.

        Returns:
          {"key": ..., "value": ...} echoing what was stored.

        Raises:
          StorageFullError when full under the Reject policy;
          StoreUnavailableError when the store cannot be reached.
        """
        result = await engine.put(key, value, ttl)
        return result.to_dict()

    @mcp.tool(name="delete_object")
    async def delete_object(key: str) -> str:
        """Remove a key from the cache and its tracking queue; returns the key."""
        return await engine.delete(key)
