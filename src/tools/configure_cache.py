"""MCP tool to (re)configure the cache engine at runtime.

Registers 'configure_cache', which replaces the store connection and the
eviction settings of the injected engine in one step.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from config import REPAIR_BATCH_SIZE, SERIALIZE_EVICTIONS, TRACKING_QUEUE_NAME
from core.models import CacheConfig, EvictionPolicy
from engine.cache_engine import CacheEngine


def register(mcp: FastMCP, *, engine: CacheEngine) -> None:
    @mcp.tool(name="configure_cache")
    async def configure_cache(
        host: str,
        port: int,
        capacity: int = 10_000,
        ttl_seconds: Optional[int] = 3600,
        policy: str = EvictionPolicy.REJECT.value,
        db: int = 0,
    ) -> Dict[str, Any]:
        """Point the cache at a store and set its capacity, default TTL and policy.

        Params:
          - host, port, db: store location.
          - capacity: maximum resident entries (default 10000).
          - ttl_seconds: default expiry; 0 or null disables expiry (default 3600).
          - policy: "OldestFirst", "NewestFirst" or "Reject" (default "Reject").

        Returns:
          The applied configuration.

        Raises:
          ValidationError for invalid settings. Any previous store connection
          is closed and replaced.
        """
        cfg = CacheConfig(
            host=host,
            port=port,
            db=db,
            capacity=capacity,
            default_ttl_seconds=ttl_seconds or None,
            policy=EvictionPolicy.parse(policy),
            queue_name=TRACKING_QUEUE_NAME or "trackKeyList",
            repair_batch_size=REPAIR_BATCH_SIZE,
            serialize_evictions=SERIALIZE_EVICTIONS,
        )
        await engine.configure(cfg)
        return cfg.to_dict()
