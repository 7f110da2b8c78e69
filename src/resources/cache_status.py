import json

from mcp.server.fastmcp import FastMCP

from engine.cache_engine import CacheEngine


def register_resources(mcp: FastMCP, *, engine: CacheEngine) -> None:
    """
    Register read-only cache status resources for the MCP server.
    """

    @mcp.resource(
        "cache://config",
        mime_type="application/json",
        description="Active cache configuration (store location, capacity, TTL, policy)"
    )
    def cache_config() -> str:
        cfg = engine.config
        return json.dumps(cfg.to_dict() if cfg is not None else None)

    @mcp.resource(
        "cache://stats",
        mime_type="application/json",
        description="Resident entries, capacity and tracking queue length"
    )
    async def cache_stats() -> str:
        return json.dumps(await engine.stats())
