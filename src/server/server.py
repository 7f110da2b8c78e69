"""Server bootstrap for the bounded cache MCP service.

Configures logging, creates the FastMCP instance and the CacheEngine from
environment settings, wires the engine into tools and resources, and starts
the MCP server (stdio transport).
"""

import logging

from mcp.server.fastmcp import FastMCP

from config import LOG_LEVEL, load_cache_config
from core.logging_setup import configure_logging
from engine.cache_engine import CacheEngine

from tools.cache_objects import register as register_cache_objects
from tools.configure_cache import register as register_configure_cache

from resources.cache_status import register_resources

configure_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)

mcp = FastMCP("bounded-cache-mcp")

# Single engine owned by the server; connections open lazily on first command
engine = CacheEngine(load_cache_config())


def register_tools() -> None:
    register_cache_objects(mcp, engine=engine)
    register_configure_cache(mcp, engine=engine)


def register_all() -> None:
    register_tools()
    register_resources(mcp, engine=engine)


register_all()


def main() -> None:
    cfg = engine.config
    logger.info(
        "Starting bounded-cache-mcp",
        extra={"capacity": cfg.capacity, "policy": cfg.policy.value} if cfg else {},
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
