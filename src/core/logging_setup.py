"""Process-wide logging configuration.

The stdio MCP transport owns stdout, so log records go to stderr (the
logging.basicConfig default).
"""

from __future__ import annotations

import logging


def configure_logging(level_name: str = "INFO") -> int:
    """Configure the root logger from a level name and return the numeric level."""
    level = getattr(logging, (level_name or "").strip().upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return level
