"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (e.g.
CACHE_HOST, CACHE_PORT, NUMBER_OF_SLOTS, TTL_SECONDS, EVICTION_POLICY).
"""

from __future__ import annotations

import os
from typing import Optional

from core.models import CacheConfig, EvictionPolicy


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_optional_int(name: str, default: Optional[int]) -> Optional[int]:
    # Empty string or a non-positive value disables the setting
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else None


# Store connection
CACHE_HOST = (os.environ.get("CACHE_HOST") or os.environ.get("HOST") or "localhost").strip()
CACHE_PORT = _env_int("CACHE_PORT", 6379)
CACHE_DB = _env_int("CACHE_DB", 0)

# Cache policy
NUMBER_OF_SLOTS = _env_int("NUMBER_OF_SLOTS", 10_000)
TTL_SECONDS = _env_optional_int("TTL_SECONDS", 3600)
EVICTION_POLICY = os.environ.get("EVICTION_POLICY", EvictionPolicy.REJECT.value).strip()

# Tracking queue
TRACKING_QUEUE_NAME = os.environ.get("TRACKING_QUEUE_NAME", "trackKeyList").strip()
REPAIR_BATCH_SIZE = _env_int("REPAIR_BATCH_SIZE", 1000)
SERIALIZE_EVICTIONS = _env_bool("SERIALIZE_EVICTIONS", False)

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper()


def load_cache_config() -> CacheConfig:
    """Build the startup CacheConfig from the environment constants above."""
    return CacheConfig(
        host=CACHE_HOST,
        port=CACHE_PORT,
        db=CACHE_DB,
        capacity=NUMBER_OF_SLOTS,
        default_ttl_seconds=TTL_SECONDS,
        policy=EvictionPolicy.parse(EVICTION_POLICY),
        queue_name=TRACKING_QUEUE_NAME or "trackKeyList",
        repair_batch_size=REPAIR_BATCH_SIZE,
        serialize_evictions=SERIALIZE_EVICTIONS,
    )
