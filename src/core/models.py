"""Immutable configuration and result models for the cache engine.

Includes the eviction policy enum, the CacheConfig value object supplied
once per (re)configuration, and the PutResult echoed back to callers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

from core.errors import ValidationError


class EvictionPolicy(str, Enum):
    OLDEST_FIRST = "OldestFirst"
    NEWEST_FIRST = "NewestFirst"
    REJECT = "Reject"

    @classmethod
    def parse(cls, raw: "str | EvictionPolicy") -> "EvictionPolicy":
        """Accept the wire names plus a few human spellings, case-insensitively."""
        if isinstance(raw, EvictionPolicy):
            return raw
        s = (raw or "").strip().lower().replace("_", "-")
        aliases = {
            "oldestfirst": cls.OLDEST_FIRST,
            "oldest-first": cls.OLDEST_FIRST,
            "evict-oldest": cls.OLDEST_FIRST,
            "oldest": cls.OLDEST_FIRST,
            "newestfirst": cls.NEWEST_FIRST,
            "newest-first": cls.NEWEST_FIRST,
            "evict-newest": cls.NEWEST_FIRST,
            "newest": cls.NEWEST_FIRST,
            "reject": cls.REJECT,
        }
        try:
            return aliases[s]
        except KeyError:
            raise ValidationError(f"Unknown eviction policy: {raw!r}") from None


@dataclass(frozen=True)
class CacheConfig:
    """Connection and policy settings for one configured engine.

    Field groups:
    - Store: host, port, db
    - Policy: capacity, default_ttl_seconds, policy
    - Tracking queue: queue_name, repair_batch_size, serialize_evictions

    default_ttl_seconds=None means entries written without an explicit TTL
    never expire.
    """

    host: str
    port: int

    db: int = 0

    capacity: int = 10_000
    default_ttl_seconds: Optional[int] = 3600
    policy: EvictionPolicy = EvictionPolicy.REJECT

    queue_name: str = "trackKeyList"
    repair_batch_size: int = 1000
    serialize_evictions: bool = False

    def __post_init__(self) -> None:
        if not (self.host or "").strip():
            raise ValidationError("Missing store host")
        if not 0 < int(self.port) < 65536:
            raise ValidationError(f"Invalid store port: {self.port}")
        if int(self.capacity) < 1:
            raise ValidationError("capacity must be a positive integer")
        if self.default_ttl_seconds is not None and int(self.default_ttl_seconds) < 1:
            raise ValidationError("default_ttl_seconds must be positive or None")
        if int(self.repair_batch_size) < 1:
            raise ValidationError("repair_batch_size must be a positive integer")
        if not (self.queue_name or "").strip():
            raise ValidationError("Missing tracking queue name")
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "policy", EvictionPolicy.parse(self.policy))

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["policy"] = self.policy.value
        return out


@dataclass(frozen=True)
class PutResult:
    key: str
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "value": self.value}
