"""Parse key counts out of the store's keyspace introspection.

redis-py hands back ``INFO keyspace`` already split into a mapping such as
``{"db0": {"keys": 3, "expires": 1, "avg_ttl": 0}}``; raw text looks like::

    # Keyspace
    db0:keys=3,expires=1,avg_ttl=0

An empty keyspace has no ``db<n>`` line at all, which counts as zero keys.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Union

_KEYS_RE = re.compile(r"(?:^|,)keys=(\d+)")


def _keys_from_segment(segment: str) -> int:
    m = _KEYS_RE.search(segment.strip())
    return int(m.group(1)) if m else 0


def parse_keyspace_keys(info: Union[Mapping[str, Any], str, bytes, None], db: int = 0) -> int:
    """Return the ``keys=<n>`` value for ``db``; 0 when the segment is absent."""
    if not info:
        return 0

    section = f"db{int(db)}"

    if isinstance(info, Mapping):
        entry = info.get(section)
        if entry is None:
            return 0
        if isinstance(entry, Mapping):
            try:
                return int(entry.get("keys", 0))
            except (TypeError, ValueError):
                return 0
        # Unparsed value, e.g. "keys=3,expires=0,avg_ttl=0"
        return _keys_from_segment(str(entry))

    text = info.decode("utf-8", "replace") if isinstance(info, bytes) else str(info)
    for line in text.splitlines():
        name, sep, rest = line.strip().partition(":")
        if sep and name == section:
            return _keys_from_segment(rest)
    return 0
