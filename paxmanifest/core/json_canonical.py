"""
Deterministic JSON serialization for snapshots and exports.

Identical manifests produce identical JSON regardless of dict ordering,
which keeps snapshot fingerprints and JSONL exports byte-stable.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

import orjson


def _default_serializer(obj: Any) -> Any:
    """
    Serializer for types orjson does not handle natively.

    Raises:
        TypeError: If the object cannot be serialized.
    """
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, datetime):
        return obj.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")

    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json_dumps(obj: Any) -> str:
    """
    Serialize an object to canonical JSON text.

    Examples:
        >>> canonical_json_dumps({"b": 2, "a": 1})
        '{"a":1,"b":2}'
    """
    return canonical_json_bytes(obj).decode("utf-8")


def canonical_json_bytes(obj: Any) -> bytes:
    """Serialize an object to canonical JSON bytes, for hashing."""
    return orjson.dumps(obj, default=_default_serializer, option=orjson.OPT_SORT_KEYS)


def to_jsonl_line(obj: Any) -> str:
    """Convert an object to a single JSONL line with trailing newline."""
    return canonical_json_dumps(obj) + "\n"
