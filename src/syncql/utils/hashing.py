"""Hashing utilities for cache key identity."""

import hashlib
import json
from collections.abc import Mapping
from typing import Any


def freeze_value(value: Any) -> Any:
    """Convert a JSON-like value into a hashable canonical form.

    Mappings become sorted tuples of ``(key, value)`` pairs and sequences
    become tuples, recursively, so two structurally equal values always
    freeze to equal (and equally hashed) results regardless of key order.
    Scalars are tagged with their type, keeping ``True``, ``1``, ``1.0``
    and ``"1"`` apart.

    Args:
        value: A JSON-like value (mappings, lists, scalars).

    Returns:
        A hashable representation of the value.
    """
    if isinstance(value, Mapping):
        items = ((freeze_value(k), freeze_value(v)) for k, v in value.items())
        return ("__map__", tuple(sorted(items, key=repr)))
    if isinstance(value, (list, tuple)):
        return ("__seq__", tuple(freeze_value(v) for v in value))
    if isinstance(value, (set, frozenset)):
        return ("__set__", tuple(sorted((freeze_value(v) for v in value), key=repr)))
    return (type(value).__name__, value)


def hash_value(value: Any) -> str:
    """Create a deterministic short hash of a value.

    Used for log output only; identity comparisons go through
    :func:`freeze_value`.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    if value is None:
        return "none"

    normalized = json.dumps(value, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def canonical_json(value: Any) -> str:
    """Serialize arguments the way store field names embed them."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
