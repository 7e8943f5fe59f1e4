"""Utility helpers for syncql."""

from syncql.utils.hashing import canonical_json, freeze_value, hash_value

__all__ = [
    "canonical_json",
    "freeze_value",
    "hash_value",
]
