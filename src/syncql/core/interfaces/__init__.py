"""Core interfaces (Protocol classes) for syncql."""

from syncql.core.interfaces.cache_store import REQUIRED_STORE_METHODS, ICacheStore
from syncql.core.interfaces.transport import IForward

__all__ = [
    "ICacheStore",
    "IForward",
    "REQUIRED_STORE_METHODS",
]
