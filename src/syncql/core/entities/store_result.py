"""Result values returned from cache adapter reads.

The adapter reports store outcomes as values instead of raising, so the
orchestrator decides explicitly what a miss or a store fault means.
"""

from dataclasses import dataclass
from typing import Any

from syncql.core.errors import CacheStoreFailure


@dataclass(frozen=True)
class Ok:
    """The store returned data."""

    value: Any


@dataclass(frozen=True)
class NotFound:
    """The store holds no (complete) entry for the key."""

    key: Any


@dataclass(frozen=True)
class StoreError:
    """The store failed; the failure was logged and swallowed."""

    failure: CacheStoreFailure


ReadResult = Ok | NotFound | StoreError
