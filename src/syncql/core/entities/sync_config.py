"""Synchronization configuration entity."""

from dataclasses import dataclass


@dataclass
class SyncConfig:
    """Synchronization configuration.

    Both switches are non-functional with respect to tracking: in read-only
    mode queries are still tracked and optimistic snapshots still taken,
    only the writes and evictions against the cache store are skipped.
    """

    # Emit diagnostic log records (DEBUG for lifecycle, WARNING for
    # swallowed store failures)
    debug: bool = False

    # Never mutate the cache store
    read_only: bool = False
