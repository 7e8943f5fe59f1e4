"""Ariadne framework adapter for syncql."""

from syncql.adapters.ariadne.transport import AriadneTransport

__all__ = [
    "AriadneTransport",
]
