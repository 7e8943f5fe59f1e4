"""Strawberry framework adapter for syncql."""

from syncql.adapters.strawberry.transport import StrawberryTransport

__all__ = [
    "StrawberryTransport",
]
