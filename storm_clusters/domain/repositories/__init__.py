"""Repository interfaces."""

from .storm_event_repository import StormEventRepository

__all__ = [
    "StormEventRepository",
]
