"""Concrete repository implementations."""

from .noaa_storm_event_repository import NOAAStormEventRepository

__all__ = [
    "NOAAStormEventRepository",
]
