"""Clustering of NOAA storm event types by average damage."""

__version__ = "1.0.0"
