"""Clustered event entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClusteredEvent:
    """
    An event re-expanded against one of its stems' cluster.

    An event whose label yields N clustered stems appears N times, so
    per-cluster aggregates count it once per stem.
    """

    event_id: int
    stem: str
    cluster_id: int
    property_damage: float
    crop_damage: float
    fatalities: int
    injuries: int
