"""Domain entities."""

from .storm_event import StormEvent
from .damage_magnitude import DamageMagnitude
from .event_token import EventToken
from .stem_profile import PROFILE_FIELDS, StemProfile
from .stem_cluster import ClusteringResult, MergeStep, StemCluster
from .clustered_event import ClusteredEvent

__all__ = [
    "StormEvent",
    "DamageMagnitude",
    "EventToken",
    "PROFILE_FIELDS",
    "StemProfile",
    "ClusteringResult",
    "MergeStep",
    "StemCluster",
    "ClusteredEvent",
]
