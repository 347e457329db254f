"""Use cases - core business operations."""

from .load_storm_events import LoadStormEventsUseCase
from .normalize_event_label import normalize_label
from .tokenize_event_types import EventTypeStemmer, TokenizeEventTypesUseCase
from .aggregate_stem_profiles import AggregateStemProfilesUseCase
from .cluster_stem_profiles import ClusterStemProfilesUseCase, cut_tree
from .summarize_clusters import SummarizeClustersUseCase

__all__ = [
    "LoadStormEventsUseCase",
    "normalize_label",
    "EventTypeStemmer",
    "TokenizeEventTypesUseCase",
    "AggregateStemProfilesUseCase",
    "ClusterStemProfilesUseCase",
    "cut_tree",
    "SummarizeClustersUseCase",
]
