"""Use case for summarizing damage per stem cluster."""

import logging
from typing import List, Sequence

import pandas as pd

from ..entities.clustered_event import ClusteredEvent
from ..entities.event_token import EventToken
from ..entities.stem_cluster import ClusteringResult
from ..entities.stem_profile import PROFILE_FIELDS, StemProfile
from ..entities.storm_event import StormEvent
from ..exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "cluster_id",
    "members",
    "n_rows",
    "n_events",
    "fatalities",
    "injuries",
    "property_damage",
    "crop_damage",
]


class SummarizeClustersUseCase:
    """
    Aggregates raw damage and casualties per cluster for reporting.

    Works on the event x stem expansion, so an event with several clustered
    stems is counted once per stem.
    """

    def expand(
        self,
        events: Sequence[StormEvent],
        tokens: Sequence[EventToken],
        result: ClusteringResult,
    ) -> List[ClusteredEvent]:
        """Join tokens to their events and clusters, dropping unclustered stems."""
        by_id = {e.event_id: e for e in events}
        rows = []
        for token in tokens:
            cluster_id = result.assignments.get(token.stem)
            if cluster_id is None:
                continue
            event = by_id[token.event_id]
            rows.append(
                ClusteredEvent(
                    event_id=event.event_id,
                    stem=token.stem,
                    cluster_id=cluster_id,
                    property_damage=event.property_damage,
                    crop_damage=event.crop_damage,
                    fatalities=event.fatalities,
                    injuries=event.injuries,
                )
            )
        return rows

    def execute(
        self,
        events: Sequence[StormEvent],
        tokens: Sequence[EventToken],
        result: ClusteringResult,
    ) -> pd.DataFrame:
        """
        Execute summarization.

        Args:
            events: StormEvent entities
            tokens: EventToken entities derived from the events
            result: Clustering of the surviving stems

        Returns:
            DataFrame with one row per cluster (SUMMARY_COLUMNS), sorted by id
        """
        clustered = self.expand(events, tokens, result)
        logger.info(f"Summarizing {len(clustered)} clustered event rows")

        df = pd.DataFrame(
            [
                {
                    "event_id": c.event_id,
                    "cluster_id": c.cluster_id,
                    "property_damage": c.property_damage,
                    "crop_damage": c.crop_damage,
                    "fatalities": c.fatalities,
                    "injuries": c.injuries,
                }
                for c in clustered
            ],
            columns=["event_id", "cluster_id", *PROFILE_FIELDS],
        )

        grouped = df.groupby("cluster_id")
        means = grouped[list(PROFILE_FIELDS)].mean()

        summary = pd.DataFrame(
            {
                "cluster_id": [c.cluster_id for c in result.clusters],
                "members": [" ".join(c.members) for c in result.clusters],
            }
        ).set_index("cluster_id", drop=False)
        summary["n_rows"] = grouped.size().reindex(summary.index, fill_value=0)
        summary["n_events"] = grouped["event_id"].nunique().reindex(summary.index, fill_value=0)
        for name in ("fatalities", "injuries", "property_damage", "crop_damage"):
            summary[name] = means[name].reindex(summary.index)

        return summary[SUMMARY_COLUMNS].reset_index(drop=True)

    @staticmethod
    def rank(summary: pd.DataFrame, by: str = "fatalities") -> pd.DataFrame:
        """Clusters from most to least severe on one column; ties by cluster id."""
        if by not in summary.columns or by in ("cluster_id", "members"):
            raise InvalidParameterError(f"Cannot rank clusters by '{by}'")
        return summary.sort_values(
            [by, "cluster_id"], ascending=[False, True], kind="mergesort"
        ).reset_index(drop=True)

    @staticmethod
    def top_stems(profiles: Sequence[StemProfile], n: int = 10) -> List[StemProfile]:
        """The n most frequent stems; ties broken alphabetically."""
        if n < 0:
            raise InvalidParameterError(f"n must be >= 0, got {n}")
        return sorted(profiles, key=lambda p: (-p.support, p.stem))[:n]
