"""Use case for aggregating per-stem damage profiles."""

import logging
from typing import List

import numpy as np
import pandas as pd

from ..entities.event_token import EventToken
from ..entities.stem_profile import PROFILE_FIELDS, StemProfile
from ..entities.storm_event import StormEvent
from ..exceptions import InsufficientDataError, InvalidParameterError, SchemaError

logger = logging.getLogger(__name__)


def events_to_frame(events: List[StormEvent]) -> pd.DataFrame:
    """Numeric fields of events as a DataFrame keyed by event_id."""
    return pd.DataFrame(
        {
            "event_id": [e.event_id for e in events],
            "property_damage": [float(e.property_damage) for e in events],
            "crop_damage": [float(e.crop_damage) for e in events],
            "fatalities": [float(e.fatalities) for e in events],
            "injuries": [float(e.injuries) for e in events],
        },
        columns=["event_id", *PROFILE_FIELDS],
    ).astype({"event_id": "int64"})


def tokens_to_frame(tokens: List[EventToken]) -> pd.DataFrame:
    """Tokens as a two-column DataFrame."""
    return pd.DataFrame(
        {"event_id": [t.event_id for t in tokens], "stem": [t.stem for t in tokens]},
        columns=["event_id", "stem"],
    ).astype({"event_id": "int64", "stem": object})


class AggregateStemProfilesUseCase:
    """Use case to compute log-transformed mean damage per stem."""

    def __init__(self, frequency_threshold: int = 50, log_offset: float = 0.01):
        """
        Initialize use case.

        Args:
            frequency_threshold: Stems with support <= this value are dropped
            log_offset: Added to each mean before taking the log
        """
        if isinstance(frequency_threshold, bool) or not isinstance(
            frequency_threshold, (int, np.integer)
        ):
            raise InvalidParameterError(
                f"frequency_threshold must be an integer, got {frequency_threshold!r}"
            )
        if frequency_threshold < 0:
            raise InvalidParameterError(
                f"frequency_threshold must be >= 0, got {frequency_threshold}"
            )
        if log_offset <= 0:
            raise InvalidParameterError(f"log_offset must be > 0, got {log_offset}")

        self.frequency_threshold = int(frequency_threshold)
        self.log_offset = log_offset

    def summarize(self, events: List[StormEvent], tokens: List[EventToken]) -> pd.DataFrame:
        """
        Support and raw (untransformed) means for every stem.

        Returns:
            DataFrame indexed by stem with a 'support' column and one column
            per profile field, sorted by stem
        """
        df_events = events_to_frame(events)
        if df_events["event_id"].duplicated().any():
            raise SchemaError("Duplicate event identifiers in aggregation input")

        df_tokens = tokens_to_frame(tokens).drop_duplicates()
        df = df_tokens.merge(df_events, on="event_id", how="left", validate="many_to_one")

        orphaned = df["property_damage"].isna()
        if orphaned.any():
            raise SchemaError(f"{int(orphaned.sum())} tokens reference unknown events")

        grouped = df.groupby("stem", sort=True)
        summary = grouped[list(PROFILE_FIELDS)].mean()
        summary.insert(0, "support", grouped.size())
        return summary

    def execute(self, events: List[StormEvent], tokens: List[EventToken]) -> List[StemProfile]:
        """
        Execute aggregation.

        Args:
            events: List of StormEvent entities
            tokens: List of EventToken entities derived from the events

        Returns:
            List of StemProfile entities sorted by stem

        Raises:
            InsufficientDataError: If fewer than two stems pass the filter
        """
        logger.info(
            f"Aggregating {len(tokens)} tokens (frequency threshold: {self.frequency_threshold})"
        )

        summary = self.summarize(events, tokens)
        kept = summary[summary["support"] > self.frequency_threshold]
        logger.info(f"{len(kept)} of {len(summary)} stems have support > {self.frequency_threshold}")

        if len(kept) < 2:
            raise InsufficientDataError(
                f"Only {len(kept)} stems have support > {self.frequency_threshold}; "
                "at least 2 are needed for clustering"
            )

        logged = np.log(kept[list(PROFILE_FIELDS)] + self.log_offset)

        return [
            StemProfile(
                stem=stem,
                support=int(kept.at[stem, "support"]),
                property_damage=float(row["property_damage"]),
                crop_damage=float(row["crop_damage"]),
                fatalities=float(row["fatalities"]),
                injuries=float(row["injuries"]),
            )
            for stem, row in logged.iterrows()
        ]
