"""Main service orchestrating the storm damage clustering workflow."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

from ...domain.entities.event_token import EventToken
from ...domain.entities.stem_cluster import ClusteringResult
from ...domain.entities.stem_profile import StemProfile
from ...domain.entities.storm_event import StormEvent
from ...domain.repositories.storm_event_repository import StormEventRepository

# Use cases
from ...domain.use_cases.load_storm_events import LoadStormEventsUseCase
from ...domain.use_cases.tokenize_event_types import TokenizeEventTypesUseCase
from ...domain.use_cases.aggregate_stem_profiles import AggregateStemProfilesUseCase
from ...domain.use_cases.cluster_stem_profiles import ClusterStemProfilesUseCase
from ...domain.use_cases.summarize_clusters import SummarizeClustersUseCase

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    """Everything produced by one run of the pipeline."""

    n_events: int
    tokens: List[EventToken]
    profiles: List[StemProfile]
    clustering: ClusteringResult
    summary: pd.DataFrame

    def ranked(self, by: str = "fatalities") -> pd.DataFrame:
        return SummarizeClustersUseCase.rank(self.summary, by=by)


class StormDamageAnalysisService:
    """Orchestrates load -> tokenize -> aggregate -> cluster -> summarize."""

    def __init__(
        self,
        repository: StormEventRepository,
        frequency_threshold: int = 50,
        n_clusters: int = 6,
        metric: str = "euclidean",
        method: str = "complete",
        log_offset: float = 0.01,
        export_dir: Optional[str] = None,
    ):
        self.repository = repository
        self.export_dir = Path(export_dir) if export_dir else None

        self.load_uc = LoadStormEventsUseCase(repository)
        self.tokenize_uc = TokenizeEventTypesUseCase()
        self.aggregate_uc = AggregateStemProfilesUseCase(
            frequency_threshold=frequency_threshold, log_offset=log_offset
        )
        self.cluster_uc = ClusterStemProfilesUseCase(
            n_clusters=n_clusters, metric=metric, method=method
        )
        self.summarize_uc = SummarizeClustersUseCase()

    def prepare_profiles(
        self,
    ) -> Tuple[List[StormEvent], List[EventToken], List[StemProfile]]:
        """Load events and build the per-stem profiles."""
        logger.info("=== Preparing stem profiles ===")
        events = self.load_uc.execute()
        tokens = self.tokenize_uc.execute(events)
        profiles = self.aggregate_uc.execute(events, tokens)
        return events, tokens, profiles

    def cluster(self, profiles: List[StemProfile]) -> ClusteringResult:
        return self.cluster_uc.execute(profiles)

    def summarize(
        self,
        events: List[StormEvent],
        tokens: List[EventToken],
        result: ClusteringResult,
    ) -> pd.DataFrame:
        return self.summarize_uc.execute(events, tokens, result)

    def run(self) -> AnalysisReport:
        """Run the full pipeline and export CSVs when an export dir is set."""
        events, tokens, profiles = self.prepare_profiles()
        result = self.cluster(profiles)
        summary = self.summarize(events, tokens, result)

        report = AnalysisReport(
            n_events=len(events),
            tokens=tokens,
            profiles=profiles,
            clustering=result,
            summary=summary,
        )
        if self.export_dir is not None:
            self.export(report)

        logger.info("=== Analysis completed ===")
        return report

    def export(self, report: AnalysisReport) -> List[Path]:
        """Write the report tables as CSV files."""
        self.export_dir.mkdir(parents=True, exist_ok=True)
        tables = {
            "01_event_tokens.csv": pd.DataFrame(
                [{"event_id": t.event_id, "stem": t.stem} for t in report.tokens],
                columns=["event_id", "stem"],
            ),
            "02_stem_profiles.csv": pd.DataFrame(
                [
                    {
                        "stem": p.stem,
                        "support": p.support,
                        "log_property_damage": p.property_damage,
                        "log_crop_damage": p.crop_damage,
                        "log_fatalities": p.fatalities,
                        "log_injuries": p.injuries,
                    }
                    for p in report.profiles
                ]
            ),
            "03_stem_clusters.csv": pd.DataFrame(
                [
                    {"stem": stem, "cluster_id": report.clustering.assignments[stem]}
                    for stem in report.clustering.stems
                ]
            ),
            "04_merge_tree.csv": pd.DataFrame(
                [
                    {
                        "step": s.step,
                        "left": s.left,
                        "right": s.right,
                        "distance": s.distance,
                        "size": s.size,
                    }
                    for s in report.clustering.merge_tree
                ]
            ),
            "05_cluster_summary.csv": report.summary,
        }

        written = []
        for name, df in tables.items():
            path = self.export_dir / name
            df.to_csv(path, index=False)
            written.append(path)
        logger.info(f"Exported {len(written)} tables to {self.export_dir.resolve()}")
        return written
