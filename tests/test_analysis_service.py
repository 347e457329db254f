"""Tests for StormDamageAnalysisService."""

from typing import List

import pandas as pd
import pytest
from storm_clusters.application.services.storm_damage_analysis_service import (
    StormDamageAnalysisService,
)
from storm_clusters.domain.entities.storm_event import StormEvent
from storm_clusters.domain.exceptions import InsufficientDataError, InvalidParameterError
from storm_clusters.domain.repositories.storm_event_repository import StormEventRepository


class InMemoryStormEventRepository(StormEventRepository):
    """Repository serving a fixed list of events."""

    def __init__(self, events: List[StormEvent]):
        self.events = list(events)

    def get_events(self) -> List[StormEvent]:
        return list(self.events)


def test_run_full_pipeline(mixed_events):
    """Test the whole pipeline on in-memory events."""
    service = StormDamageAnalysisService(
        repository=InMemoryStormEventRepository(mixed_events),
        frequency_threshold=3,
        n_clusters=3,
    )

    report = service.run()

    assert report.n_events == len(mixed_events)
    stems = {p.stem for p in report.profiles}
    assert stems == {"excess", "flash", "flood", "hail", "heat", "tornado"}
    assert all(p.support > 3 for p in report.profiles)
    assert sorted(report.clustering.assignments) == sorted(stems)
    assert len(report.clustering.clusters) == 3
    assert len(report.summary) == 3
    # 'flood' and 'flash' share the flash-flood events
    flood_events = {t.event_id for t in report.tokens if t.stem == "flood"}
    assert len(flood_events) == 10


def test_run_is_deterministic(mixed_events):
    """Two runs with the same configuration give the same clusters."""
    def run(events):
        return StormDamageAnalysisService(
            repository=InMemoryStormEventRepository(events),
            frequency_threshold=3,
            n_clusters=4,
        ).run()

    first = run(mixed_events)
    second = run(list(reversed(mixed_events)))

    assert first.clustering.assignments == second.clustering.assignments
    assert first.clustering.merge_tree == second.clustering.merge_tree


def test_ranked_summary(mixed_events):
    """The tornado cluster has the highest mean property damage."""
    report = StormDamageAnalysisService(
        repository=InMemoryStormEventRepository(mixed_events),
        frequency_threshold=3,
        n_clusters=6,
    ).run()

    top = report.ranked("property_damage").iloc[0]
    assert top["members"] == "tornado"


def test_export(tmp_path, mixed_events):
    """CSV tables are written to the export directory."""
    export_dir = tmp_path / "exports"
    service = StormDamageAnalysisService(
        repository=InMemoryStormEventRepository(mixed_events),
        frequency_threshold=3,
        n_clusters=2,
        export_dir=str(export_dir),
    )

    report = service.run()

    names = sorted(p.name for p in export_dir.iterdir())
    assert names == [
        "01_event_tokens.csv",
        "02_stem_profiles.csv",
        "03_stem_clusters.csv",
        "04_merge_tree.csv",
        "05_cluster_summary.csv",
    ]
    clusters = pd.read_csv(export_dir / "03_stem_clusters.csv")
    assert dict(zip(clusters["stem"], clusters["cluster_id"])) == report.clustering.assignments
    tree = pd.read_csv(export_dir / "04_merge_tree.csv")
    assert len(tree) == len(report.profiles) - 1


def test_insufficient_stems(mixed_events):
    """A threshold that leaves one stem is reported as insufficient data."""
    service = StormDamageAnalysisService(
        repository=InMemoryStormEventRepository(mixed_events),
        frequency_threshold=9,
        n_clusters=1,
    )
    with pytest.raises(InsufficientDataError):
        service.run()


def test_too_many_clusters(mixed_events):
    """K larger than the number of stems is rejected."""
    service = StormDamageAnalysisService(
        repository=InMemoryStormEventRepository(mixed_events),
        frequency_threshold=3,
        n_clusters=7,
    )
    with pytest.raises(InvalidParameterError):
        service.run()
