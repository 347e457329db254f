"""Example usage of the storm event type clustering."""

import logging
from storm_clusters.application.services.storm_damage_analysis_service import (
    StormDamageAnalysisService,
)
from storm_clusters.infrastructure.repositories.noaa_storm_event_repository import (
    NOAAStormEventRepository,
)
from storm_clusters.config.settings import (
    CLUSTERING_SETTINGS,
    EXPORT_DIR,
    FIGURE_DIR,
    LOG_FORMAT,
    STORM_DATA_FILE,
    STORM_DATA_URL,
)
from storm_clusters.presentation.figures import save_report_figures

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


def main():
    """Example usage."""
    # Fetch the raw database once
    NOAAStormEventRepository.download(STORM_DATA_URL, str(STORM_DATA_FILE))

    service = StormDamageAnalysisService(
        repository=NOAAStormEventRepository(str(STORM_DATA_FILE)),
        export_dir=str(EXPORT_DIR),
        **CLUSTERING_SETTINGS,
    )

    # Example 1: Cluster the event types
    print("=" * 60)
    print("Example 1: Clustering event types")
    print("=" * 60)
    try:
        report = service.run()
    except Exception as e:
        logger.error(f"Analysis failed: {e}", exc_info=True)
        return

    for cluster in report.clustering.clusters:
        print(f"  Cluster {cluster.cluster_id}: {', '.join(cluster.members)}")

    # Example 2: Which clusters are most harmful?
    print("\n" + "=" * 60)
    print("Example 2: Ranking clusters")
    print("=" * 60)
    for column in ("fatalities", "property_damage"):
        top = report.ranked(column).iloc[0]
        print(f"  Highest mean {column}: cluster {top['cluster_id']} ({top['members']})")

    save_report_figures(report.clustering, report.summary, str(FIGURE_DIR))


if __name__ == "__main__":
    main()
