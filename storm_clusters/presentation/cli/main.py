"""CLI interface for storm event type clustering."""

import argparse
import logging
import sys

from ...application.services.storm_damage_analysis_service import StormDamageAnalysisService
from ...config.settings import (
    CLUSTERING_SETTINGS,
    EXPORT_DIR,
    FIGURE_DIR,
    LOG_FORMAT,
    LOG_LEVEL,
    STORM_DATA_FILE,
    STORM_DATA_URL,
)
from ...domain.exceptions import StormClusterError
from ...domain.use_cases.summarize_clusters import SummarizeClustersUseCase
from ...infrastructure.repositories.noaa_storm_event_repository import NOAAStormEventRepository

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def add_clustering_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--data-file", type=str, default=str(STORM_DATA_FILE), help="Storm events CSV (.bz2 ok)"
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=CLUSTERING_SETTINGS["frequency_threshold"],
        help="Drop stems seen in this many event labels or fewer",
    )
    parser.add_argument(
        "--clusters",
        type=int,
        default=CLUSTERING_SETTINGS["n_clusters"],
        help="Number of clusters to cut the tree into",
    )
    parser.add_argument(
        "--metric", type=str, default=CLUSTERING_SETTINGS["metric"], help="Distance metric"
    )
    parser.add_argument(
        "--method",
        type=str,
        default=CLUSTERING_SETTINGS["method"],
        choices=["single", "complete", "average", "weighted", "ward"],
        help="Linkage method",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cluster NOAA storm event types by average damage"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # === download: fetch the raw database ===
    download_parser = subparsers.add_parser("download", help="Download the storm events CSV")
    download_parser.add_argument("--url", type=str, default=STORM_DATA_URL)
    download_parser.add_argument("--data-file", type=str, default=str(STORM_DATA_FILE))
    download_parser.add_argument(
        "--force", action="store_true", help="Download even if the file exists"
    )

    # === analyze: run pipeline and export CSVs ===
    analyze_parser = subparsers.add_parser(
        "analyze", help="Tokenize -> aggregate -> cluster -> summarize, export CSVs"
    )
    add_clustering_arguments(analyze_parser)
    analyze_parser.add_argument("--export-dir", type=str, default=str(EXPORT_DIR))

    # === plot: run pipeline and save figures ===
    plot_parser = subparsers.add_parser("plot", help="Save dendrogram and severity bar charts")
    add_clustering_arguments(plot_parser)
    plot_parser.add_argument("--figure-dir", type=str, default=str(FIGURE_DIR))

    return parser


def print_report(report) -> None:
    print("\n" + "=" * 60)
    print(" STORM EVENT TYPE CLUSTERS ")
    print("=" * 60)
    print(f" Events:   {report.n_events}")
    print(f" Tokens:   {len(report.tokens)}")
    print(f" Stems:    {len(report.profiles)}")
    if report.clustering.silhouette is not None:
        print(f" Silhouette: {report.clustering.silhouette:.3f}")
    print("-" * 60)
    for cluster in report.clustering.clusters:
        print(f" [{cluster.cluster_id}] {', '.join(cluster.members)}")
    print("-" * 60)
    print(" Most frequent stems:")
    for profile in SummarizeClustersUseCase.top_stems(report.profiles, n=10):
        print(f"  • {profile.stem}: {profile.support}")
    print("-" * 60)
    print(" Clusters by mean fatalities:")
    for _, row in report.ranked("fatalities").iterrows():
        print(f"  • cluster {row['cluster_id']}: {row['fatalities']:.3f}")
    print(" Clusters by mean property damage:")
    for _, row in report.ranked("property_damage").iterrows():
        print(f"  • cluster {row['cluster_id']}: ${row['property_damage']:,.0f}")
    print("=" * 60)


def main(argv=None):
    configure_logging()
    args = build_parser().parse_args(argv)

    # === Command: download ===
    if args.command == "download":
        try:
            path = NOAAStormEventRepository.download(args.url, args.data_file, force=args.force)
            print(f"\nStorm data ready: {path}")
            print("Next: storm-clusters analyze")
        except Exception as e:
            logger.error(f"Download failed: {e}", exc_info=True)
            sys.exit(1)
        return

    try:
        service = StormDamageAnalysisService(
            repository=NOAAStormEventRepository(args.data_file),
            frequency_threshold=args.threshold,
            n_clusters=args.clusters,
            metric=args.metric,
            method=args.method,
            log_offset=CLUSTERING_SETTINGS["log_offset"],
            export_dir=args.export_dir if args.command == "analyze" else None,
        )
    except StormClusterError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    # === Command: analyze / plot ===
    try:
        report = service.run()
        if args.command == "plot":
            from ..figures import save_report_figures

            paths = save_report_figures(report.clustering, report.summary, args.figure_dir)
            for path in paths:
                print(f"Saved {path}")
        else:
            print_report(report)
    except FileNotFoundError as e:
        logger.error(f"{e}. Run: storm-clusters download")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Analysis failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
