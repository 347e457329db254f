"""Matplotlib figures for the clustering report."""

import logging
from pathlib import Path
from typing import Dict, List

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
from scipy.cluster.hierarchy import dendrogram  # noqa: E402

from ..domain.entities.stem_cluster import ClusteringResult  # noqa: E402

logger = logging.getLogger(__name__)


ABOVE_CUT_COLOR = "#808080"


def link_colors(result: ClusteringResult) -> Dict[int, str]:
    """
    Colour of every internal node of the merge tree.

    Links inside a flat cluster get that cluster's colour, links joining
    different clusters are grey. Colouring by membership rather than by a
    height threshold keeps colours matched to the K clusters even when merge
    heights tie at the cut.
    """
    n = len(result.stems)
    palette = plt.rcParams["axes.prop_cycle"].by_key()["color"]
    node_cluster = {leaf: result.assignments[stem] for leaf, stem in enumerate(result.stems)}

    colors = {}
    for step in result.merge_tree:
        node = n + step.step
        left = node_cluster.get(step.left)
        if left is not None and left == node_cluster.get(step.right):
            node_cluster[node] = left
            colors[node] = palette[(left - 1) % len(palette)]
        else:
            colors[node] = ABOVE_CUT_COLOR
    return colors


def plot_dendrogram(result: ClusteringResult, output_file: Path) -> Path:
    """Dendrogram of the merge tree, leaves labelled by stem, links coloured by cluster."""
    n = len(result.stems)
    fig, ax = plt.subplots(figsize=(max(8, n * 0.3), 6))

    colors = link_colors(result)
    dendrogram(
        result.linkage_matrix,
        labels=result.stems,
        leaf_rotation=90,
        link_color_func=colors.__getitem__,
        ax=ax,
    )
    ax.set_title(f"{result.method.title()}-linkage dendrogram ({result.metric} distance)")
    ax.set_ylabel("Distance")
    fig.tight_layout()
    fig.savefig(output_file, dpi=150)
    plt.close(fig)
    return output_file


def plot_cluster_bars(summary: pd.DataFrame, column: str, title: str, output_file: Path) -> Path:
    """Bar chart of one per-cluster mean."""
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(summary["cluster_id"].astype(str), summary[column], color="steelblue")
    ax.set_xlabel("Cluster")
    ax.set_ylabel(column.replace("_", " ").title())
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(output_file, dpi=150)
    plt.close(fig)
    return output_file


def save_report_figures(
    result: ClusteringResult, summary: pd.DataFrame, figure_dir: str
) -> List[Path]:
    """Write the dendrogram and the severity bar charts."""
    out = Path(figure_dir)
    out.mkdir(parents=True, exist_ok=True)

    paths = [
        plot_dendrogram(result, out / "dendrogram.png"),
        plot_cluster_bars(
            summary, "fatalities", "Mean fatalities per cluster", out / "cluster_fatalities.png"
        ),
        plot_cluster_bars(
            summary,
            "property_damage",
            "Mean property damage per cluster (USD)",
            out / "cluster_property_damage.png",
        ),
    ]
    logger.info(f"Saved {len(paths)} figures to {out.resolve()}")
    return paths
