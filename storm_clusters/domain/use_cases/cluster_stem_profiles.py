"""
Hierarchical clustering of stem profiles.

Profiles are ordered by stem before the distance matrix is built, so the
merge order (including the resolution of equal distances) depends only on
the data and never on input order. Complete linkage over n profiles costs
O(n^2) memory and between O(n^2) and O(n^3) time, which is fine for the
tens to hundreds of stems that survive the frequency filter but does not
scale to large vocabularies.
"""

import logging
from typing import Dict, List, Sequence

import numpy as np
from scipy.cluster.hierarchy import linkage
from scipy.spatial.distance import pdist, squareform
from sklearn.metrics import silhouette_score

from ..entities.stem_cluster import ClusteringResult, MergeStep
from ..entities.stem_profile import StemProfile
from ..exceptions import InsufficientDataError, InvalidParameterError

logger = logging.getLogger(__name__)

LINKAGE_METHODS = ("single", "complete", "average", "weighted", "ward")
EUCLIDEAN_ONLY_METHODS = ("ward",)


def cut_tree(linkage_matrix: np.ndarray, n_leaves: int, n_clusters: int) -> List[List[int]]:
    """
    Cut a merge tree into exactly ``n_clusters`` groups of leaves.

    Replays the first ``n_leaves - n_clusters`` merges, which is the same as
    undoing the last ``n_clusters - 1``.

    Returns:
        Groups of leaf indices, each sorted, ordered by their smallest leaf
    """
    groups: Dict[int, List[int]] = {leaf: [leaf] for leaf in range(n_leaves)}
    for step, row in enumerate(linkage_matrix[: n_leaves - n_clusters]):
        left, right = int(row[0]), int(row[1])
        groups[n_leaves + step] = groups.pop(left) + groups.pop(right)
    return sorted((sorted(g) for g in groups.values()), key=lambda g: g[0])


class ClusterStemProfilesUseCase:
    """Use case to cluster stems by their damage profiles."""

    def __init__(
        self,
        n_clusters: int = 6,
        metric: str = "euclidean",
        method: str = "complete",
    ):
        """
        Initialize use case.

        Args:
            n_clusters: Number of flat clusters to cut the tree into
            metric: Distance metric name understood by scipy's pdist
            method: Linkage method (default: complete)
        """
        if method not in LINKAGE_METHODS:
            raise InvalidParameterError(
                f"Unknown linkage method '{method}', expected one of {LINKAGE_METHODS}"
            )
        if method in EUCLIDEAN_ONLY_METHODS and metric != "euclidean":
            raise InvalidParameterError(f"Linkage method '{method}' requires euclidean metric")

        self.n_clusters = n_clusters
        self.metric = metric
        self.method = method

    def distance_matrix(self, profiles: Sequence[StemProfile]) -> np.ndarray:
        """Condensed pairwise distances between profile vectors."""
        X = np.array([p.vector for p in profiles], dtype=float)
        try:
            return pdist(X, metric=self.metric)
        except ValueError as e:
            raise InvalidParameterError(f"Unusable distance metric '{self.metric}': {e}") from e

    def execute(self, profiles: Sequence[StemProfile]) -> ClusteringResult:
        """
        Execute clustering.

        Args:
            profiles: StemProfile entities (any order)

        Returns:
            ClusteringResult with the merge tree and stem -> cluster id mapping

        Raises:
            InsufficientDataError: If fewer than two profiles are given
            InvalidParameterError: If n_clusters is outside [1, len(profiles)]
        """
        ordered = sorted(profiles, key=lambda p: p.stem)
        stems = [p.stem for p in ordered]
        n = len(stems)

        if len(set(stems)) != n:
            raise InvalidParameterError("Stem profiles must have unique stems")
        if n < 2:
            raise InsufficientDataError(f"Need at least 2 stem profiles to cluster, got {n}")
        if isinstance(self.n_clusters, bool) or not isinstance(self.n_clusters, (int, np.integer)):
            raise InvalidParameterError(f"n_clusters must be an integer, got {self.n_clusters!r}")
        if not 1 <= self.n_clusters <= n:
            raise InvalidParameterError(
                f"n_clusters must be between 1 and {n} (number of stems), got {self.n_clusters}"
            )

        logger.info(
            f"Clustering {n} stems into {self.n_clusters} clusters "
            f"({self.method} linkage, {self.metric} distance)"
        )

        condensed = self.distance_matrix(ordered)
        Z = linkage(condensed, method=self.method)

        merge_tree = [
            MergeStep(
                step=i,
                left=int(row[0]),
                right=int(row[1]),
                distance=float(row[2]),
                size=int(row[3]),
            )
            for i, row in enumerate(Z)
        ]

        assignments: Dict[str, int] = {}
        for cluster_id, leaves in enumerate(cut_tree(Z, n, self.n_clusters), start=1):
            for leaf in leaves:
                assignments[stems[leaf]] = cluster_id

        silhouette = None
        if 2 <= self.n_clusters < n:
            labels = [assignments[s] for s in stems]
            silhouette = float(
                silhouette_score(squareform(condensed), labels, metric="precomputed")
            )
            logger.info(f"Silhouette score: {silhouette:.3f}")

        result = ClusteringResult(
            stems=stems,
            merge_tree=merge_tree,
            linkage_matrix=Z,
            assignments=assignments,
            n_clusters=self.n_clusters,
            metric=self.metric,
            method=self.method,
            silhouette=silhouette,
        )
        for cluster in result.clusters:
            logger.info(f"Cluster {cluster.cluster_id}: {', '.join(cluster.members)}")
        return result
