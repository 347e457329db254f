"""Cluster entities: merge tree steps, flat clusters and the full result."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class MergeStep:
    """
    One merge of the agglomerative clustering.

    Leaves are numbered 0..n-1 in stem order; the node created by merge
    ``step`` gets id ``n + step``.
    """

    step: int
    left: int
    right: int
    distance: float
    size: int


@dataclass(frozen=True)
class StemCluster:
    """A flat cluster of stems after cutting the merge tree."""

    cluster_id: int
    members: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.members)

    def __str__(self) -> str:
        return f"cluster_{self.cluster_id}"


@dataclass
class ClusteringResult:
    """Merge tree plus the stem -> cluster id mapping obtained from a cut."""

    stems: List[str]
    merge_tree: List[MergeStep]
    linkage_matrix: np.ndarray
    assignments: Dict[str, int]
    n_clusters: int
    metric: str = "euclidean"
    method: str = "complete"
    silhouette: Optional[float] = None
    clusters: List[StemCluster] = field(init=False)

    def __post_init__(self) -> None:
        grouped: Dict[int, List[str]] = {}
        for stem in self.stems:
            grouped.setdefault(self.assignments[stem], []).append(stem)
        self.clusters = [
            StemCluster(cluster_id=cid, members=tuple(sorted(members)))
            for cid, members in sorted(grouped.items())
        ]

    def cluster_of(self, stem: str) -> int:
        """Cluster id of a stem; KeyError if the stem was not clustered."""
        return self.assignments[stem]

    def members(self, cluster_id: int) -> Tuple[str, ...]:
        """Stems belonging to a cluster."""
        for cluster in self.clusters:
            if cluster.cluster_id == cluster_id:
                return cluster.members
        raise KeyError(cluster_id)

    @property
    def merge_distances(self) -> List[float]:
        return [step.distance for step in self.merge_tree]
