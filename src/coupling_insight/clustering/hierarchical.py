"""Average-link agglomerative clustering over unit coupling weights.

Similarity, not distance, drives the merges: at each step the two active
clusters with the highest mean cross-cluster coupling are fused. Cluster
pairs are scanned in activation order and the first strictly greatest
similarity wins, which keeps the dendrogram deterministic when several
pairs tie.

Merge similarities are not monotone. Average linkage over coupling weights
carries no ultrametric guarantee, so a merge may score higher than one of
the merges feeding into it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..graph.coupling import CouplingGraph
from ..logging_config import get_logger
from .models import DendrogramLeaf, DendrogramMerge, DendrogramNode

logger = get_logger(__name__)


@dataclass(frozen=True)
class MergeStep:
    """One fusion recorded during clustering."""

    left: tuple[str, ...]
    right: tuple[str, ...]
    similarity: float


class HierarchicalClustering:
    """Builds a binary dendrogram over the allowed units.

    The weight matrix is read once from ``CouplingGraph.weight``; nothing
    here recomputes coupling from call counts.
    """

    def __init__(self, units: Iterable[str], coupling: CouplingGraph):
        self.units: tuple[str, ...] = tuple(dict.fromkeys(units))
        self._index = {unit: i for i, unit in enumerate(self.units)}
        n = len(self.units)
        self.weights = np.zeros((n, n), dtype=float)
        for i, a in enumerate(self.units):
            for j in range(i + 1, n):
                w = coupling.weight(a, self.units[j])
                self.weights[i, j] = self.weights[j, i] = w
        self.merge_history: list[MergeStep] = []

    def _avg_similarity(self, a: list[int], b: list[int]) -> float:
        """Mean weight over all cross-cluster unit pairs."""
        if not a or not b:
            return 0.0
        return float(self.weights[np.ix_(a, b)].mean())

    def cluster(self) -> Optional[DendrogramNode]:
        """Run the clustering and return the dendrogram root.

        Returns None when there are no units to cluster.
        """
        self.merge_history = []
        if not self.units:
            logger.debug("No units to cluster")
            return None

        # cluster id -> (unit indices, node); dict order is activation order
        active: dict[int, tuple[list[int], DendrogramNode]] = {
            i: ([i], DendrogramLeaf(unit)) for i, unit in enumerate(self.units)
        }
        next_id = len(self.units)

        while len(active) > 1:
            ids = list(active)
            best_sim = -1.0
            best_pair = (ids[0], ids[1])
            for i in range(len(ids)):
                for j in range(i + 1, len(ids)):
                    sim = self._avg_similarity(active[ids[i]][0], active[ids[j]][0])
                    if sim > best_sim:
                        best_sim = sim
                        best_pair = (ids[i], ids[j])

            left_id, right_id = best_pair
            left_idx, left_node = active.pop(left_id)
            right_idx, right_node = active.pop(right_id)
            merged = DendrogramMerge(left_node, right_node, best_sim)
            active[next_id] = (left_idx + right_idx, merged)
            next_id += 1

            self.merge_history.append(
                MergeStep(left_node.ordered_members, right_node.ordered_members, best_sim)
            )
            logger.debug(
                "Merged %s + %s at similarity %.4f",
                left_node.ordered_members,
                right_node.ordered_members,
                best_sim,
            )

        _, root = next(iter(active.values()))
        return root

    def average_internal_coupling(self, units: Iterable[str]) -> float:
        """Mean weight over all unordered pairs within a set of units.

        Units outside the clustered allow-list contribute no pairs. Returns
        0.0 for fewer than two known units.
        """
        idx = [self._index[u] for u in dict.fromkeys(units) if u in self._index]
        k = len(idx)
        if k < 2:
            return 0.0
        sub = self.weights[np.ix_(idx, idx)]
        return float(np.triu(sub, k=1).sum() / (k * (k - 1) / 2))
