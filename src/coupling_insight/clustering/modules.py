"""Module extraction from an average-link dendrogram.

Modules are cut depth-first under two constraints:
1. At most ``max(1, N // 2)`` modules for N units
2. Each module's internal average coupling reaches the threshold CP

The count constraint dominates. A branch below CP is split only while the
budget leaves room for both halves; otherwise it is accepted as is. If the
cut still overshoots the budget, the smallest modules are merged until it
fits (the "repair" pass). CP is not re-checked on repaired modules.
"""

from __future__ import annotations

from typing import Optional

from ..config import validate_threshold
from ..logging_config import get_logger
from .hierarchical import HierarchicalClustering
from .models import DendrogramNode, Module, ModuleExtraction

logger = get_logger(__name__)


def max_modules_for(unit_count: int) -> int:
    """Module budget for a given number of units."""
    return max(1, unit_count // 2)


class ModulesExtractor:
    """Cuts a dendrogram into a bounded set of coupled modules."""

    def __init__(self, clustering: HierarchicalClustering, threshold: float):
        self.clustering = clustering
        self.threshold = validate_threshold(threshold)
        self.max_modules = max_modules_for(len(clustering.units))

    def extract(self, root: Optional[DendrogramNode]) -> ModuleExtraction:
        result = ModuleExtraction(max_modules=self.max_modules, threshold=self.threshold)
        if root is None:
            return result

        self._cut(root, result.modules)
        logger.debug("Dendrogram cut produced %d modules (budget %d)", len(result.modules), self.max_modules)

        while len(result.modules) > self.max_modules:
            self._merge_smallest(result.modules)
            result.repair_merges += 1

        if result.repair_merges:
            result.repaired = True
            logger.info(
                "Module budget exceeded: merged smallest modules %d time(s) to fit %d modules",
                result.repair_merges,
                self.max_modules,
            )
        return result

    def _cut(self, node: DendrogramNode, acc: list[Module]) -> None:
        avg = self.clustering.average_internal_coupling(node.ordered_members)
        if avg >= self.threshold or node.is_leaf:
            acc.append(Module(node.members, avg))
            return

        if len(acc) + 2 <= self.max_modules:
            for child in node.children:
                self._cut(child, acc)
        else:
            logger.debug(
                "Accepting %s below threshold (avg %.4f < %.4f): module budget reached",
                node.ordered_members,
                avg,
                self.threshold,
            )
            acc.append(Module(node.members, avg))

    def _merge_smallest(self, modules: list[Module]) -> None:
        """Fuse the pair with the smallest combined size.

        Ties go to the first pair in list order (i < j). The merged module
        is appended at the end.
        """
        pairs = [(i, j) for i in range(len(modules)) for j in range(i + 1, len(modules))]
        i, j = min(pairs, key=lambda p: modules[p[0]].size + modules[p[1]].size)
        members = modules[i].members | modules[j].members
        avg = self.clustering.average_internal_coupling(sorted(members))
        del modules[j]
        del modules[i]
        modules.append(Module(members, avg))


def extract_modules(
    root: Optional[DendrogramNode],
    clustering: HierarchicalClustering,
    threshold: float,
) -> ModuleExtraction:
    """Convenience wrapper around ModulesExtractor."""
    return ModulesExtractor(clustering, threshold).extract(root)
