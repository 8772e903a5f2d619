"""End-to-end coupling analysis: call graph -> coupling -> dendrogram -> modules."""

from dataclasses import dataclass
from typing import Optional

from .clustering.hierarchical import HierarchicalClustering
from .clustering.models import DendrogramNode, ModuleExtraction
from .clustering.modules import ModulesExtractor
from .config import ClusteringConfig, validate_threshold
from .graph.call_graph import CallGraphStore
from .graph.coupling import CouplingGraph
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """Everything one analysis run produces."""

    config: ClusteringConfig
    units: tuple[str, ...]
    coupling: CouplingGraph
    clustering: HierarchicalClustering
    root: Optional[DendrogramNode]
    extraction: ModuleExtraction


def resolve_units(store: CallGraphStore, config: ClusteringConfig) -> tuple[str, ...]:
    """The allow-list for a run.

    Configured units win. Otherwise every unit that contributed calls of its
    own, minus the unresolved sentinel; callee-only units stay out.
    """
    if config.allowed_units:
        return config.allowed_units
    return tuple(u for u in store.caller_units(config.key_separator) if u != config.unresolved_unit)


def run_pipeline(store: CallGraphStore, config: Optional[ClusteringConfig] = None) -> PipelineResult:
    """Run every stage on a snapshot of ``store``.

    The threshold is validated before any work starts, so a bad CP never
    yields a partial module list.
    """
    config = config or ClusteringConfig()
    threshold = validate_threshold(config.coupling_threshold)

    units = resolve_units(store, config)
    coupling = CouplingGraph.build(store, units, config.key_separator)
    clustering = HierarchicalClustering(units, coupling)
    root = clustering.cluster()
    extraction = ModulesExtractor(clustering, threshold).extract(root)

    logger.info(
        "Analyzed %d units (%d inter-unit calls): %d modules, budget %d%s",
        len(units),
        coupling.total,
        len(extraction),
        extraction.max_modules,
        ", repaired" if extraction.repaired else "",
    )
    return PipelineResult(
        config=config,
        units=units,
        coupling=coupling,
        clustering=clustering,
        root=root,
        extraction=extraction,
    )
