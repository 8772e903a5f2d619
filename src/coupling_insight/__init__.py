"""
Coupling Insight - module discovery from method call coupling

Merges per-unit call edges into one call graph, weighs how strongly each
pair of units is coupled, clusters the units with average linkage and cuts
the dendrogram into a bounded set of coupled modules.
"""

__version__ = "0.1.0"

from .clustering import (
    DendrogramLeaf,
    DendrogramMerge,
    HierarchicalClustering,
    Module,
    ModuleExtraction,
    ModulesExtractor,
)
from .config import ClusteringConfig, load_config
from .graph import CallEdge, CallGraphStore, CouplingGraph, Pair
from .pipeline import PipelineResult, run_pipeline

__all__ = [
    "CallEdge",
    "CallGraphStore",
    "ClusteringConfig",
    "CouplingGraph",
    "DendrogramLeaf",
    "DendrogramMerge",
    "HierarchicalClustering",
    "Module",
    "ModuleExtraction",
    "ModulesExtractor",
    "Pair",
    "PipelineResult",
    "load_config",
    "run_pipeline",
]
