"""Agglomerative clustering of units and module extraction."""

from .hierarchical import HierarchicalClustering, MergeStep
from .models import (
    DendrogramLeaf,
    DendrogramMerge,
    DendrogramNode,
    Module,
    ModuleExtraction,
    count_nodes,
    iter_nodes,
)
from .modules import ModulesExtractor, extract_modules, max_modules_for

__all__ = [
    "DendrogramLeaf",
    "DendrogramMerge",
    "DendrogramNode",
    "HierarchicalClustering",
    "MergeStep",
    "Module",
    "ModuleExtraction",
    "ModulesExtractor",
    "count_nodes",
    "extract_modules",
    "iter_nodes",
    "max_modules_for",
]
