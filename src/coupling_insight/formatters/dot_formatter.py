"""Graphviz DOT exports for the coupling graph and the method call graph."""

from ..graph.call_graph import CallGraphStore
from ..graph.coupling import CouplingGraph
from ..pipeline import PipelineResult
from .base import BaseFormatter


def _quote(name: str) -> str:
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def coupling_to_dot(coupling: CouplingGraph, precision: int = 4, name: str = "CouplingWeights") -> str:
    """Undirected graph: every allowed unit, one edge per coupled pair.

    Edges carry the weight as label and a pen width growing with it.
    """
    lines = [
        f"graph {name} {{",
        "  graph [overlap=false];",
        "  node [shape=box, style=rounded];",
    ]
    for unit in coupling.units:
        lines.append(f"  {_quote(unit)};")
    for pair, weight in coupling.pairs_by_weight():
        pen = 1.0 + 9.0 * weight
        lines.append(
            f"  {_quote(pair.a)} -- {_quote(pair.b)} "
            f'[label="{weight:.{precision}f}", penwidth={pen:.2f}];'
        )
    lines.append("}")
    return "\n".join(lines) + "\n"


def call_graph_to_dot(store: CallGraphStore, name: str = "CallGraph") -> str:
    """Directed graph of method keys, callers in insertion order."""
    lines = [
        f"digraph {name} {{",
        "  rankdir=LR;",
        "  node [shape=box, style=rounded];",
    ]
    for node in sorted(store.nodes()):
        lines.append(f"  {_quote(node)};")
    for edge in store.iter_edges():
        lines.append(f"  {_quote(edge.caller)} -> {_quote(edge.callee)};")
    lines.append("}")
    return "\n".join(lines) + "\n"


class DotFormatter(BaseFormatter):
    """Render the coupling graph as Graphviz DOT."""

    def render(self, result: PipelineResult) -> None:
        print(self.format(result), end="")

    def format(self, result: PipelineResult) -> str:
        return coupling_to_dot(result.coupling, result.config.weight_precision)
