"""Rich terminal formatter for Coupling Insight."""

import io
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from ..clustering.models import DendrogramNode
from ..pipeline import PipelineResult
from .base import BaseFormatter


def _coupling_label(avg: float, threshold: float) -> str:
    if avg >= threshold:
        return f"[green]{avg:.4f}[/green]"
    elif avg > 0:
        return f"[yellow]{avg:.4f}[/yellow]"
    else:
        return f"[dim]{avg:.4f}[/dim]"


def _add_branch(tree: Tree, node: DendrogramNode) -> None:
    if node.is_leaf:
        tree.add(f"[bold]{node.ordered_members[0]}[/bold]")
        return
    branch = tree.add(f"[cyan]sim={node.similarity:.3f}[/cyan] {{{', '.join(sorted(node.members))}}}")
    for child in node.children:
        _add_branch(branch, child)


class RichFormatter(BaseFormatter):
    """Tables for weights and modules, a tree for the dendrogram."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, result: PipelineResult) -> None:
        self._print(result, self.console)

    def format(self, result: PipelineResult) -> str:
        buffer = io.StringIO()
        self._print(result, Console(file=buffer, width=100, color_system=None))
        return buffer.getvalue()

    def _print(self, result: PipelineResult, console: Console) -> None:
        precision = result.config.weight_precision
        coupling = result.coupling
        extraction = result.extraction

        console.print()
        console.print("[bold cyan]COUPLING INSIGHT[/bold cyan]")
        console.print(
            f"  {len(result.units)} units, {coupling.total} inter-unit calls, "
            f"CP={extraction.threshold:g}, max modules={extraction.max_modules}"
        )
        console.print()

        weights = Table(title="Coupling weights", show_header=True, header_style="bold")
        weights.add_column("Unit A")
        weights.add_column("Unit B")
        weights.add_column("Calls", justify="right")
        weights.add_column("Weight", justify="right")
        for pair, weight in coupling.pairs_by_weight():
            weights.add_row(pair.a, pair.b, str(coupling.counts[pair]), f"{weight:.{precision}f}")
        if coupling.total == 0:
            console.print("[yellow]No inter-unit calls between the analyzed units[/yellow]")
        else:
            console.print(weights)
        console.print()

        if result.root is not None:
            tree = Tree("[bold]Dendrogram[/bold] (average linkage)")
            _add_branch(tree, result.root)
            console.print(tree)
            console.print()

        modules = Table(title="Modules", show_header=True, header_style="bold")
        modules.add_column("#", justify="right")
        modules.add_column("Units")
        modules.add_column("Pairs", justify="right")
        modules.add_column("Avg coupling", justify="right")
        for i, module in enumerate(extraction.modules, 1):
            modules.add_row(
                str(i),
                ", ".join(module.sorted_members()),
                str(module.pair_count),
                _coupling_label(module.average_coupling, extraction.threshold),
            )
        console.print(modules)

        if extraction.repaired:
            console.print(
                f"[yellow]Module budget exceeded: {extraction.repair_merges} smallest-module "
                f"merge(s) applied; result is not a pure dendrogram cut[/yellow]"
            )
