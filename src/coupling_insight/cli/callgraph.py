"""Method call graph export."""

from pathlib import Path
from typing import List, Optional

import typer

from ..edges import load_store
from ..exceptions import CouplingInsightError
from ..formatters import call_graph_to_dot
from ..logging_config import setup_logging
from ..pipeline import resolve_units
from . import app
from ._common import err_console, resolve_config, write_output


@app.command()
def callgraph(
    edge_files: List[Path] = typer.Argument(
        ...,
        help="JSON edge files written by the source parser (one per analyzed unit)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    units: Optional[List[str]] = typer.Option(
        None,
        "--unit",
        "-u",
        help="Unit to analyze (repeatable). Default: every unit found in the edge files",
    ),
    include_external: bool = typer.Option(
        False,
        "--include-external",
        help="Keep calls to units outside the analyzed set",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the DOT graph to a file instead of stdout",
        dir_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """
    Export the merged method call graph as Graphviz DOT.
    """
    setup_logging(verbose=verbose)

    try:
        settings = resolve_config(config, units, verbose=verbose)
        store = load_store(edge_files)
        if not include_external:
            store = store.restricted_to(resolve_units(store, settings), settings.key_separator)
        write_output(call_graph_to_dot(store), output)
    except CouplingInsightError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
