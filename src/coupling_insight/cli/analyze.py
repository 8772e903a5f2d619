"""Coupling analysis command: weights, dendrogram and modules."""

from pathlib import Path
from typing import List, Optional

import typer

from ..edges import load_store
from ..exceptions import CouplingInsightError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from ..pipeline import run_pipeline
from . import app
from ._common import console, err_console, resolve_config, write_output

_FORMATS = ("rich", "json", "csv", "dot", "text")


@app.command()
def analyze(
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
    threshold: Optional[str] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Minimum internal average coupling (CP) for a module [default: 0.30]",
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help=(
            "Output format: rich, json, csv (weight table), dot (coupling graph) "
            "or text (plain dendrogram and modules)"
        ),
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to a file instead of stdout",
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
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every merge and cut"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    Cluster units by call coupling and cut the dendrogram into modules.

    [bold cyan]Examples:[/bold cyan]

      coupling-insight analyze edges/*.json

      coupling-insight analyze edges/*.json -u Shape -u Point -u Circle -u Rectangle -t 0.3

      coupling-insight analyze edges/*.json --format dot -o coupling.dot
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    if fmt not in _FORMATS:
        err_console.print(f"[red]Error:[/red] unknown format {fmt!r} (choose from {', '.join(_FORMATS)})")
        raise typer.Exit(1)

    try:
        settings = resolve_config(config, units, threshold, verbose=verbose, quiet=quiet)
        store = load_store(edge_files)
        result = run_pipeline(store, settings)

        if fmt == "rich" and output is None:
            get_formatter("rich").render(result)
        else:
            write_output(get_formatter(fmt).format(result), output)

    except CouplingInsightError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        err_console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)
