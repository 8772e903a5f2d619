"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import ClusteringConfig, load_config, parse_threshold

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    units: Optional[list[str]] = None,
    threshold: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ClusteringConfig:
    """Build configuration from CLI options.

    The threshold arrives as raw text so a non-numeric value fails with
    InvalidThresholdError like any other bad CP.
    """
    overrides: dict = {"verbose": verbose, "quiet": quiet}
    if units:
        overrides["allowed_units"] = tuple(units)
    if threshold is not None:
        overrides["coupling_threshold"] = parse_threshold(threshold)
    return load_config(config_file=config, **overrides)


def write_output(text: str, output: Optional[Path]) -> None:
    if output is None:
        console.out(text, end="", highlight=False)
    else:
        output.write_text(text, encoding="utf-8")
        err_console.print(f"Wrote [green]{output}[/green]")
