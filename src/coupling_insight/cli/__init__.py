"""CLI entry point, registers all subcommands."""

import typer

app = typer.Typer(
    name="coupling-insight",
    help="Coupling Insight - discover modules from method call coupling",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def main() -> None:
    app()


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .callgraph import callgraph as _callgraph  # noqa: F401, E402
from .version import version as _version  # noqa: F401, E402
