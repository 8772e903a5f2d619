"""Output formatters for Coupling Insight."""

from .base import BaseFormatter
from .csv_formatter import CsvFormatter, weights_to_csv
from .dendrogram import dendrogram_to_dict, render_dendrogram_text
from .dot_formatter import DotFormatter, call_graph_to_dot, coupling_to_dot
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter
from .text_formatter import TextFormatter

FORMATTERS = {
    "rich": RichFormatter,
    "json": JsonFormatter,
    "csv": CsvFormatter,
    "dot": DotFormatter,
    "text": TextFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "rich", "json", "csv", "dot", "text"

    Raises:
        ValueError: If name is not recognized
    """
    cls = FORMATTERS.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(FORMATTERS))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "CsvFormatter",
    "DotFormatter",
    "JsonFormatter",
    "RichFormatter",
    "TextFormatter",
    "call_graph_to_dot",
    "coupling_to_dot",
    "dendrogram_to_dict",
    "get_formatter",
    "render_dendrogram_text",
    "weights_to_csv",
]
