"""Loading call edges produced by the external source parser.

The parser writes one JSON document per analyzed unit, in either form:

    {"Circle.area": ["Point.getX", "<external>.sqrt"], ...}
    [["Circle.area", "Point.getX"], ...]
"""

import json
from collections.abc import Iterable
from pathlib import Path

from .exceptions import EdgeFileError, EdgeFormatError
from .graph.call_graph import CallGraphStore
from .graph.models import CallEdge
from .logging_config import get_logger

logger = get_logger(__name__)


def parse_edges(document: object, source: Path) -> set[CallEdge]:
    """Turn a decoded edge document into a set of call edges.

    Raises:
        EdgeFormatError: If the document has neither supported shape
    """
    edges: set[CallEdge] = set()

    if isinstance(document, dict):
        for caller, callees in document.items():
            if not isinstance(callees, list) or not all(isinstance(c, str) for c in callees):
                raise EdgeFormatError(source, f"callees of {caller!r} must be a list of strings")
            edges.update(CallEdge(caller, callee) for callee in callees)
        return edges

    if isinstance(document, list):
        for item in document:
            if (
                not isinstance(item, list)
                or len(item) != 2
                or not all(isinstance(k, str) for k in item)
            ):
                raise EdgeFormatError(source, f"expected [caller, callee] pair, got {item!r}")
            edges.add(CallEdge(item[0], item[1]))
        return edges

    raise EdgeFormatError(source, "expected an object or a list of pairs")


def load_edge_file(path: Path) -> set[CallEdge]:
    """Read one parser output file.

    Raises:
        EdgeFileError: If the file cannot be read
        EdgeFormatError: If the content is not a valid edge document
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise EdgeFileError(Path(path), e.strerror or str(e))

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise EdgeFormatError(Path(path), f"invalid JSON: {e}")

    edges = parse_edges(document, Path(path))
    logger.debug("Loaded %d call edges from %s", len(edges), path)
    return edges


def load_store(paths: Iterable[Path]) -> CallGraphStore:
    """Merge several parser output files into one call graph."""
    store = CallGraphStore()
    for path in paths:
        # stable insertion order
        store.merge(sorted(load_edge_file(path)))
    return store
