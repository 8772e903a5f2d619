"""Method-level call graph accumulated across analyzed units."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Union

from ..logging_config import get_logger
from .models import CallEdge, owning_unit

logger = get_logger(__name__)

EdgeSource = Union[Iterable[CallEdge], Iterable[tuple[str, str]], Mapping[str, Iterable[str]]]


class CallGraphStore:
    """Accumulates "Unit.method" -> "Unit.method" call edges.

    Each analyzed unit contributes one edge set through ``merge``. Callees
    are kept as an insertion-ordered set per caller, so repeated edges
    collapse and iteration order is stable across runs.
    """

    def __init__(self) -> None:
        self._edges: dict[str, dict[str, None]] = {}

    def merge(self, edges: EdgeSource) -> int:
        """Add one edge set to the store.

        Accepts CallEdge values, (caller, callee) tuples, or a mapping from
        caller key to its callee keys. A caller mapped to no callees is
        still recorded as a node.

        Returns:
            Number of edges that were not already present.
        """
        added = 0
        if isinstance(edges, Mapping):
            pairs: Iterable[tuple[str, str]] = (
                (caller, callee) for caller, callees in edges.items() for callee in callees
            )
            for caller in edges:
                self._edges.setdefault(caller, {})
        else:
            pairs = edges

        for caller, callee in pairs:
            callees = self._edges.setdefault(caller, {})
            if callee not in callees:
                callees[callee] = None
                added += 1

        logger.debug("Merged %d new call edges (%d total)", added, self.edge_count)
        return added

    def nodes(self) -> set[str]:
        """All keys appearing as caller or callee."""
        result = set(self._edges)
        for callees in self._edges.values():
            result.update(callees)
        return result

    @property
    def edges(self) -> Mapping[str, tuple[str, ...]]:
        """Read-only view: caller key -> callee keys in insertion order."""
        return MappingProxyType({caller: tuple(callees) for caller, callees in self._edges.items()})

    @property
    def edge_count(self) -> int:
        return sum(len(callees) for callees in self._edges.values())

    def iter_edges(self) -> Iterable[CallEdge]:
        for caller, callees in self._edges.items():
            for callee in callees:
                yield CallEdge(caller, callee)

    def units(self, separator: str = ".") -> list[str]:
        """Units owning any caller or callee key, in first-seen order."""
        seen: dict[str, None] = {}
        for caller, callees in self._edges.items():
            for key in (caller, *callees):
                unit = owning_unit(key, separator)
                if unit is not None:
                    seen.setdefault(unit, None)
        return list(seen)

    def caller_units(self, separator: str = ".") -> list[str]:
        """Units owning at least one caller key, in first-seen order.

        These are the units whose edge sets were merged in. Units that are
        only ever called (library classes, say) are left out.
        """
        seen: dict[str, None] = {}
        for caller in self._edges:
            unit = owning_unit(caller, separator)
            if unit is not None:
                seen.setdefault(unit, None)
        return list(seen)

    def restricted_to(self, units: Iterable[str], separator: str = ".") -> "CallGraphStore":
        """Copy of the store keeping only edges between allowed units.

        Intra-unit calls are kept; calls touching any other unit (the
        unresolved sentinel included) are dropped.
        """
        allowed = set(units)
        restricted = CallGraphStore()
        for caller, callees in self._edges.items():
            if owning_unit(caller, separator) not in allowed:
                continue
            kept = [c for c in callees if owning_unit(c, separator) in allowed]
            restricted.merge({caller: kept})
        return restricted

    def __len__(self) -> int:
        return len(self.nodes())

    def __contains__(self, key: object) -> bool:
        return key in self.nodes()
