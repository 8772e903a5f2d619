"""Unit coupling graph derived from the method call graph.

Coupling(A, B) = (# calls between methods of A and B, either direction)
                 / (# calls between any two distinct allowed units)

Only units on the allow-list take part. Intra-unit calls and calls touching
a unit outside the allow-list (including the unresolved sentinel) are
ignored entirely and never reach the denominator.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ..logging_config import get_logger
from .call_graph import CallGraphStore
from .models import Pair, owning_unit

logger = get_logger(__name__)


class CouplingGraph:
    """Undirected weighted graph between allowed units.

    Built once from a CallGraphStore snapshot; ``weight`` is the single
    similarity measure every downstream stage queries.
    """

    def __init__(self, units: Iterable[str], counts: Mapping[Pair, int], total: int):
        self._units = tuple(dict.fromkeys(units))
        self._counts = dict(counts)
        self._total = total

    @classmethod
    def build(
        cls,
        store: CallGraphStore,
        allowed_units: Iterable[str],
        separator: str = ".",
    ) -> CouplingGraph:
        """Count cross-unit calls between allowed units."""
        units = tuple(dict.fromkeys(allowed_units))
        allowed = set(units)
        counts: dict[Pair, int] = {}
        total = 0

        for caller, callees in store.edges.items():
            caller_unit = owning_unit(caller, separator)
            if caller_unit not in allowed:
                continue
            for callee in callees:
                callee_unit = owning_unit(callee, separator)
                if callee_unit not in allowed or callee_unit == caller_unit:
                    continue
                pair = Pair.of(caller_unit, callee_unit)
                counts[pair] = counts.get(pair, 0) + 1
                total += 1

        logger.debug(
            "Coupling graph: %d units, %d coupled pairs, %d inter-unit calls",
            len(units),
            len(counts),
            total,
        )
        return cls(units, counts, total)

    @property
    def units(self) -> tuple[str, ...]:
        """Allowed units in allow-list order, isolated ones included."""
        return self._units

    @property
    def counts(self) -> Mapping[Pair, int]:
        """Raw call count per coupled pair."""
        return MappingProxyType(self._counts)

    @property
    def total(self) -> int:
        """Number of counted inter-unit calls (normalization denominator)."""
        return self._total

    def count(self, u1: str, u2: str) -> int:
        if u1 == u2:
            return 0
        return self._counts.get(Pair.of(u1, u2), 0)

    def weight(self, u1: str, u2: str) -> float:
        """Normalized coupling in [0, 1]; 0 for identical units or no data."""
        if u1 == u2 or self._total == 0:
            return 0.0
        return self._counts.get(Pair.of(u1, u2), 0) / self._total

    def pairs_by_weight(self) -> list[tuple[Pair, float]]:
        """Coupled pairs sorted by descending weight, ties in pair order."""
        ranked = sorted(self._counts.items(), key=lambda item: (-item[1], item[0]))
        return [(pair, self.weight(pair.a, pair.b)) for pair, _ in ranked]

    def total_weight(self) -> float:
        """Sum of all pair weights: 1.0 with coupling data, else 0.0."""
        if self._total == 0:
            return 0.0
        return sum(self._counts.values()) / self._total

    def __repr__(self) -> str:
        return f"CouplingGraph(units={len(self._units)}, pairs={len(self._counts)}, total={self._total})"
