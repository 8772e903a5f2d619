"""Call graph accumulation and unit coupling weights."""

from .call_graph import CallGraphStore
from .coupling import CouplingGraph
from .models import CallEdge, Pair, owning_unit

__all__ = ["CallEdge", "CallGraphStore", "CouplingGraph", "Pair", "owning_unit"]
