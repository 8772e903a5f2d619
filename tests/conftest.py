"""Shared fixtures for Coupling Insight tests."""

import pytest

from coupling_insight.graph import CallEdge, CallGraphStore

SCENARIO_UNITS = ("A", "B", "C", "D")


def scenario_edge_sets() -> list[set[CallEdge]]:
    """Per-unit edge sets with A<->B=6, A<->C=2, C<->D=2 inter-unit calls.

    Each set also carries intra-unit calls and calls to units that are
    never allowed (the unresolved sentinel and a library class).
    """
    unit_a = {
        CallEdge("A.m1", "B.n1"),
        CallEdge("A.m1", "B.n2"),
        CallEdge("A.m2", "B.n1"),
        CallEdge("A.m1", "C.p1"),
        CallEdge("A.m1", "A.m2"),
        CallEdge("A.m2", "<external>.sqrt"),
    }
    unit_b = {
        CallEdge("B.n1", "A.m1"),
        CallEdge("B.n2", "A.m1"),
        CallEdge("B.n3", "A.m2"),
        CallEdge("B.n1", "Math.max"),
    }
    unit_c = {
        CallEdge("C.p1", "A.m2"),
        CallEdge("C.p1", "D.q1"),
        CallEdge("C.p1", "C.p2"),
    }
    unit_d = {
        CallEdge("D.q1", "C.p2"),
        CallEdge("D.q1", "<external>.println"),
    }
    return [unit_a, unit_b, unit_c, unit_d]


def build_store(edge_sets) -> CallGraphStore:
    store = CallGraphStore()
    for edges in edge_sets:
        store.merge(sorted(edges))
    return store


@pytest.fixture
def scenario_store():
    """Call graph of the four-unit reference scenario."""
    return build_store(scenario_edge_sets())


@pytest.fixture
def empty_store():
    return CallGraphStore()


@pytest.fixture
def scenario_edges():
    return scenario_edge_sets()


@pytest.fixture
def store_from():
    """Factory building a store from a list of edge sets."""
    return build_store
