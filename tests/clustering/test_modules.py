"""Tests for clustering/modules.py."""

import random

import pytest

from coupling_insight.clustering.models import Module
from coupling_insight.clustering.hierarchical import HierarchicalClustering
from coupling_insight.clustering.modules import ModulesExtractor, extract_modules, max_modules_for
from coupling_insight.exceptions import InvalidThresholdError
from coupling_insight.graph.call_graph import CallGraphStore
from coupling_insight.graph.coupling import CouplingGraph
from coupling_insight.graph.models import CallEdge

UNITS = ("A", "B", "C", "D")


def _run(units, store, threshold):
    clustering = HierarchicalClustering(units, CouplingGraph.build(store, units))
    return extract_modules(clustering.cluster(), clustering, threshold)


def _random_store(rng: random.Random, units: list[str]) -> CallGraphStore:
    store = CallGraphStore()
    for _ in range(rng.randint(0, 4 * len(units))):
        caller = f"{rng.choice(units)}.m{rng.randint(0, 3)}"
        callee = f"{rng.choice(units)}.m{rng.randint(0, 3)}"
        store.merge([CallEdge(caller, callee)])
    return store


def _assert_partition(extraction, units):
    seen: set[str] = set()
    for module in extraction.modules:
        assert not seen & module.members
        seen |= module.members
    assert seen == set(units)


class TestMaxModules:
    @pytest.mark.parametrize(
        "n, expected", [(0, 1), (1, 1), (2, 1), (3, 1), (4, 2), (5, 2), (9, 4)]
    )
    def test_budget(self, n, expected):
        assert max_modules_for(n) == expected


class TestScenarioExtraction:
    def test_threshold_030(self, scenario_store):
        extraction = _run(UNITS, scenario_store, 0.30)
        assert extraction.max_modules == 2
        assert len(extraction) <= 2
        _assert_partition(extraction, UNITS)

    def test_threshold_030_groups(self, scenario_store):
        extraction = _run(UNITS, scenario_store, 0.30)
        groups = {module.members: module.average_coupling for module in extraction}
        assert groups[frozenset("AB")] == pytest.approx(0.6)
        # below CP, accepted because splitting would exceed the budget
        assert groups[frozenset("CD")] == pytest.approx(0.2)
        assert extraction.below_threshold[0].members == frozenset("CD")
        assert not extraction.repaired

    def test_impossible_threshold_terminates_within_budget(self, scenario_store):
        extraction = _run(UNITS, scenario_store, 1.1)
        assert len(extraction) <= 2
        _assert_partition(extraction, UNITS)

    def test_impossible_threshold_triggers_repair(self, scenario_store):
        extraction = _run(UNITS, scenario_store, 1.1)
        assert extraction.repaired
        assert extraction.repair_merges == 1
        assert [m.members for m in extraction] == [frozenset("CD"), frozenset("AB")]
        assert extraction.modules[-1].average_coupling == pytest.approx(0.6)

    def test_zero_threshold_accepts_root(self, scenario_store):
        extraction = _run(UNITS, scenario_store, 0.0)
        assert len(extraction) == 1
        assert extraction.modules[0].members == frozenset(UNITS)
        assert extraction.modules[0].pair_count == 6

    def test_low_threshold_keeps_clean_cut(self, scenario_store):
        extraction = _run(UNITS, scenario_store, 0.15)
        assert [m.members for m in extraction] == [frozenset(UNITS)]


class TestEdgeCases:
    def test_empty_input(self):
        clustering = HierarchicalClustering([], CouplingGraph.build(CallGraphStore(), []))
        extraction = extract_modules(clustering.cluster(), clustering, 0.3)
        assert extraction.modules == []
        assert not extraction.repaired

    def test_single_unit(self):
        store = CallGraphStore()
        extraction = _run(["Solo"], store, 0.3)
        assert [m.members for m in extraction] == [frozenset({"Solo"})]
        assert extraction.modules[0].average_coupling == 0.0

    def test_no_coupling_at_all(self):
        units = ["P", "Q", "R", "S", "T", "U"]
        extraction = _run(units, CallGraphStore(), 0.3)
        assert len(extraction) <= 3
        _assert_partition(extraction, units)

    @pytest.mark.parametrize("bad", ["0.3", None, True, float("nan"), float("inf"), -0.1])
    def test_malformed_threshold_rejected(self, scenario_store, bad):
        clustering = HierarchicalClustering(UNITS, CouplingGraph.build(scenario_store, UNITS))
        with pytest.raises(InvalidThresholdError):
            ModulesExtractor(clustering, bad)

    def test_integer_threshold_accepted(self, scenario_store):
        clustering = HierarchicalClustering(UNITS, CouplingGraph.build(scenario_store, UNITS))
        assert ModulesExtractor(clustering, 1).threshold == 1.0


class TestSmallestModuleMerge:
    def _extractor(self, store):
        units = ("A", "B", "C", "D", "E")
        return ModulesExtractor(HierarchicalClustering(units, CouplingGraph.build(store, units)), 0.3)

    def test_first_smallest_pair_wins(self, scenario_store):
        modules = [
            Module(frozenset("AB"), 0.6),
            Module(frozenset("C"), 0.0),
            Module(frozenset("D"), 0.0),
            Module(frozenset("E"), 0.0),
        ]
        self._extractor(scenario_store)._merge_smallest(modules)
        assert [m.members for m in modules] == [frozenset("AB"), frozenset("E"), frozenset("CD")]

    def test_merged_average_recomputed(self, scenario_store):
        modules = [Module(frozenset("C"), 0.0), Module(frozenset("D"), 0.0)]
        self._extractor(scenario_store)._merge_smallest(modules)
        assert len(modules) == 1
        assert modules[0].average_coupling == pytest.approx(0.2)


class TestRandomGraphs:
    @pytest.mark.parametrize("seed", range(25))
    def test_partition_and_budget_hold(self, seed):
        rng = random.Random(seed)
        units = [f"U{i}" for i in range(rng.randint(1, 9))]
        store = _random_store(rng, units)
        threshold = rng.choice([0.0, 0.05, 0.2, 0.3, 0.5, 1.1])

        extraction = _run(units, store, threshold)

        _assert_partition(extraction, units)
        assert len(extraction) <= max(1, len(units) // 2)
        if not extraction.repaired:
            assert extraction.repair_merges == 0
