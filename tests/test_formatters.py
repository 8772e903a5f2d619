"""Tests for the formatters package."""

import json

import pytest

from coupling_insight.config import ClusteringConfig
from coupling_insight.formatters import (
    CsvFormatter,
    DotFormatter,
    JsonFormatter,
    RichFormatter,
    TextFormatter,
    call_graph_to_dot,
    get_formatter,
    render_dendrogram_text,
)
from coupling_insight.graph.call_graph import CallGraphStore
from coupling_insight.pipeline import run_pipeline

UNITS = ("A", "B", "C", "D")


@pytest.fixture
def result(scenario_store):
    return run_pipeline(scenario_store, ClusteringConfig(allowed_units=UNITS))


@pytest.fixture
def repaired_result(scenario_store):
    return run_pipeline(scenario_store, ClusteringConfig(allowed_units=UNITS, coupling_threshold=1.1))


class TestCsv:
    def test_weight_table(self, result):
        assert CsvFormatter().format(result) == (
            "unit_a,unit_b,weight\n"
            "A,B,0.6000\n"
            "A,C,0.2000\n"
            "C,D,0.2000\n"
        )

    def test_precision_follows_config(self, scenario_store):
        config = ClusteringConfig(allowed_units=UNITS, weight_precision=2)
        text = CsvFormatter().format(run_pipeline(scenario_store, config))
        assert "A,B,0.60\n" in text

    def test_no_coupling_header_only(self):
        result = run_pipeline(CallGraphStore(), ClusteringConfig(allowed_units=("X", "Y")))
        assert CsvFormatter().format(result) == "unit_a,unit_b,weight\n"


class TestDot:
    def test_nodes_include_isolated_units(self, scenario_store):
        config = ClusteringConfig(allowed_units=UNITS + ("Lonely",))
        dot = DotFormatter().format(run_pipeline(scenario_store, config))
        assert dot.startswith("graph CouplingWeights {")
        assert '  "Lonely";' in dot
        assert "Lonely\" --" not in dot

    def test_one_edge_per_pair(self, result):
        dot = DotFormatter().format(result)
        assert dot.count(" -- ") == 3
        assert '"A" -- "B" [label="0.6000", penwidth=6.40];' in dot
        assert dot.rstrip().endswith("}")

    def test_call_graph(self):
        store = CallGraphStore()
        store.merge([("A.m", "B.n"), ("A.m", 'Q"uote.x')])
        dot = call_graph_to_dot(store)
        assert dot.startswith("digraph CallGraph {")
        assert '"A.m" -> "B.n";' in dot
        assert '"Q\\"uote.x"' in dot


class TestDendrogramText:
    def test_scenario_listing(self, result):
        assert render_dendrogram_text(result.root) == (
            "    - A\n"
            "    - B\n"
            "  [merge sim=0.600] {A, B}\n"
            "    - C\n"
            "    - D\n"
            "  [merge sim=0.200] {C, D}\n"
            "[merge sim=0.050] {A, B, C, D}\n"
        )

    def test_empty(self):
        assert render_dendrogram_text(None) == ""


class TestJson:
    def test_structure(self, result):
        data = json.loads(JsonFormatter().format(result))
        assert data["units"] == list(UNITS)
        assert data["total_calls"] == 10
        assert data["weights"][0] == {"unit_a": "A", "unit_b": "B", "weight": 0.6}
        assert data["dendrogram"]["members"] == ["A", "B", "C", "D"]
        assert data["dendrogram"]["children"][0]["children"][0] == {"unit": "A"}
        assert data["modules"] == [
            {"members": ["A", "B"], "average_coupling": 0.6},
            {"members": ["C", "D"], "average_coupling": 0.2},
        ]
        assert data["max_modules"] == 2
        assert data["repaired"] is False

    def test_repair_reported(self, repaired_result):
        data = json.loads(JsonFormatter().format(repaired_result))
        assert data["repaired"] is True
        assert data["repair_merges"] == 1

    def test_empty_result(self):
        data = json.loads(JsonFormatter().format(run_pipeline(CallGraphStore())))
        assert data["dendrogram"] is None
        assert data["modules"] == []


class TestRich:
    def test_report_mentions_modules(self, result):
        text = RichFormatter().format(result)
        assert "Coupling weights" in text
        assert "Dendrogram" in text
        assert "A, B" in text
        assert "0.6000" in text

    def test_repair_note(self, repaired_result):
        assert "Module budget exceeded" in RichFormatter().format(repaired_result)


class TestText:
    def test_scenario_report(self, result):
        text = TextFormatter().format(result)
        assert text.startswith("Dendrogram (average linkage)\n")
        assert "  [merge sim=0.600] {A, B}\n" in text
        assert "Modules (CP=0.3, max=2)\n" in text
        assert "  Module 1: {A, B}  avg=0.6000  (pairs=1)\n" in text
        assert "  Module 2: {C, D}  avg=0.2000  (pairs=1)\n" in text
        assert "Module budget exceeded" not in text

    def test_repair_reported(self, repaired_result):
        text = TextFormatter().format(repaired_result)
        assert "Modules (CP=1.1, max=2)" in text
        assert "Module budget exceeded: 1 smallest-module merge(s) applied" in text

    def test_empty_result(self):
        text = TextFormatter().format(run_pipeline(CallGraphStore()))
        assert "(no units)" in text
        assert "Module 1" not in text


class TestGetFormatter:
    @pytest.mark.parametrize(
        "name, cls",
        [("rich", RichFormatter), ("json", JsonFormatter), ("csv", CsvFormatter), ("dot", DotFormatter), ("text", TextFormatter)],
    )
    def test_known(self, name, cls):
        assert isinstance(get_formatter(name), cls)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")
