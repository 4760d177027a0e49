"""Unit tests for temporal_engine.graph.constraint_graph."""

from __future__ import annotations

import networkx as nx

from temporal_engine.graph.constraint_graph import (
    build_constraint_graph,
    find_unpaired_points,
    get_interval_ids,
)
from temporal_engine.models.network import TemporalNetwork, TimeUnit

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _network() -> TemporalNetwork:
    return TemporalNetwork(
        time_points=frozenset({"a_start", "a_end", "b_start", "c_end", "origin"}),
        constraints={
            ("a_start", "a_end"): (10, 20),
            ("origin", "a_start"): 5,
            ("origin", "ghost"): 1,
        },
        time_unit=TimeUnit.HOUR,
    )


# ---------------------------------------------------------------------------
# build_constraint_graph
# ---------------------------------------------------------------------------


class TestBuildConstraintGraph:
    def test_nodes_and_edges(self):
        graph = build_constraint_graph(_network())
        assert isinstance(graph, nx.DiGraph)
        assert graph.has_edge("a_start", "a_end")
        assert graph.has_edge("origin", "a_start")
        assert not graph.has_edge("a_end", "a_start")

    def test_edge_bound(self):
        graph = build_constraint_graph(_network())
        assert graph.edges["a_start", "a_end"]["bound"] == (10, 20)

    def test_isolated_points_present(self):
        graph = build_constraint_graph(_network())
        assert graph.has_node("b_start")
        assert graph.degree("b_start") == 0

    def test_undeclared_endpoint_flagged(self):
        graph = build_constraint_graph(_network())
        assert graph.nodes["ghost"]["declared"] is False
        assert graph.nodes["origin"]["declared"] is True

    def test_time_unit_recorded(self):
        assert build_constraint_graph(_network()).graph["time_unit"] == "hour"

    def test_empty_network(self):
        graph = build_constraint_graph(TemporalNetwork())
        assert graph.number_of_nodes() == 0


# ---------------------------------------------------------------------------
# Pairing diagnostics
# ---------------------------------------------------------------------------


class TestPairing:
    def test_interval_ids(self):
        assert get_interval_ids(_network()) == ["a"]

    def test_interval_ids_ignore_constraints(self):
        network = TemporalNetwork(time_points=frozenset({"x_start", "x_end"}))
        assert get_interval_ids(network) == ["x"]

    def test_unpaired_points(self):
        assert find_unpaired_points(_network()) == ["b_start", "c_end"]

    def test_fully_paired(self):
        network = TemporalNetwork.from_intervals({"a": 1, "b": 2})
        assert find_unpaired_points(network) == []
