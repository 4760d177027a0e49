"""Read-only NetworkX view of a network snapshot.

Each time point becomes a node and each constraint a directed edge
``from_point -> to_point`` whose ``"bound"`` attribute holds the stored
duration encoding.  The graph is a projection for inspection and
diagnostics; building it never modifies the snapshot.
"""

from __future__ import annotations

import logging

import networkx as nx

from temporal_engine.models.network import END_SUFFIX, START_SUFFIX, TemporalNetwork
from temporal_engine.telemetry.profiling import profile_query

logger = logging.getLogger(__name__)


@profile_query("stn.build_graph")
def build_constraint_graph(network: TemporalNetwork) -> nx.DiGraph:
    """Project *network* onto a directed graph.

    Constraint endpoints that are not declared time points are still added
    as nodes, flagged with ``declared=False``.
    """
    graph = nx.DiGraph(time_unit=network.time_unit.value)

    for point in sorted(network.time_points):
        graph.add_node(point, declared=True)

    for (from_point, to_point), bound in sorted(network.constraints.items(), key=lambda item: item[0]):
        for point in (from_point, to_point):
            if point not in graph:
                graph.add_node(point, declared=False)
        graph.add_edge(from_point, to_point, bound=bound)

    undeclared = [n for n, declared in graph.nodes(data="declared") if not declared]
    if undeclared:
        logger.debug("Constraint graph references %d undeclared point(s): %s", len(undeclared), undeclared)

    return graph


def get_interval_ids(network: TemporalNetwork) -> list[str]:
    """Sorted ids of every matched ``<id>_start`` / ``<id>_end`` pair."""
    ids: list[str] = []
    for point in network.time_points:
        if point.endswith(START_SUFFIX):
            interval_id = point.removesuffix(START_SUFFIX)
            if f"{interval_id}{END_SUFFIX}" in network.time_points:
                ids.append(interval_id)
    return sorted(ids)


def find_unpaired_points(network: TemporalNetwork) -> list[str]:
    """Sorted start/end points whose counterpart is missing.

    These points never yield an interval.
    """
    unpaired: list[str] = []
    for point in network.time_points:
        if point.endswith(START_SUFFIX):
            counterpart = f"{point.removesuffix(START_SUFFIX)}{END_SUFFIX}"
        elif point.endswith(END_SUFFIX):
            counterpart = f"{point.removesuffix(END_SUFFIX)}{START_SUFFIX}"
        else:
            continue
        if counterpart not in network.time_points:
            unpaired.append(point)
    return sorted(unpaired)
