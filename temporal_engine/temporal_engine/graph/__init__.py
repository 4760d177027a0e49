"""Graph projections of network snapshots."""

from temporal_engine.graph.constraint_graph import (
    build_constraint_graph,
    find_unpaired_points,
    get_interval_ids,
)

__all__ = [
    "build_constraint_graph",
    "find_unpaired_points",
    "get_interval_ids",
]
