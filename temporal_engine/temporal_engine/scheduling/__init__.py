"""Interval scheduling queries over network snapshots."""

from temporal_engine.scheduling.errors import (
    InvalidInputError,
    NoAvailableSlotError,
    SchedulingError,
    UnresolvedIntervalError,
)
from temporal_engine.scheduling.interval_scheduler import (
    check_interval_conflicts,
    find_free_slots,
    find_gaps_in_timeline,
    find_next_available_slot,
    get_intervals,
    get_overlapping_intervals,
    merge_overlapping_intervals,
    resolve_interval_bounds,
)

__all__ = [
    # Errors
    "InvalidInputError",
    "NoAvailableSlotError",
    "SchedulingError",
    "UnresolvedIntervalError",
    # Queries
    "check_interval_conflicts",
    "find_free_slots",
    "find_gaps_in_timeline",
    "find_next_available_slot",
    "get_intervals",
    "get_overlapping_intervals",
    "merge_overlapping_intervals",
    "resolve_interval_bounds",
]
