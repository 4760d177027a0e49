"""Interval scheduling queries over a Simple Temporal Network snapshot.

The operations are layered:

1. :func:`get_intervals` derives intervals from matched ``<id>_start`` /
   ``<id>_end`` time points.
2. :func:`get_overlapping_intervals` and :func:`check_interval_conflicts`
   filter them against a query window.
3. :func:`find_free_slots` merges the occupied intervals of a window and scans
   the gaps between them.
4. :func:`find_next_available_slot` runs a single free-slot probe over a
   bounded look-ahead horizon.

Key behaviours
--------------
* **Fixed-zero start.**  A derived interval always starts at ``0`` and ends at
  its nominal duration.  Its true placement in the wider network would need a
  constraint-propagation pass, which this module does not perform.
* **Midpoint durations.**  A ``(min, max)`` range collapses to
  ``(min + max) / 2``.
* **Inclusive overlap.**  Touching at an endpoint counts as overlapping.
* **Purity.**  No query mutates the snapshot or keeps a reference to it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from temporal_engine.config import SchedulerConfig
from temporal_engine.graph.constraint_graph import get_interval_ids
from temporal_engine.models.interval import Interval, MergedBlock, Slot, TimeValue
from temporal_engine.models.network import (
    END_SUFFIX,
    START_SUFFIX,
    TemporalNetwork,
    is_duration_range,
    is_time_value,
)
from temporal_engine.scheduling.errors import (
    InvalidInputError,
    NoAvailableSlotError,
    UnresolvedIntervalError,
)
from temporal_engine.telemetry.profiling import profile_query
from temporal_engine.units import format_duration, search_horizon

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = SchedulerConfig()


# ---------------------------------------------------------------------------
# Interval extraction
# ---------------------------------------------------------------------------


def resolve_interval_bounds(network: TemporalNetwork, interval_id: str) -> tuple[TimeValue, TimeValue]:
    """Return ``(start_time, end_time)`` for *interval_id*.

    Raises
    ------
    UnresolvedIntervalError
        If the ``(start, end)`` pair has no constraint, or the stored value is
        neither an exact duration nor a ``(min, max)`` range.
    """
    bound = network.get_constraint(f"{interval_id}{START_SUFFIX}", f"{interval_id}{END_SUFFIX}")
    if bound is None:
        raise UnresolvedIntervalError(interval_id, UnresolvedIntervalError.NO_CONSTRAINT)

    if is_time_value(bound):
        return 0, bound

    if is_duration_range(bound):
        min_duration, max_duration = bound
        if min_duration == max_duration:
            return 0, min_duration
        return 0, (min_duration + max_duration) / 2

    raise UnresolvedIntervalError(interval_id, UnresolvedIntervalError.INVALID_CONSTRAINT)


@profile_query("stn.intervals")
def get_intervals(network: TemporalNetwork) -> list[Interval]:
    """Derive every interval represented by a matched start/end point pair.

    Candidates whose pair lacks a usable duration constraint are dropped
    silently.  The result is sorted by interval id.
    """
    intervals: list[Interval] = []
    for interval_id in get_interval_ids(network):
        try:
            start_time, end_time = resolve_interval_bounds(network, interval_id)
        except UnresolvedIntervalError as exc:
            logger.debug("Dropped interval %r: %s", exc.interval_id, exc.reason)
            continue
        intervals.append(
            Interval(
                id=interval_id,
                start_time=start_time,
                end_time=end_time,
                metadata=network.metadata.get(interval_id, {}),
            )
        )
    return intervals


# ---------------------------------------------------------------------------
# Overlap queries
# ---------------------------------------------------------------------------


def _select_overlapping(intervals: Iterable[Interval], start: TimeValue, end: TimeValue) -> list[Interval]:
    return [interval for interval in intervals if interval.overlaps(start, end)]


@profile_query("stn.overlapping")
def get_overlapping_intervals(
    network: TemporalNetwork,
    query_start: TimeValue,
    query_end: TimeValue,
) -> list[Interval]:
    """Return the intervals intersecting ``[query_start, query_end]``.

    An interval overlaps when ``start_time <= query_end`` and
    ``query_start <= end_time``; boundary contact is included.

    Raises
    ------
    InvalidInputError
        If ``query_start > query_end``.
    """
    if query_start > query_end:
        raise InvalidInputError(f"query_start ({query_start}) must be <= query_end ({query_end}).")
    return _select_overlapping(get_intervals(network), query_start, query_end)


@profile_query("stn.conflicts")
def check_interval_conflicts(
    network: TemporalNetwork,
    new_start: TimeValue,
    new_end: TimeValue,
) -> list[Interval]:
    """List the existing intervals a candidate ``[new_start, new_end]`` would overlap.

    An empty list means no conflict.  The candidate is not registered.
    """
    if new_start > new_end:
        raise InvalidInputError(f"new_start ({new_start}) must be <= new_end ({new_end}).")
    return get_overlapping_intervals(network, new_start, new_end)


# ---------------------------------------------------------------------------
# Merge and gap scan
# ---------------------------------------------------------------------------


def merge_overlapping_intervals(intervals: Iterable[Interval]) -> list[MergedBlock]:
    """Collapse overlapping or touching intervals into disjoint blocks.

    Intervals are sorted by ``start_time``; an interval starting at or before
    the current block's end extends that block.  Blocks come back in start
    order and no two of them overlap.
    """
    blocks: list[MergedBlock] = []
    for interval in sorted(intervals, key=lambda i: i.start_time):
        if blocks and interval.start_time <= blocks[-1].end_time:
            last = blocks[-1]
            blocks[-1] = MergedBlock(
                start_time=last.start_time,
                end_time=max(last.end_time, interval.end_time),
                interval_ids=[*last.interval_ids, interval.id],
            )
        else:
            blocks.append(
                MergedBlock(
                    start_time=interval.start_time,
                    end_time=interval.end_time,
                    interval_ids=[interval.id],
                )
            )
    return blocks


def find_gaps_in_timeline(
    blocks: list[MergedBlock],
    window_start: TimeValue,
    window_end: TimeValue,
    duration: TimeValue,
) -> list[Slot]:
    """Emit one slot of *duration* per gap wide enough to hold it.

    Each slot is anchored at the earliest point of its gap: the window start
    for the leading gap, the end of the preceding block otherwise.
    """
    slots: list[Slot] = []

    if not blocks:
        if window_end - window_start >= duration:
            slots.append(Slot(start_time=window_start, end_time=window_start + duration))
        return slots

    first = blocks[0]
    if first.start_time > window_start and first.start_time - window_start >= duration:
        slots.append(Slot(start_time=window_start, end_time=window_start + duration))

    for current, following in zip(blocks, blocks[1:]):
        gap_start = current.end_time
        if following.start_time - gap_start >= duration:
            slots.append(Slot(start_time=gap_start, end_time=gap_start + duration))

    last = blocks[-1]
    if last.end_time < window_end and window_end - last.end_time >= duration:
        slots.append(Slot(start_time=last.end_time, end_time=last.end_time + duration))

    return sorted(slots, key=lambda s: s.start_time)


# ---------------------------------------------------------------------------
# Slot search
# ---------------------------------------------------------------------------


@profile_query("stn.free_slots")
def find_free_slots(
    network: TemporalNetwork,
    duration: TimeValue,
    window_start: TimeValue,
    window_end: TimeValue,
) -> list[Slot]:
    """Find free slots of exactly *duration* inside ``[window_start, window_end]``.

    Parameters
    ----------
    network:
        The snapshot to query.
    duration:
        Required slot length, in the network's time unit.  Must be positive.
    window_start, window_end:
        Search window.  Must be at least *duration* long.

    Returns
    -------
    list[Slot]
        One slot per qualifying gap, sorted by ``start_time``.

    Raises
    ------
    InvalidInputError
        If any guard condition on *duration* or the window is violated.
    """
    if duration <= 0:
        raise InvalidInputError(f"duration must be > 0, got {duration}.")
    if window_start > window_end:
        raise InvalidInputError(f"window_start ({window_start}) must be <= window_end ({window_end}).")
    if window_end - window_start < duration:
        raise InvalidInputError(
            f"Window [{window_start}, {window_end}] is shorter than the requested duration {duration}."
        )

    occupied = _select_overlapping(get_intervals(network), window_start, window_end)
    blocks = merge_overlapping_intervals(occupied)
    slots = find_gaps_in_timeline(blocks, window_start, window_end, duration)

    logger.debug(
        "Free-slot scan of [%s, %s]: %d occupied interval(s), %d block(s), %d slot(s)",
        window_start,
        window_end,
        len(occupied),
        len(blocks),
        len(slots),
    )
    return slots


@profile_query("stn.next_slot")
def find_next_available_slot(
    network: TemporalNetwork,
    duration: TimeValue,
    earliest_start: TimeValue,
    config: SchedulerConfig | None = None,
) -> Slot:
    """Return the first free slot of *duration* at or after *earliest_start*.

    The search covers ``[earliest_start, earliest_start + horizon]`` where the
    horizon is ``config.search_horizon_days`` calendar days (30 by default)
    expressed in the network's time unit.  This is one bounded probe; callers
    wanting a later window must call again with a later *earliest_start*.

    Raises
    ------
    InvalidInputError
        If *duration* is not positive or exceeds the horizon.
    NoAvailableSlotError
        If the horizon holds no feasible slot.
    """
    cfg = config or _DEFAULT_CONFIG
    if duration <= 0:
        raise InvalidInputError(f"duration must be > 0, got {duration}.")

    horizon = search_horizon(network.time_unit, days=cfg.search_horizon_days)
    slots = find_free_slots(network, duration, earliest_start, earliest_start + horizon)
    if not slots:
        logger.info(
            "No slot of %s within %s of %s",
            format_duration(duration, network.time_unit),
            format_duration(horizon, network.time_unit),
            earliest_start,
        )
        raise NoAvailableSlotError(duration, earliest_start, horizon)
    return slots[0]
