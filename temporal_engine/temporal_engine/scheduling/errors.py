"""Exceptions raised by the interval scheduler."""

from __future__ import annotations

from temporal_engine.models.interval import TimeValue


class SchedulingError(Exception):
    """Base class for every scheduler failure."""


class InvalidInputError(SchedulingError, ValueError):
    """Raised when a query violates a precondition.

    Examples: ``query_start > query_end``, a non-positive duration, or a
    search window shorter than the requested duration.  No partial result is
    returned.
    """


class UnresolvedIntervalError(SchedulingError):
    """A start/end point pair lacks a usable duration constraint.

    Internal and non-fatal: extraction catches it and drops the candidate
    interval, since incompletely specified networks are expected.

    Attributes
    ----------
    interval_id:
        The candidate interval id.
    reason:
        ``"no_constraint"`` when the pair has no entry, or
        ``"invalid_constraint"`` when the entry is not a duration encoding.
    """

    NO_CONSTRAINT = "no_constraint"
    INVALID_CONSTRAINT = "invalid_constraint"

    def __init__(self, interval_id: str, reason: str) -> None:
        self.interval_id = interval_id
        self.reason = reason
        super().__init__(f"Interval {interval_id!r} is unresolved: {reason}")


class NoAvailableSlotError(SchedulingError):
    """The bounded look-ahead window holds no feasible slot.

    Terminal for the query: the search is never retried internally.
    """

    def __init__(self, duration: TimeValue, earliest_start: TimeValue, horizon: TimeValue) -> None:
        self.duration = duration
        self.earliest_start = earliest_start
        self.horizon = horizon
        super().__init__(
            f"No slot of duration {duration} available in "
            f"[{earliest_start}, {earliest_start + horizon}]"
        )
