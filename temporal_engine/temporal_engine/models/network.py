"""Simple Temporal Network snapshot consumed by the interval scheduler.

A :class:`TemporalNetwork` is built and owned by the planner or the
persistence layer.  The scheduler only ever reads it: the model is frozen, and
every query takes the snapshot for the duration of a single call.

Constraint values are *duration bounds*.  Two encodings are recognised:

* a single number ``d`` -- an exact, fixed duration;
* a ``(min, max)`` pair -- a flexible duration range.

Any other value is kept verbatim.  The scheduler treats such entries as
unresolved and drops the corresponding interval instead of failing.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

START_SUFFIX = "_start"
END_SUFFIX = "_end"


class TimeUnit(str, Enum):
    """Native numeric scale of every time value in a network."""

    MICROSECOND = "microsecond"
    MILLISECOND = "millisecond"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"


class TemporalNetwork(BaseModel):
    """Immutable snapshot of an STN.

    ``constraints`` is keyed by an ordered ``(from_point, to_point)`` pair.
    The JSON form stores constraints as a list of ``{"from", "to", "bound"}``
    records because JSON objects cannot carry tuple keys; both shapes are
    accepted on input.

    The freeze is shallow: fields cannot be reassigned, but the mappings they
    hold are plain dicts.  Callers must treat them as read-only; derive a new
    snapshot with ``model_copy(update=...)`` instead of editing in place.
    """

    model_config = ConfigDict(frozen=True)

    time_points: frozenset[str] = Field(
        default_factory=frozenset,
        description="Distinct time point identifiers.",
    )
    constraints: dict[tuple[str, str], Any] = Field(
        default_factory=dict,
        description="Ordered point pair -> exact duration or (min, max) range.",
    )
    metadata: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Interval id -> opaque attribute bag carried through queries.",
    )
    time_unit: TimeUnit = Field(
        default_factory=lambda: _default_time_unit(),
        description="Unit of every numeric time value in this network.",
    )

    @field_validator("constraints", mode="before")
    @classmethod
    def coerce_constraint_records(cls, value: Any) -> Any:
        """Accept the list-of-records JSON shape alongside a plain mapping."""
        if not isinstance(value, list):
            return value
        coerced: dict[tuple[str, str], Any] = {}
        for record in value:
            if not isinstance(record, dict) or "from" not in record or "to" not in record:
                raise ValueError(f"Constraint record must carry 'from' and 'to' keys, got {record!r}")
            bound = record.get("bound")
            if isinstance(bound, list):
                bound = tuple(bound)
            coerced[(record["from"], record["to"])] = bound
        return coerced

    @field_serializer("time_points", when_used="json")
    def serialize_time_points(self, time_points: frozenset[str]) -> list[str]:
        return sorted(time_points)

    @field_serializer("constraints", when_used="json")
    def serialize_constraints(self, constraints: dict[tuple[str, str], Any]) -> list[dict[str, Any]]:
        return [
            {"from": from_point, "to": to_point, "bound": bound}
            for (from_point, to_point), bound in sorted(constraints.items(), key=lambda item: item[0])
        ]

    def get_constraint(self, from_point: str, to_point: str) -> Any | None:
        """Return the bound stored for ``(from_point, to_point)``, or ``None``."""
        return self.constraints.get((from_point, to_point))

    def has_time_point(self, point: str) -> bool:
        return point in self.time_points

    @classmethod
    def from_intervals(
        cls,
        durations: dict[str, Any],
        *,
        time_unit: TimeUnit | None = None,
        metadata: dict[str, dict[str, Any]] | None = None,
    ) -> TemporalNetwork:
        """Build a snapshot holding one ``<id>_start``/``<id>_end`` pair per entry.

        Convenience for callers and tests that describe a network directly in
        terms of interval durations; no constraint propagation takes place.
        Without *time_unit* the configured ``default_time_unit`` applies.
        """
        time_points: set[str] = set()
        constraints: dict[tuple[str, str], Any] = {}
        for interval_id, bound in durations.items():
            start_point = f"{interval_id}{START_SUFFIX}"
            end_point = f"{interval_id}{END_SUFFIX}"
            time_points.update((start_point, end_point))
            constraints[(start_point, end_point)] = bound
        return cls(
            time_points=frozenset(time_points),
            constraints=constraints,
            metadata=metadata or {},
            time_unit=time_unit or _default_time_unit(),
        )


def _default_time_unit() -> TimeUnit:
    """Unit for networks built without an explicit one (``TEMPORAL_DEFAULT_TIME_UNIT``)."""
    from temporal_engine.config import load_settings

    return load_settings().default_time_unit


def is_time_value(value: Any) -> bool:
    """True for ints and floats; booleans are not durations."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_duration_range(bound: Any) -> bool:
    """True for a ``(min, max)`` pair of numbers (a list after JSON)."""
    return isinstance(bound, (tuple, list)) and len(bound) == 2 and all(is_time_value(v) for v in bound)


def is_duration_bound(bound: Any) -> bool:
    """True when *bound* is a recognised encoding: exact duration or range."""
    return is_time_value(bound) or is_duration_range(bound)
