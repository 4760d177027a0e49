"""Time-unit arithmetic for network snapshots.

All numeric times inside a network share its declared :class:`TimeUnit`.
Durations that the engine itself needs (such as the look-ahead horizon of the
next-available-slot search) are written in milliseconds and converted with
:func:`convert_from_milliseconds`.
"""

from __future__ import annotations

import logging
from typing import Any

from temporal_engine.models.interval import TimeValue
from temporal_engine.models.network import TemporalNetwork, TimeUnit, is_duration_range, is_time_value

logger = logging.getLogger(__name__)

MILLISECONDS_PER_DAY = 24 * 3600 * 1000

# Integer divisors from a millisecond base.  Microseconds scale up instead.
_MILLISECOND_DIVISORS: dict[TimeUnit, int] = {
    TimeUnit.MILLISECOND: 1,
    TimeUnit.SECOND: 1000,
    TimeUnit.MINUTE: 60_000,
    TimeUnit.HOUR: 3_600_000,
    TimeUnit.DAY: 86_400_000,
}

_MICROSECONDS_PER_UNIT: dict[TimeUnit, int] = {
    TimeUnit.MICROSECOND: 1,
    TimeUnit.MILLISECOND: 1000,
    TimeUnit.SECOND: 1_000_000,
    TimeUnit.MINUTE: 60_000_000,
    TimeUnit.HOUR: 3_600_000_000,
    TimeUnit.DAY: 86_400_000_000,
}

_UNIT_PRECISION: dict[TimeUnit, int] = {
    TimeUnit.MICROSECOND: 1,
    TimeUnit.MILLISECOND: 2,
    TimeUnit.SECOND: 3,
    TimeUnit.MINUTE: 4,
    TimeUnit.HOUR: 5,
    TimeUnit.DAY: 6,
}


def _coerce_unit(unit: TimeUnit | str) -> TimeUnit | None:
    if isinstance(unit, TimeUnit):
        return unit
    try:
        return TimeUnit(unit)
    except ValueError:
        return None


def convert_from_milliseconds(value_ms: int, unit: TimeUnit | str) -> int:
    """Express a whole number of milliseconds in *unit*.

    Coarser units use floor division, so sub-unit remainders are discarded.
    An unrecognised unit passes the millisecond value through unchanged.
    """
    target = _coerce_unit(unit)
    if target is None:
        logger.warning("Unknown time unit %r; passing %d ms through unconverted", unit, value_ms)
        return value_ms
    if target is TimeUnit.MICROSECOND:
        return value_ms * 1000
    return value_ms // _MILLISECOND_DIVISORS[target]


def search_horizon(unit: TimeUnit | str, days: int = 30) -> int:
    """Length of a look-ahead window of *days* calendar days in *unit*."""
    return convert_from_milliseconds(days * MILLISECONDS_PER_DAY, unit)


def unit_to_microseconds(unit: TimeUnit) -> int:
    """Number of microseconds in one *unit*."""
    return _MICROSECONDS_PER_UNIT[TimeUnit(unit)]


def unit_conversion_factor(from_unit: TimeUnit, to_unit: TimeUnit) -> float:
    """Multiplier that turns a value in *from_unit* into *to_unit*."""
    return unit_to_microseconds(from_unit) / unit_to_microseconds(to_unit)


def unit_precision(unit: TimeUnit) -> int:
    """Rank of *unit* by granularity; lower is finer."""
    return _UNIT_PRECISION[TimeUnit(unit)]


def _rescale_bound(bound: Any, factor: float) -> Any:
    if is_time_value(bound):
        return round(bound * factor)
    if is_duration_range(bound):
        return (round(bound[0] * factor), round(bound[1] * factor))
    return bound


def convert_network_units(network: TemporalNetwork, new_unit: TimeUnit) -> TemporalNetwork:
    """Return a copy of *network* with every duration bound rescaled to *new_unit*.

    Recognised bounds are multiplied by the conversion factor and rounded to
    whole units.  Unrecognised bounds are copied verbatim.  No consistency
    pass runs afterwards; the input network is left untouched.
    """
    new_unit = TimeUnit(new_unit)
    if network.time_unit is new_unit:
        return network

    factor = unit_conversion_factor(network.time_unit, new_unit)
    converted: dict[tuple[str, str], Any] = {
        pair: _rescale_bound(bound, factor) for pair, bound in network.constraints.items()
    }
    logger.debug(
        "Converted %d constraint(s) from %s to %s (factor %s)",
        len(converted),
        network.time_unit.value,
        new_unit.value,
        factor,
    )
    return network.model_copy(update={"constraints": converted, "time_unit": new_unit})


def format_duration(value: TimeValue, unit: TimeUnit) -> str:
    """Render *value* with its unit suffix for log messages."""
    suffix = unit.value if value == 1 else f"{unit.value}s"
    return f"{value} {suffix}"
