"""Domain models for the temporal engine."""

from temporal_engine.models.interval import Interval, MergedBlock, Slot, TimeValue
from temporal_engine.models.network import (
    END_SUFFIX,
    START_SUFFIX,
    TemporalNetwork,
    TimeUnit,
    is_duration_bound,
    is_duration_range,
    is_time_value,
)
from temporal_engine.models.network_serializer import (
    deserialize_network,
    serialize_network,
    validate_network_schema,
)

__all__ = [
    "END_SUFFIX",
    "Interval",
    "MergedBlock",
    "START_SUFFIX",
    "Slot",
    "TemporalNetwork",
    "TimeUnit",
    "TimeValue",
    "deserialize_network",
    "is_duration_bound",
    "is_duration_range",
    "is_time_value",
    "serialize_network",
    "validate_network_schema",
]
