"""Read-side interval scheduling over Simple Temporal Network snapshots."""

from temporal_engine.config import SchedulerConfig, Settings, load_settings
from temporal_engine.models import Interval, MergedBlock, Slot, TemporalNetwork, TimeUnit
from temporal_engine.scheduling import (
    InvalidInputError,
    NoAvailableSlotError,
    SchedulingError,
    check_interval_conflicts,
    find_free_slots,
    find_next_available_slot,
    get_intervals,
    get_overlapping_intervals,
)

__version__ = "0.1.0"

__all__ = [
    "Interval",
    "InvalidInputError",
    "MergedBlock",
    "NoAvailableSlotError",
    "SchedulerConfig",
    "SchedulingError",
    "Settings",
    "Slot",
    "TemporalNetwork",
    "TimeUnit",
    "check_interval_conflicts",
    "find_free_slots",
    "find_next_available_slot",
    "get_intervals",
    "get_overlapping_intervals",
    "load_settings",
]
