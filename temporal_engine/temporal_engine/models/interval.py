"""Derived value types returned by scheduling queries.

None of these are stored in a network.  Intervals are derived from matched
start/end time points, merged blocks from overlapping intervals, and slots
from the gaps between merged blocks.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Times stay in the network's native unit; ints are preserved where possible.
TimeValue = int | float


class Interval(BaseModel):
    """A span derived from an ``<id>_start`` / ``<id>_end`` point pair."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Interval id (point name without suffix).")
    start_time: TimeValue = Field(..., description="Derived start, always 0 for extracted intervals.")
    end_time: TimeValue = Field(..., description="Derived end: the nominal duration.")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Attribute bag looked up by interval id.",
    )

    @property
    def duration(self) -> TimeValue:
        return self.end_time - self.start_time

    def overlaps(self, start: TimeValue, end: TimeValue) -> bool:
        """Inclusive overlap test: touching at an endpoint counts."""
        return self.start_time <= end and start <= self.end_time


class MergedBlock(BaseModel):
    """A maximal run of overlapping or touching intervals collapsed into one span."""

    model_config = ConfigDict(frozen=True)

    start_time: TimeValue
    end_time: TimeValue
    interval_ids: list[str] = Field(
        default_factory=list,
        description="Ids of the intervals covered by this block, in start order.",
    )


class Slot(BaseModel):
    """A free window of exactly the requested duration."""

    model_config = ConfigDict(frozen=True)

    start_time: TimeValue
    end_time: TimeValue

    @model_validator(mode="after")
    def validate_start_before_end(self) -> Slot:
        if self.start_time > self.end_time:
            raise ValueError(f"Slot start ({self.start_time}) must be <= end ({self.end_time}).")
        return self

    @property
    def duration(self) -> TimeValue:
        return self.end_time - self.start_time
