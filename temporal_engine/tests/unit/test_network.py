"""Unit tests for temporal_engine.models (network snapshot, derived types, serializer)."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from temporal_engine.models.interval import Interval, Slot
from temporal_engine.models.network import (
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
from temporal_engine.scheduling.errors import UnresolvedIntervalError
from temporal_engine.scheduling.interval_scheduler import resolve_interval_bounds
from temporal_engine.units import convert_network_units

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _sample_network() -> TemporalNetwork:
    return TemporalNetwork(
        time_points=frozenset({"patrol_start", "patrol_end", "forge_start", "forge_end", "dawn"}),
        constraints={
            ("patrol_start", "patrol_end"): (30, 90),
            ("forge_start", "forge_end"): 45,
        },
        metadata={"patrol": {"hero": "Ayla", "zone": 3}},
        time_unit=TimeUnit.MINUTE,
    )


# ---------------------------------------------------------------------------
# TemporalNetwork
# ---------------------------------------------------------------------------


class TestTemporalNetwork:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TEMPORAL_DEFAULT_TIME_UNIT", raising=False)
        network = TemporalNetwork()
        assert network.time_points == frozenset()
        assert network.constraints == {}
        assert network.metadata == {}
        assert network.time_unit == TimeUnit.SECOND

    def test_get_constraint(self):
        network = _sample_network()
        assert network.get_constraint("forge_start", "forge_end") == 45
        assert network.get_constraint("forge_end", "forge_start") is None

    def test_has_time_point(self):
        network = _sample_network()
        assert network.has_time_point("dawn")
        assert not network.has_time_point("dusk")

    def test_frozen(self):
        network = _sample_network()
        with pytest.raises(ValidationError):
            network.time_unit = TimeUnit.HOUR  # type: ignore[misc]

    def test_unknown_time_unit_rejected(self):
        with pytest.raises(ValidationError):
            TemporalNetwork(time_unit="fortnight")

    def test_time_unit_from_string(self):
        assert TemporalNetwork(time_unit="hour").time_unit is TimeUnit.HOUR

    def test_from_intervals(self):
        network = TemporalNetwork.from_intervals({"a": 10, "b": (1, 3)}, time_unit=TimeUnit.DAY)
        assert network.time_points == frozenset({"a_start", "a_end", "b_start", "b_end"})
        assert network.get_constraint("b_start", "b_end") == (1, 3)
        assert network.time_unit is TimeUnit.DAY

    def test_constraint_records_accepted(self):
        network = TemporalNetwork(
            time_points=frozenset({"a_start", "a_end"}),
            constraints=[{"from": "a_start", "to": "a_end", "bound": [5, 15]}],
        )
        assert network.get_constraint("a_start", "a_end") == (5, 15)

    def test_constraint_record_without_endpoints_rejected(self):
        with pytest.raises(ValidationError):
            TemporalNetwork(constraints=[{"from": "a_start", "bound": 5}])

    def test_frozen_constraints_field(self):
        network = _sample_network()
        with pytest.raises(ValidationError):
            network.constraints = {}  # type: ignore[misc]

    def test_model_copy_leaves_original_untouched(self):
        network = _sample_network()
        updated = network.model_copy(update={"constraints": {("forge_start", "forge_end"): 60}})
        assert updated.get_constraint("forge_start", "forge_end") == 60
        assert network.get_constraint("forge_start", "forge_end") == 45
        assert network.get_constraint("patrol_start", "patrol_end") == (30, 90)


# ---------------------------------------------------------------------------
# Default time unit from settings
# ---------------------------------------------------------------------------


class TestDefaultTimeUnit:
    def test_env_sets_unit_of_bare_network(self, monkeypatch):
        monkeypatch.setenv("TEMPORAL_DEFAULT_TIME_UNIT", "millisecond")
        assert TemporalNetwork().time_unit is TimeUnit.MILLISECOND

    def test_env_sets_unit_of_built_network(self, monkeypatch):
        monkeypatch.setenv("TEMPORAL_DEFAULT_TIME_UNIT", "hour")
        assert TemporalNetwork.from_intervals({"a": 2}).time_unit is TimeUnit.HOUR

    def test_explicit_unit_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("TEMPORAL_DEFAULT_TIME_UNIT", "hour")
        network = TemporalNetwork.from_intervals({"a": 2}, time_unit=TimeUnit.DAY)
        assert network.time_unit is TimeUnit.DAY

    def test_deserialized_network_without_unit_uses_env(self, monkeypatch):
        monkeypatch.setenv("TEMPORAL_DEFAULT_TIME_UNIT", "minute")
        assert deserialize_network("{}").time_unit is TimeUnit.MINUTE

    def test_falls_back_to_second(self, monkeypatch):
        monkeypatch.delenv("TEMPORAL_DEFAULT_TIME_UNIT", raising=False)
        assert TemporalNetwork().time_unit is TimeUnit.SECOND


# ---------------------------------------------------------------------------
# Duration encodings
# ---------------------------------------------------------------------------

_BOUNDS = [
    60,
    2.5,
    (10, 20),
    [10, 20],
    (5, 5),
    True,
    (True, 2),
    "soon",
    None,
    (1, 2, 3),
    ("a", "b"),
    {"min": 1},
]


class TestDurationEncodings:
    def test_time_value(self):
        assert is_time_value(3)
        assert is_time_value(3.5)
        assert not is_time_value(True)
        assert not is_time_value("3")

    def test_duration_range(self):
        assert is_duration_range((1, 2))
        assert is_duration_range([1.5, 2])
        assert not is_duration_range((1, 2, 3))
        assert not is_duration_range((1, None))

    @pytest.mark.parametrize("bound", _BOUNDS)
    def test_extraction_and_unit_conversion_agree(self, bound):
        network = TemporalNetwork.from_intervals({"a": bound}, time_unit=TimeUnit.MINUTE)
        try:
            resolve_interval_bounds(network, "a")
            resolved = True
        except UnresolvedIntervalError:
            resolved = False
        converted = convert_network_units(network, TimeUnit.SECOND).get_constraint("a_start", "a_end")

        assert resolved is is_duration_bound(bound)
        assert (converted != bound) is is_duration_bound(bound)


# ---------------------------------------------------------------------------
# Derived value types
# ---------------------------------------------------------------------------


class TestDerivedTypes:
    def test_interval_duration(self):
        assert Interval(id="a", start_time=0, end_time=45.5).duration == 45.5

    def test_interval_overlaps_inclusive(self):
        interval = Interval(id="a", start_time=0, end_time=10)
        assert interval.overlaps(10, 20)
        assert interval.overlaps(-5, 0)
        assert not interval.overlaps(11, 20)

    def test_slot_duration(self):
        assert Slot(start_time=100, end_time=140).duration == 40

    def test_slot_rejects_inverted_bounds(self):
        with pytest.raises(ValidationError):
            Slot(start_time=10, end_time=5)

    def test_ints_preserved(self):
        slot = Slot(start_time=1, end_time=2)
        assert isinstance(slot.start_time, int)


# ---------------------------------------------------------------------------
# Serializer
# ---------------------------------------------------------------------------


class TestNetworkSerializer:
    def test_output_is_sorted(self):
        raw = json.loads(serialize_network(_sample_network()))
        assert raw["time_points"] == sorted(raw["time_points"])
        assert [(c["from"], c["to"]) for c in raw["constraints"]] == [
            ("forge_start", "forge_end"),
            ("patrol_start", "patrol_end"),
        ]
        assert raw["constraints"][1]["bound"] == [30, 90]
        assert raw["time_unit"] == "minute"

    def test_byte_identical_for_equal_networks(self):
        assert serialize_network(_sample_network()) == serialize_network(_sample_network())

    def test_round_trip(self):
        network = _sample_network()
        assert deserialize_network(serialize_network(network)) == network

    def test_deserialize_rejects_bad_unit(self):
        with pytest.raises(ValidationError):
            deserialize_network('{"time_unit": "fortnight"}')

    def test_validate_valid(self):
        assert validate_network_schema(serialize_network(_sample_network())) == []

    def test_validate_reports_field(self):
        errors = validate_network_schema('{"time_unit": "fortnight"}')
        assert len(errors) == 1
        assert errors[0].startswith("time_unit")

    def test_validate_invalid_json(self):
        assert validate_network_schema("{not json") != []
