"""Deterministic JSON serialization for network snapshots.

The owning planner hands snapshots across process boundaries as JSON.  The
serialised form is byte-identical for identical networks: keys are sorted,
time points and constraint records are emitted in sorted order.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from temporal_engine.models.network import TemporalNetwork


def serialize_network(network: TemporalNetwork) -> str:
    """Serialize a network snapshot to a deterministic JSON string.

    Constraints are emitted as a sorted list of ``{"from", "to", "bound"}``
    records; ``(min, max)`` bounds become two-element lists.
    """
    raw = network.model_dump(mode="json")
    return json.dumps(raw, indent=2, sort_keys=True, ensure_ascii=False)


def deserialize_network(json_str: str) -> TemporalNetwork:
    """Hydrate a :class:`TemporalNetwork` from JSON.

    Raises
    ------
    pydantic.ValidationError
        If the JSON does not conform to the network schema.
    """
    return TemporalNetwork.model_validate_json(json_str)


def validate_network_schema(json_str: str) -> list[str]:
    """Validate *json_str* against the network schema without raising.

    Returns a list of human-readable messages; empty when the JSON is valid.
    """
    try:
        TemporalNetwork.model_validate_json(json_str)
    except ValidationError as exc:
        return [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" if err.get("loc") else err["msg"]
            for err in exc.errors()
        ]
    except (ValueError, TypeError) as exc:
        return [f"Invalid JSON: {exc}"]

    return []
