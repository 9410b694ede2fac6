"""Serialization module — boundary payloads, canonical JSON and hashing."""

from plan_engine.serialization.payload import (
    canonical_json,
    context_payload,
    inputs_hash,
    plan_payload,
    to_json,
    to_payload,
)

__all__ = [
    "canonical_json",
    "context_payload",
    "inputs_hash",
    "plan_payload",
    "to_json",
    "to_payload",
]
