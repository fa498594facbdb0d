"""ABI type grammar, typed values, traversal and event descriptors.

This package provides:
- `Kinds` / `Values`: the closed ABI type and value grammars
- `visit_kind` / `visit_value`: the shared depth-first traversal
- `EventDescriptor`: the event shape consumed by the schema compiler
- JSON ABI loading via pydantic models
"""

from abistore.abi.descriptor import (
    AbiEvent,
    AbiInput,
    EventDescriptor,
    EventField,
    get_event_descriptor,
    get_event_descriptors_from_abi,
    get_events_from_abi,
)
from abistore.abi.kinds import Kind, Kinds, parse_kind, type_string
from abistore.abi.values import Value, Values, to_value
from abistore.abi.visitor import Visit, Visits, array_depth, visit_kind, visit_value

__all__ = [
    "AbiEvent",
    "AbiInput",
    "EventDescriptor",
    "EventField",
    "get_event_descriptor",
    "get_event_descriptors_from_abi",
    "get_events_from_abi",
    "Kind",
    "Kinds",
    "parse_kind",
    "type_string",
    "Value",
    "Values",
    "to_value",
    "Visit",
    "Visits",
    "array_depth",
    "visit_kind",
    "visit_value",
]
