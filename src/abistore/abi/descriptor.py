"""Event descriptors and loading them from Solidity JSON ABIs.

`EventDescriptor` is the immutable, comparable description of an event that
the schema compiler consumes. JSON ABI entries are validated with pydantic
(`AbiInput` / `AbiEvent`) and converted with `get_event_descriptor`.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from eth_utils.abi import event_signature_to_log_topic
from pydantic import BaseModel

from .kinds import Kind, parse_kind, type_string


@dataclass(frozen=True, slots=True)
class EventField:
    name: str
    kind: Kind
    indexed: bool = False


@dataclass(frozen=True, slots=True)
class EventDescriptor:
    name: str
    inputs: tuple[EventField, ...]
    anonymous: bool = False

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(type_string(f.kind) for f in self.inputs)})"

    @property
    def topic0(self) -> str:
        return "0x" + event_signature_to_log_topic(self.signature).hex()


# ---------- JSON ABI ----------


class AbiInput(BaseModel):
    name: str = ""
    type: str
    indexed: bool = False
    internalType: str | None = None
    components: list[AbiInput] | None = None


AbiInput.model_rebuild()


class AbiEvent(BaseModel):
    anonymous: bool = False
    inputs: Sequence[AbiInput]
    name: str
    type: Literal["event"]


def _canonical_type(abi_input: AbiInput) -> str:
    """Expand `tuple` types into `(a,b,...)` so eth_abi's grammar can parse them."""
    if not abi_input.type.startswith("tuple"):
        return abi_input.type
    components = abi_input.components or []
    suffix = abi_input.type[len("tuple"):]
    return "(" + ",".join(_canonical_type(c) for c in components) + ")" + suffix


def get_event_descriptor(event: AbiEvent) -> EventDescriptor:
    return EventDescriptor(
        name=event.name,
        inputs=tuple(
            EventField(name=i.name, kind=parse_kind(_canonical_type(i)), indexed=i.indexed)
            for i in event.inputs
        ),
        anonymous=event.anonymous,
    )


AbiJson = Iterable[dict[str, Any]]
AbiSpec = AbiJson | Path


def _load_abi(abi: AbiSpec) -> AbiJson:
    if isinstance(abi, Path):
        return json.loads(abi.read_text())
    return abi


def get_events_from_abi(abi: AbiSpec) -> dict[str, AbiEvent]:
    abi = _load_abi(abi)
    return {entry["name"]: AbiEvent.model_validate(entry) for entry in abi if entry.get("type") == "event"}


def get_event_descriptors_from_abi(abi: AbiSpec) -> dict[str, EventDescriptor]:
    return {name: get_event_descriptor(event) for name, event in get_events_from_abi(abi).items()}
