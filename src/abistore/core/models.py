"""Core records exchanged with the event database.

- `Log`: one decoded event occurrence to store.
- `Block` / `EventBlock`: the per-event (indexed, finalized) cursor.
- `Uncle`: a block of an event that turned out to be orphaned.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from abistore.abi.values import Value

ZERO_ADDRESS = b"\x00" * 20


@dataclass(slots=True, frozen=True)
class Block:
    """Progress cursor of one event."""

    indexed: int
    finalized: int


@dataclass(slots=True, frozen=True)
class EventBlock:
    event: str
    block: Block


@dataclass(slots=True, frozen=True)
class Uncle:
    event: str
    number: int


@dataclass(slots=True, frozen=True)
class Log:
    """A decoded log; `fields` are ordered like the event descriptor inputs."""

    event: str
    block_number: int = 0
    log_index: int = 0
    transaction_index: int = 0
    address: bytes | str = ZERO_ADDRESS  # 20 raw bytes or 0x-hex
    fields: tuple[Value, ...] = field(default_factory=tuple)
