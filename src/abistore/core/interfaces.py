from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from abistore.abi.descriptor import EventDescriptor
from abistore.core.models import Block, EventBlock, Log, Uncle


# ---------------------------------------------------------------------------
# IEventDatabase
# ---------------------------------------------------------------------------

@runtime_checkable
class IEventDatabase(Protocol):
    """
    Transactional sink for decoded event logs.

    Domain expectations:
    - Every method runs in exactly one transaction; it either fully applies
      or raises and leaves the database untouched.
    - Event names are free-form; implementations map them to safe
      identifiers.
    """

    def prepare_event(self, name: str, descriptor: EventDescriptor) -> None:
        """
        Create the tables and the cursor of an event.

        Idempotent for an identical descriptor; raises SchemaError when the
        name is already prepared with a different descriptor.
        """
        ...

    def event_block(self, name: str) -> Block:
        """Return the (indexed, finalized) cursor of a prepared event."""
        ...

    def update(self, blocks: Sequence[EventBlock], logs: Sequence[Log]) -> None:
        """
        Apply cursor updates, then store logs.

        Implementations:
        - DuckDBDatabase
        """
        ...

    def remove(self, uncles: Sequence[Uncle]) -> None:
        """
        Delete every row at or after each uncled block and rewind the
        event's indexed cursor to the block before it.
        """
        ...
