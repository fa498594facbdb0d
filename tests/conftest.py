from collections.abc import Callable, Iterator

import pytest

from abistore.abi.descriptor import EventDescriptor, EventField
from abistore.abi.kinds import Kind
from abistore.storage.database import DuckDBDatabase


@pytest.fixture
def db() -> Iterator[DuckDBDatabase]:
    database = DuckDBDatabase.open("duckdb://")
    yield database
    database.close()


@pytest.fixture
def make_descriptor() -> Callable[..., EventDescriptor]:
    def _make(kinds: list[Kind], name: str = "") -> EventDescriptor:
        return EventDescriptor(
            name=name,
            inputs=tuple(EventField(name=f"field {i}", kind=kind) for i, kind in enumerate(kinds)),
        )

    return _make
