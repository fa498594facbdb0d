"""Event-to-tables compiler.

An event is represented by several tables:

- table 0 holds every field value that occurs once per log, i.e. everything
  outside dynamic arrays; tuples and fixed arrays are flattened into
  consecutive columns
- one additional table per dynamic array occurrence, holding one row per
  element

Nested dynamic arrays are rejected.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import assert_never

from abistore.abi.descriptor import EventDescriptor
from abistore.abi.kinds import Kind, Kinds
from abistore.abi.visitor import array_depth, visit_kind
from abistore.core.errors import NestedDynamicArrays

from .layout import layout


class SqlType(enum.Enum):
    INTEGER = "BIGINT"
    BLOB = "BLOB"

    @property
    def ddl(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Column:
    type: SqlType


@dataclass(slots=True)
class Table:
    columns: list[Column] = field(default_factory=list)


def column_for(kind: Kind) -> Column:
    """Physical column of a scalar kind."""
    match kind:
        case (
            Kinds.Int()
            | Kinds.Uint()
            | Kinds.Address()
            | Kinds.FixedBytes()
            | Kinds.Function()
            | Kinds.Bytes()
            | Kinds.String()
        ):
            return Column(SqlType.BLOB)
        case Kinds.Bool():
            return Column(SqlType.INTEGER)
        case Kinds.Tuple() | Kinds.FixedArray() | Kinds.Array():
            raise AssertionError(f"composite kind {kind} reached the column mapper")
        case _:
            assert_never(kind)


def event_to_tables(event: EventDescriptor) -> list[Table]:
    kinds = [i.kind for i in event.inputs]

    for input_ in event.inputs:
        if array_depth(input_.kind) > 1:
            raise NestedDynamicArrays(
                f"field {input_.name!r} nests dynamic arrays",
                event=event.name,
                operation="event_to_tables",
            )

    return [Table(segment.cells) for segment in layout(kinds, visit_kind, column_for)]
