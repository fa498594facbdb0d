"""Encode a log's values into the rows of its event tables.

Leaf encoding:
- int / uint  → 32-byte big-endian (two's complement for int), BLOB
- address     → 20 raw bytes, BLOB
- bool        → 0 / 1, INTEGER
- bytesN      → raw bytes, BLOB
- function    → address (20) + selector (4), BLOB
- bytes       → raw bytes, BLOB
- string      → UTF-8 bytes, BLOB
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, assert_never

from eth_utils import to_canonical_address

from abistore.abi.values import Value, Values
from abistore.abi.visitor import visit_value
from abistore.core.errors import ConsistencyError, RangeError, ValueMismatch
from abistore.core.models import Log

from .layout import layout
from .prepared import PreparedEvent

Cell = bytes | int

WORD_SIZE = 32
MAX_SQL_INTEGER = (1 << 63) - 1


@dataclass(frozen=True, slots=True)
class TableRows:
    """Parameter rows for one insert statement."""

    sql: str
    rows: list[list[Any]]


def encode_cell(value: Value) -> Cell:
    match value:
        case Values.Int(value=v):
            return v.to_bytes(WORD_SIZE, "big", signed=True)
        case Values.Uint(value=v):
            return v.to_bytes(WORD_SIZE, "big")
        case Values.Address(value=v):
            return bytes(v)
        case Values.Bool(value=v):
            return int(v)
        case Values.FixedBytes(value=v):
            return bytes(v)
        case Values.Function(address=address, selector=selector):
            return bytes(address) + bytes(selector)
        case Values.Bytes(value=v):
            return bytes(v)
        case Values.String(value=v):
            return v.encode("utf-8")
        case Values.Tuple() | Values.FixedArray() | Values.Array():
            raise AssertionError(f"composite value {value!r} reached the cell encoder")
        case _:
            assert_never(value)


def _sql_integer(value: int, what: str, event: str) -> int:
    if not 0 <= value <= MAX_SQL_INTEGER:
        raise RangeError(f"{what} {value} out of bounds", event=event, operation="store_event")
    return value


def _address(address: bytes | str, event: str) -> bytes:
    raw = to_canonical_address(address) if isinstance(address, str) else bytes(address)
    if len(raw) != 20:
        raise ValueMismatch(f"log address must be 20 bytes, got {len(raw)}", event=event, operation="store_event")
    return raw


def check_fields(prepared: PreparedEvent, fields: Sequence[Value]) -> None:
    inputs = prepared.descriptor.inputs
    if len(fields) != len(inputs):
        raise ValueMismatch(
            f"event value has {len(fields)} fields but should have {len(inputs)}",
            event=prepared.name,
            operation="store_event",
        )
    for i, (value, field) in enumerate(zip(fields, inputs)):
        if getattr(value, "kind", None) != field.kind:
            raise ValueMismatch(
                f"event field {i} doesn't match event descriptor",
                event=prepared.name,
                operation="store_event",
            )


def encode_log(prepared: PreparedEvent, log: Log) -> list[TableRows]:
    """Validate `log` against `prepared` and build the insert rows of every table."""
    check_fields(prepared, log.fields)

    fixed = [
        _sql_integer(log.block_number, "block number", prepared.name),
        _sql_integer(log.log_index, "log index", prepared.name),
        _sql_integer(log.transaction_index, "transaction index", prepared.name),
        _address(log.address, prepared.name),
    ]

    segments = layout(log.fields, visit_value, encode_cell)
    inserts = prepared.statements.inserts
    if len(segments) != len(inserts):
        raise ConsistencyError(
            f"log produced {len(segments)} tables, event has {len(inserts)}",
            event=prepared.name,
            operation="store_event",
        )

    out: list[TableRows] = []
    for index, (statement, segment) in enumerate(zip(inserts, segments)):
        if not segment.is_array:
            count = 1
        elif segment.length is not None:
            count = segment.length
        else:
            raise ConsistencyError(
                f"array table {index} has no element count",
                event=prepared.name,
                operation="store_event",
            )
        if statement.fields * count != len(segment.cells):
            raise ConsistencyError(
                f"table {index} expects {statement.fields} cells per row for {count} rows, got {len(segment.cells)}",
                event=prepared.name,
                operation="store_event",
            )
        rows = []
        for i in range(count):
            row = segment.cells[i * statement.fields:(i + 1) * statement.fields]
            array_index = [i] if segment.is_array else []
            rows.append([*fixed, *array_index, *row])
        out.append(TableRows(sql=statement.sql, rows=rows))
    return out
