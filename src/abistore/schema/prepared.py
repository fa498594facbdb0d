from __future__ import annotations

from dataclasses import dataclass

from abistore.abi.descriptor import EventDescriptor
from abistore.core.errors import SchemaError

from .sanitize import sanitize_name
from .statements import FIXED_COLUMN_NAMES, EventStatements, build_statements, uses_field_names
from .tables import Table, event_to_tables


@dataclass(frozen=True, slots=True)
class PreparedEvent:
    """Everything needed to store logs of one event.

    The order of tables and of cells within them is given by the shared
    traversal in `abistore.schema.layout`.
    """

    name: str  # sanitized
    descriptor: EventDescriptor
    tables: list[Table]
    statements: EventStatements


def field_names(name: str, descriptor: EventDescriptor, as_columns: bool = True) -> list[str]:
    """Sanitized field names; raises SchemaError on duplicates.

    With `as_columns` the names become the columns of table 0, so they must
    not collide with the fixed columns either.
    """
    names: list[str] = []
    seen: set[str] = set()
    for field in descriptor.inputs:
        column = sanitize_name(field.name)
        # DuckDB identifiers are case-insensitive
        key = column.lower()
        if as_columns and key in FIXED_COLUMN_NAMES:
            raise SchemaError(f"field name {column!r} collides with a fixed column", event=name, operation="prepare_event")
        if key in seen:
            raise SchemaError(f"duplicate field name {column!r}", event=name, operation="prepare_event")
        names.append(column)
        seen.add(key)
    return names


def prepare_schema(event: str, descriptor: EventDescriptor) -> PreparedEvent:
    """Compile `descriptor` into tables and statements without touching a database."""
    name = sanitize_name(event)
    tables = event_to_tables(descriptor)
    columns = field_names(name, descriptor, as_columns=uses_field_names(0, tables[0], len(descriptor.inputs)))
    return PreparedEvent(
        name=name,
        descriptor=descriptor,
        tables=tables,
        statements=build_statements(name, columns, tables),
    )
