"""SQL text for the tables of one event.

Every identifier interpolated here is a sanitized name or a generated
`{name}_{i}` / `c{j}`; values always go through `?` placeholders.

Insert parameters:
- 1: block number
- 2: log index
- 3: transaction index
- 4: address
- 5: array index if this is an array table (all tables after the first)
- then one parameter per column
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .tables import Table

# Columns that every event table has.
FIXED_COLUMNS: tuple[tuple[str, str], ...] = (
    ("block_number", "BIGINT"),
    ("log_index", "BIGINT"),
    ("transaction_index", "BIGINT"),
    ("address", "BLOB"),
)
FIXED_COLUMNS_COUNT = len(FIXED_COLUMNS)
PRIMARY_KEY = "block_number, log_index"

# Column for array tables.
ARRAY_COLUMN = ("array_index", "BIGINT")
PRIMARY_KEY_ARRAY = "block_number, log_index, array_index"

FIXED_COLUMN_NAMES = frozenset(name for name, _ in FIXED_COLUMNS)


@dataclass(frozen=True, slots=True)
class InsertStatement:
    sql: str
    # Number of event cells per row. Does not count FIXED_COLUMNS and array index.
    fields: int


@dataclass(frozen=True, slots=True)
class EventStatements:
    create_tables: list[str]
    inserts: list[InsertStatement]
    removes: list[str]
    # (column name, DDL type) per table, fixed columns included
    columns: list[list[tuple[str, str]]]


def table_name(name: str, index: int) -> str:
    return f"{name}_{index}"


def uses_field_names(index: int, table: Table, field_count: int) -> bool:
    """Field names are only used when no field of table 0 was flattened into several columns."""
    return index == 0 and field_count == len(table.columns)


def table_columns(index: int, table: Table, field_names: Sequence[str]) -> list[tuple[str, str]]:
    columns = list(FIXED_COLUMNS)
    if index != 0:
        columns.append(ARRAY_COLUMN)
    use_field_names = uses_field_names(index, table, len(field_names))
    for j, column in enumerate(table.columns):
        column_name = field_names[j] if use_field_names else f"c{j}"
        columns.append((column_name, column.type.ddl))
    return columns


def _create_table(name: str, index: int, columns: Sequence[tuple[str, str]]) -> str:
    # fixed columns and the array index lead every table
    structural = FIXED_COLUMNS_COUNT + int(index != 0)
    definitions = []
    for j, (column_name, type_) in enumerate(columns):
        not_null = " NOT NULL" if j < structural else ""
        definitions.append(f"{column_name} {type_}{not_null}")
    primary_key = PRIMARY_KEY if index == 0 else PRIMARY_KEY_ARRAY
    return (
        f"CREATE TABLE IF NOT EXISTS {table_name(name, index)} "
        f"({', '.join(definitions)}, PRIMARY KEY ({primary_key}))"
    )


def _insert(name: str, index: int, table: Table) -> InsertStatement:
    is_array = index != 0
    count = FIXED_COLUMNS_COUNT + int(is_array) + len(table.columns)
    placeholders = ", ".join(["?"] * count)
    return InsertStatement(
        sql=f"INSERT INTO {table_name(name, index)} VALUES ({placeholders})",
        fields=len(table.columns),
    )


def _remove(name: str, index: int) -> str:
    return f"DELETE FROM {table_name(name, index)} WHERE block_number >= ?"


def build_statements(name: str, field_names: Sequence[str], tables: Sequence[Table]) -> EventStatements:
    """Generate DDL and DML for an event whose sanitized name is `name`.

    `field_names` are the sanitized field names in declaration order.
    """
    columns = [table_columns(i, table, field_names) for i, table in enumerate(tables)]
    return EventStatements(
        create_tables=[_create_table(name, i, c) for i, c in enumerate(columns)],
        inserts=[_insert(name, i, table) for i, table in enumerate(tables)],
        removes=[_remove(name, i) for i in range(len(tables))],
        columns=columns,
    )
