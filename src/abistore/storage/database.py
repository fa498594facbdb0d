"""DuckDB-backed event database.

Layout:
- `event_block`: one row per event with its (indexed, finalized) cursor
- `{event}_0`: fields that occur once per log
- `{event}_{i}`, i >= 1: one table per dynamic array, one row per element

Every public method runs in its own transaction: BEGIN, work, COMMIT, and
ROLLBACK + re-raise on any error. The in-memory registry of prepared events
is only updated after the commit that created the tables succeeded, so a
failed preparation never leaves a registry entry without tables. A new
process re-syncs by calling `prepare_event` again for each event, which is
idempotent and verifies the existing table layout.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

import duckdb

from abistore.abi.descriptor import EventDescriptor
from abistore.core.config import StoreConfig, parse_database_url
from abistore.core.errors import (
    ConfigError,
    ConsistencyError,
    InvalidUncle,
    RangeError,
    SchemaError,
    UnknownEvent,
)
from abistore.core.models import Block, EventBlock, Log, Uncle
from abistore.schema.encoder import MAX_SQL_INTEGER, encode_log
from abistore.schema.prepared import PreparedEvent, prepare_schema
from abistore.schema.sanitize import sanitize_name
from abistore.schema.statements import table_name

logger = logging.getLogger(__name__)

CREATE_EVENT_BLOCK_TABLE = (
    "CREATE TABLE IF NOT EXISTS event_block "
    "(event TEXT PRIMARY KEY NOT NULL, indexed BIGINT NOT NULL, finalized BIGINT NOT NULL)"
)
GET_EVENT_BLOCK = "SELECT indexed, finalized FROM event_block WHERE event = ?"
NEW_EVENT_BLOCK = (
    "INSERT INTO event_block (event, indexed, finalized) VALUES (?, 0, 0) ON CONFLICT (event) DO NOTHING"
)
SET_EVENT_BLOCK = "UPDATE event_block SET indexed = ?, finalized = ? WHERE event = ?"
SET_INDEXED_BLOCK = "UPDATE event_block SET indexed = ? WHERE event = ?"
LIST_EVENTS = "SELECT event FROM event_block ORDER BY event"
TABLE_COLUMNS = (
    "SELECT column_name, data_type FROM information_schema.columns "
    "WHERE table_catalog = current_database() AND table_schema = current_schema() "
    "AND lower(table_name) = lower(?) ORDER BY ordinal_position"
)


def _check_block(value: int, what: str, event: str, operation: str) -> int:
    if not 0 <= value <= MAX_SQL_INTEGER:
        raise RangeError(f"{what} {value} out of bounds", event=event, operation=operation)
    return value


class DuckDBDatabase:
    """Stores decoded logs in DuckDB tables derived from their event ABI."""

    def __init__(self, connection: duckdb.DuckDBPyConnection) -> None:
        self.connection = connection
        # Invariant: events in the map have corresponding tables in the database.
        self._events: dict[str, PreparedEvent] = {}

        self.connection.execute(CREATE_EVENT_BLOCK_TABLE)
        for sql in (GET_EVENT_BLOCK, NEW_EVENT_BLOCK, SET_EVENT_BLOCK, SET_INDEXED_BLOCK):
            self._check_statement(sql, event=None)

    @classmethod
    def open(cls, config: StoreConfig | str | None = None) -> DuckDBDatabase:
        """Open the database described by a `StoreConfig` or a `duckdb://` URL."""
        if config is None:
            config = StoreConfig()
        elif isinstance(config, str):
            config = StoreConfig(url=config)

        target = parse_database_url(config.url)
        logger.debug("opening database %s", target.database)
        connection = duckdb.connect(target.database, config=target.options)
        try:
            if config.threads is not None:
                connection.execute(f"PRAGMA threads={int(config.threads)}")
            if config.memory_limit is not None:
                if "'" in config.memory_limit:
                    raise ConfigError(f"invalid memory limit {config.memory_limit!r}", operation="open")
                connection.execute(f"PRAGMA memory_limit='{config.memory_limit}'")
            return cls(connection)
        except Exception:
            connection.close()
            raise

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> DuckDBDatabase:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---------- helpers ----------

    @contextmanager
    def _transaction(self) -> Iterator[duckdb.DuckDBPyConnection]:
        self.connection.begin()
        try:
            yield self.connection
        except BaseException:
            self.connection.rollback()
            raise
        self.connection.commit()

    def _check_statement(self, sql: str, event: str | None) -> None:
        """Make sure DuckDB parses `sql` into exactly one statement."""
        try:
            statements = self.connection.extract_statements(sql)
        except duckdb.ParserException as e:
            raise SchemaError(f"invalid statement {sql!r}: {e}", event=event, operation="prepare_event") from e
        if len(statements) != 1:
            raise SchemaError(f"expected one statement in {sql!r}", event=event, operation="prepare_event")

    def _execute_count(self, sql: str, params: list[object]) -> int:
        """Execute a DML statement and return the number of affected rows."""
        row = self.connection.execute(sql, params).fetchone()
        return int(row[0]) if row else 0

    def _prepared(self, event: str, operation: str) -> PreparedEvent:
        name = sanitize_name(event)
        prepared = self._events.get(name)
        if prepared is None:
            raise UnknownEvent("event wasn't prepared", event=name, operation=operation)
        return prepared

    # ---------- prepare ----------

    def prepare_event(self, name: str, descriptor: EventDescriptor) -> None:
        prepared = prepare_schema(name, descriptor)

        existing = self._events.get(prepared.name)
        if existing is not None:
            if existing.descriptor != descriptor:
                raise SchemaError(
                    "event already exists with different signature",
                    event=prepared.name,
                    operation="prepare_event",
                )
            return

        with self._transaction():
            self._create_event(prepared)
        self._events[prepared.name] = prepared
        logger.info("prepared event %s (%d tables)", prepared.name, len(prepared.tables))

    def _create_event(self, prepared: PreparedEvent) -> None:
        statements = prepared.statements
        for sql in statements.create_tables:
            logger.debug("creating table:\n%s", sql)
            self.connection.execute(sql)
        self._check_layout(prepared)

        self.connection.execute(NEW_EVENT_BLOCK, [prepared.name])

        for insert in statements.inserts:
            logger.debug("creating insert statement:\n%s", insert.sql)
            self._check_statement(insert.sql, prepared.name)
        for remove in statements.removes:
            self._check_statement(remove, prepared.name)

    def _check_layout(self, prepared: PreparedEvent) -> None:
        """Tables created by an earlier run must match the compiled layout."""
        for i, expected in enumerate(prepared.statements.columns):
            table = table_name(prepared.name, i)
            rows = self.connection.execute(TABLE_COLUMNS, [table]).fetchall()
            actual = [(column.lower(), type_) for column, type_ in rows]
            if actual != [(column.lower(), type_) for column, type_ in expected]:
                raise SchemaError(
                    f"table {table} exists with a different layout",
                    event=prepared.name,
                    operation="prepare_event",
                )

    # ---------- cursors ----------

    def event_block(self, name: str) -> Block:
        name = sanitize_name(name)
        row = self.connection.execute(GET_EVENT_BLOCK, [name]).fetchone()
        if row is None:
            raise UnknownEvent("no cursor for event", event=name, operation="event_block")
        return Block(indexed=int(row[0]), finalized=int(row[1]))

    def known_events(self) -> list[str]:
        """Sanitized names of all events with a cursor in this database."""
        return [row[0] for row in self.connection.execute(LIST_EVENTS).fetchall()]

    def _set_event_blocks(self, blocks: Sequence[EventBlock]) -> None:
        for block in blocks:
            prepared = self._prepared(block.event, "set_event_blocks")
            indexed = _check_block(block.block.indexed, "indexed", prepared.name, "set_event_blocks")
            finalized = _check_block(block.block.finalized, "finalized", prepared.name, "set_event_blocks")
            rows = self._execute_count(SET_EVENT_BLOCK, [indexed, finalized, prepared.name])
            if rows != 1:
                raise ConsistencyError(
                    f"query unexpectedly changed {rows} rows instead of 1",
                    event=prepared.name,
                    operation="set_event_blocks",
                )

    # ---------- logs ----------

    def _store_event(self, log: Log) -> None:
        prepared = self._prepared(log.event, "store_event")
        for table in encode_log(prepared, log):
            if len(table.rows) == 1:
                self.connection.execute(table.sql, table.rows[0])
            elif table.rows:
                self.connection.executemany(table.sql, table.rows)

    def update(self, blocks: Sequence[EventBlock], logs: Sequence[Log]) -> None:
        with self._transaction():
            self._set_event_blocks(blocks)
            for log in logs:
                self._store_event(log)

    # ---------- uncles ----------

    def _remove(self, uncle: Uncle) -> None:
        name = sanitize_name(uncle.event)
        if uncle.number == 0:
            raise InvalidUncle("block 0 got uncled", event=name, operation="remove")
        block = _check_block(uncle.number, "block", name, "remove")
        prepared = self._prepared(uncle.event, "remove")

        for sql in prepared.statements.removes:
            self.connection.execute(sql, [block])
        rows = self._execute_count(SET_INDEXED_BLOCK, [block - 1, prepared.name])
        if rows != 1:
            raise ConsistencyError(
                f"query unexpectedly changed {rows} rows instead of 1",
                event=prepared.name,
                operation="remove",
            )
        logger.info("removed blocks >= %d of event %s", block, prepared.name)

    def remove(self, uncles: Sequence[Uncle]) -> None:
        with self._transaction():
            for uncle in uncles:
                self._remove(uncle)
