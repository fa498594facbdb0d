"""Event-to-schema compiler, statement generation and value encoding.

This package provides:
- `event_to_tables`: compile an event descriptor into table layouts
- `sanitize_name`: map free-form names to safe SQL identifiers
- `build_statements`: CREATE / INSERT / DELETE statements per table
- `prepare_schema`: all of the above for one event, without a database
- `encode_log`: turn a log's values into insert rows
"""

from abistore.schema.encoder import TableRows, encode_cell, encode_log
from abistore.schema.layout import Segment, layout
from abistore.schema.prepared import PreparedEvent, field_names, prepare_schema
from abistore.schema.sanitize import sanitize_name
from abistore.schema.statements import EventStatements, InsertStatement, build_statements
from abistore.schema.tables import Column, SqlType, Table, column_for, event_to_tables

__all__ = [
    "TableRows",
    "encode_cell",
    "encode_log",
    "Segment",
    "layout",
    "PreparedEvent",
    "field_names",
    "prepare_schema",
    "sanitize_name",
    "EventStatements",
    "InsertStatement",
    "build_statements",
    "Column",
    "SqlType",
    "Table",
    "column_for",
    "event_to_tables",
]
