"""Core data models, configuration, errors and interfaces.

This package provides:
- Data models (Log, Block, EventBlock, Uncle)
- Configuration (StoreConfig, database URL parsing)
- The error taxonomy (SchemaError, UnknownEvent, ValueMismatch, ...)
- The IEventDatabase protocol
"""

from abistore.core.config import StoreConfig, parse_database_url
from abistore.core.errors import (
    AbiStoreError,
    ConfigError,
    ConsistencyError,
    InvalidUncle,
    NestedDynamicArrays,
    RangeError,
    SchemaError,
    UnknownEvent,
    ValueMismatch,
)
from abistore.core.interfaces import IEventDatabase
from abistore.core.models import Block, EventBlock, Log, Uncle

__all__ = [
    "StoreConfig",
    "parse_database_url",
    "AbiStoreError",
    "ConfigError",
    "ConsistencyError",
    "InvalidUncle",
    "NestedDynamicArrays",
    "RangeError",
    "SchemaError",
    "UnknownEvent",
    "ValueMismatch",
    "IEventDatabase",
    "Block",
    "EventBlock",
    "Log",
    "Uncle",
]
