from __future__ import annotations

from .abi.descriptor import EventDescriptor, EventField, get_event_descriptors_from_abi
from .abi.kinds import Kinds, parse_kind
from .abi.values import Values, to_value
from .core.config import StoreConfig
from .core.errors import AbiStoreError
from .core.models import Block, EventBlock, Log, Uncle
from .schema.prepared import prepare_schema
from .schema.tables import event_to_tables
from .storage.database import DuckDBDatabase

__all__ = [
    "EventDescriptor",
    "EventField",
    "get_event_descriptors_from_abi",
    "Kinds",
    "parse_kind",
    "Values",
    "to_value",
    "StoreConfig",
    "AbiStoreError",
    "Block",
    "EventBlock",
    "Log",
    "Uncle",
    "prepare_schema",
    "event_to_tables",
    "DuckDBDatabase",
]
