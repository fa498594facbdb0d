"""Error taxonomy for schema preparation, log storage and uncle removal.

Every error carries the sanitized `event` name (when known) and the
`operation` that failed so callers can log it and abort the enclosing
transaction. Nothing here is retried internally.
"""

from __future__ import annotations


class AbiStoreError(Exception):
    """Base class of all errors raised by abistore."""

    def __init__(self, message: str, *, event: str | None = None, operation: str | None = None) -> None:
        self.message = message
        self.event = event
        self.operation = operation
        super().__init__(self._format())

    def _format(self) -> str:
        parts = []
        if self.operation:
            parts.append(self.operation)
        if self.event:
            parts.append(f"event {self.event}")
        prefix = ": ".join(parts)
        return f"{prefix}: {self.message}" if prefix else self.message


class SchemaError(AbiStoreError, ValueError):
    """The event cannot be mapped to (or does not match) its tables."""


class NestedDynamicArrays(SchemaError):
    """A dynamic array (transitively) contains another dynamic array."""


class UnknownEvent(AbiStoreError, LookupError):
    """The event was never prepared."""


class ValueMismatch(AbiStoreError, ValueError):
    """A log's values do not match the event descriptor."""


class RangeError(AbiStoreError, OverflowError):
    """A block number or index does not fit a signed 64-bit column."""


class ConsistencyError(AbiStoreError, RuntimeError):
    """A statement affected an unexpected number of rows."""


class InvalidUncle(AbiStoreError, ValueError):
    """Block 0 has no parent and can never be uncled."""


class ConfigError(AbiStoreError, ValueError):
    """Malformed database URL or store configuration."""
