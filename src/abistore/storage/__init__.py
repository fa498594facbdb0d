"""Storage backends for decoded event logs.

This package provides:
- DuckDBDatabase: event tables, block cursors and uncle removal in DuckDB
"""

from abistore.storage.database import DuckDBDatabase

__all__ = [
    "DuckDBDatabase",
]
