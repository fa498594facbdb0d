from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import parse_qsl, urlsplit

from abistore.core.errors import ConfigError

IN_MEMORY = ":memory:"


@dataclass(frozen=True)
class StoreConfig:
    """Configuration for opening an event database.

    `url` format is `duckdb://[/path[?query]]`:

    - `duckdb://` opens an in-memory database
    - `duckdb:///relative/foo.db` opens `relative/foo.db`
    - `duckdb:////absolute/foo.db` opens `/absolute/foo.db`

    Query string parameters are passed to DuckDB as connection config
    (e.g. `?access_mode=read_only`).
    """

    url: str = "duckdb://"
    threads: int | None = None
    memory_limit: str | None = None  # e.g. "8GB"


@dataclass(frozen=True)
class ConnectionTarget:
    """Resolved `duckdb.connect` arguments."""

    database: str
    options: dict[str, str] = field(default_factory=dict)


def parse_database_url(url: str) -> ConnectionTarget:
    parts = urlsplit(url)
    if parts.scheme != "duckdb":
        raise ConfigError(f"not a duckdb:// URL: {url!r}", operation="open")
    if parts.netloc:
        raise ConfigError("duckdb:// URL requires empty authority", operation="open")
    if parts.fragment:
        raise ConfigError("duckdb:// URL does not support fragments", operation="open")

    options = dict(parse_qsl(parts.query, keep_blank_values=True))
    if not parts.path:
        return ConnectionTarget(IN_MEMORY, options)

    # `duckdb:///foo.db` has path `/foo.db`; the leading slash separates it from the authority
    path = Path(parts.path[1:])
    if not path.is_absolute():
        path = Path.cwd() / path
    return ConnectionTarget(path.as_posix(), options)
