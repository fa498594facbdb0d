from pathlib import Path

import pytest

from abistore.core.config import IN_MEMORY, StoreConfig, parse_database_url
from abistore.core.errors import ConfigError
from abistore.storage.database import DuckDBDatabase


def test_in_memory() -> None:
    target = parse_database_url("duckdb://")
    assert target.database == IN_MEMORY
    assert target.options == {}


def test_relative_path(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    target = parse_database_url("duckdb:///data/events.db")
    assert target.database == (tmp_path / "data" / "events.db").as_posix()


def test_absolute_path(tmp_path: Path) -> None:
    target = parse_database_url(f"duckdb:///{tmp_path}/events.db")
    assert target.database == (tmp_path / "events.db").as_posix()


def test_query_options() -> None:
    target = parse_database_url("duckdb:///?access_mode=read_only&threads=2")
    assert target.options == {"access_mode": "read_only", "threads": "2"}


@pytest.mark.parametrize(
    "url",
    [
        "sqlite://",
        "postgres://localhost/db",
        "duckdb://host/events.db",
        "duckdb:///events.db#main",
    ],
)
def test_invalid_urls(url: str) -> None:
    with pytest.raises(ConfigError):
        parse_database_url(url)


def test_open_with_pragmas() -> None:
    with DuckDBDatabase.open(StoreConfig(threads=1, memory_limit="256MB")) as db:
        threads = db.connection.execute("SELECT current_setting('threads')").fetchone()[0]
        assert int(threads) == 1


def test_open_rejects_quoted_memory_limit() -> None:
    with pytest.raises(ConfigError):
        DuckDBDatabase.open(StoreConfig(memory_limit="1GB'; DROP TABLE event_block; --"))
