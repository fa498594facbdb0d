import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table as RichTable

from .abi.descriptor import EventDescriptor, get_event_descriptors_from_abi
from .core.config import StoreConfig
from .core.errors import AbiStoreError
from .core.models import Uncle
from .schema.prepared import prepare_schema
from .storage.database import DuckDBDatabase

console = Console()

database_option = click.option(
    "--database",
    "database_url",
    envvar="ABISTORE_DATABASE",
    default="duckdb://",
    show_default=True,
    help="duckdb:// URL of the event database",
)


def _select_events(abi_path: Path, names: tuple[str, ...]) -> dict[str, EventDescriptor]:
    events = get_event_descriptors_from_abi(abi_path)
    if not names:
        return events
    missing = [n for n in names if n not in events]
    if missing:
        raise click.UsageError(f"events not in ABI: {', '.join(missing)}")
    return {n: events[n] for n in names}


@click.group()
@click.option("-v", "--verbose", count=True, help="-v for info, -vv for debug logs")
def cli(verbose: int) -> None:
    """abistore: store decoded EVM event logs in ABI-derived DuckDB tables."""
    level = logging.WARNING - 10 * min(verbose, 2)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@cli.command("schema")
@click.argument("abi_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--event", "events", multiple=True, help="Event name; repeat to select several")
def schema_cmd(abi_path: Path, events: tuple[str, ...]) -> None:
    """Print the tables and DDL compiled for the events of a JSON ABI."""
    for name, descriptor in _select_events(abi_path, events).items():
        try:
            prepared = prepare_schema(name, descriptor)
        except AbiStoreError as e:
            console.print(f"[bold red]{name}[/]: {e}")
            continue

        console.rule(f"[bold]{descriptor.signature}")
        console.print(f"topic0 {descriptor.topic0}")
        for sql in prepared.statements.create_tables:
            console.print(Syntax(sql, "sql", word_wrap=True))


@cli.command("prepare")
@click.argument("abi_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--event", "events", multiple=True, help="Event name; repeat to select several")
@database_option
def prepare_cmd(abi_path: Path, events: tuple[str, ...], database_url: str) -> None:
    """Create tables and cursors for the events of a JSON ABI."""
    selected = _select_events(abi_path, events)
    try:
        with DuckDBDatabase.open(StoreConfig(url=database_url)) as db:
            for name, descriptor in selected.items():
                db.prepare_event(name, descriptor)
                console.print(f"prepared [bold]{name}[/]")
    except AbiStoreError as e:
        raise click.ClickException(str(e)) from e


@cli.command("cursor")
@click.argument("events", nargs=-1)
@database_option
def cursor_cmd(events: tuple[str, ...], database_url: str) -> None:
    """Show the (indexed, finalized) cursor of events."""
    try:
        with DuckDBDatabase.open(StoreConfig(url=database_url)) as db:
            table = RichTable("event", "indexed", "finalized")
            for name in events or db.known_events():
                block = db.event_block(name)
                table.add_row(name, f"{block.indexed:,}", f"{block.finalized:,}")
    except AbiStoreError as e:
        raise click.ClickException(str(e)) from e
    console.print(table)


@cli.command("uncle")
@click.argument("abi_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("event")
@click.argument("block", type=int)
@database_option
def uncle_cmd(abi_path: Path, event: str, block: int, database_url: str) -> None:
    """Delete every row of EVENT at or after BLOCK and rewind its cursor."""
    descriptor = _select_events(abi_path, (event,))[event]
    try:
        with DuckDBDatabase.open(StoreConfig(url=database_url)) as db:
            db.prepare_event(event, descriptor)
            db.remove([Uncle(event=event, number=block)])
            cursor = db.event_block(event)
    except AbiStoreError as e:
        raise click.ClickException(str(e)) from e
    console.print(f"removed {event} blocks >= {block:,}; indexed now {cursor.indexed:,}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
