import pytest

from abistore.abi.descriptor import EventDescriptor, EventField
from abistore.abi.kinds import Kinds
from abistore.core.errors import SchemaError
from abistore.schema.prepared import prepare_schema


def _event(*fields: tuple[str, object]) -> EventDescriptor:
    return EventDescriptor("E", tuple(EventField(name, kind) for name, kind in fields))


def test_field_names_used_without_flattening() -> None:
    prepared = prepare_schema("Transfer", _event(("from", Kinds.Address()), ("value", Kinds.Uint(256))))
    statements = prepared.statements

    assert statements.create_tables == [
        "CREATE TABLE IF NOT EXISTS Transfer_0 (block_number BIGINT NOT NULL, log_index BIGINT NOT NULL, "
        "transaction_index BIGINT NOT NULL, address BLOB NOT NULL, from_ BLOB, value BLOB, "
        "PRIMARY KEY (block_number, log_index))"
    ]
    assert [s.sql for s in statements.inserts] == ["INSERT INTO Transfer_0 VALUES (?, ?, ?, ?, ?, ?)"]
    assert [s.fields for s in statements.inserts] == [2]
    assert statements.removes == ["DELETE FROM Transfer_0 WHERE block_number >= ?"]


def test_flattening_falls_back_to_generic_names() -> None:
    prepared = prepare_schema(
        "event",
        _event(("flag", Kinds.Bool()), ("pair", Kinds.Tuple((Kinds.Bool(), Kinds.Bytes())))),
    )
    columns = [name for name, _ in prepared.statements.columns[0]]
    assert columns[4:] == ["c0", "c1", "c2"]
    assert prepared.name == "event"


def test_array_tables_have_array_index() -> None:
    prepared = prepare_schema(
        "Batch",
        _event(("ok", Kinds.Bool()), ("items", Kinds.Array(Kinds.Tuple((Kinds.Bool(), Kinds.String()))))),
    )
    statements = prepared.statements

    assert len(statements.create_tables) == 2
    assert statements.create_tables[1] == (
        "CREATE TABLE IF NOT EXISTS Batch_1 (block_number BIGINT NOT NULL, log_index BIGINT NOT NULL, "
        "transaction_index BIGINT NOT NULL, address BLOB NOT NULL, array_index BIGINT NOT NULL, "
        "c0 BIGINT, c1 BLOB, PRIMARY KEY (block_number, log_index, array_index))"
    )
    # one column for two fields: generic names even for the plain bool
    assert statements.columns[0][4:] == [("c0", "BIGINT")]
    assert statements.inserts[1].sql == "INSERT INTO Batch_1 VALUES (?, ?, ?, ?, ?, ?, ?)"
    assert statements.inserts[1].fields == 2
    assert statements.removes[1] == "DELETE FROM Batch_1 WHERE block_number >= ?"


def test_duplicate_sanitized_field_names_rejected() -> None:
    with pytest.raises(SchemaError, match="duplicate field name"):
        prepare_schema("E", _event(("a-b", Kinds.Bool()), ("ab", Kinds.Bool())))
    with pytest.raises(SchemaError, match="duplicate field name"):
        prepare_schema("E", _event(("Amount", Kinds.Bool()), ("amount", Kinds.Bool())))


def test_field_colliding_with_fixed_column_rejected() -> None:
    with pytest.raises(SchemaError, match="fixed column"):
        prepare_schema("E", _event(("address", Kinds.Address())))


def test_fixed_column_name_allowed_when_columns_are_generic() -> None:
    pair = Kinds.Tuple((Kinds.Bool(), Kinds.Bool()))
    prepared = prepare_schema("E", _event(("address", Kinds.Address()), ("pair", pair)))

    assert prepared.statements.columns[0][4:] == [("c0", "BLOB"), ("c1", "BIGINT"), ("c2", "BIGINT")]


def test_array_index_field_name_allowed() -> None:
    prepared = prepare_schema("F", _event(("array_index", Kinds.Uint(256))))

    assert prepared.statements.create_tables == [
        "CREATE TABLE IF NOT EXISTS F_0 (block_number BIGINT NOT NULL, log_index BIGINT NOT NULL, "
        "transaction_index BIGINT NOT NULL, address BLOB NOT NULL, array_index BLOB, "
        "PRIMARY KEY (block_number, log_index))"
    ]


def test_duplicates_rejected_even_with_generic_columns() -> None:
    pair = Kinds.Tuple((Kinds.Bool(), Kinds.Bool()))
    with pytest.raises(SchemaError, match="duplicate field name"):
        prepare_schema("E", _event(("a", Kinds.Bool()), ("a", pair)))


def test_event_name_is_sanitized() -> None:
    prepared = prepare_schema("Group", _event())
    assert prepared.name == "Group_"
    assert prepared.statements.inserts[0].sql == "INSERT INTO Group__0 VALUES (?, ?, ?, ?)"
