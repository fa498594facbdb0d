from abistore.abi.kinds import Kinds
from abistore.abi.values import Values
from abistore.abi.visitor import Visits, array_depth, visit_kind, visit_value


def test_visit_kind_flattens_tuples_and_fixed_arrays() -> None:
    kind = Kinds.Tuple((Kinds.Bool(), Kinds.FixedArray(2, Kinds.Bytes())))
    assert list(visit_kind(kind)) == [
        Visits.Leaf(Kinds.Bool()),
        Visits.Leaf(Kinds.Bytes()),
        Visits.Leaf(Kinds.Bytes()),
    ]


def test_visit_kind_walks_dynamic_array_element_once() -> None:
    kind = Kinds.Array(Kinds.Tuple((Kinds.Bool(), Kinds.String())))
    assert list(visit_kind(kind)) == [
        Visits.ArrayStart(None),
        Visits.Leaf(Kinds.Bool()),
        Visits.Leaf(Kinds.String()),
        Visits.ArrayEnd(),
    ]


def test_visit_value_walks_every_element() -> None:
    element = Kinds.Tuple((Kinds.Bool(), Kinds.String()))
    value = Values.Array(
        element,
        (
            Values.Tuple((Values.Bool(False), Values.String("hello"))),
            Values.Tuple((Values.Bool(True), Values.String("world"))),
        ),
    )
    assert list(visit_value(value)) == [
        Visits.ArrayStart(2),
        Visits.Leaf(Values.Bool(False)),
        Visits.Leaf(Values.String("hello")),
        Visits.Leaf(Values.Bool(True)),
        Visits.Leaf(Values.String("world")),
        Visits.ArrayEnd(),
    ]


def test_empty_array_value_still_opens_and_closes() -> None:
    assert list(visit_value(Values.Array(Kinds.Bool()))) == [Visits.ArrayStart(0), Visits.ArrayEnd()]


def test_array_depth() -> None:
    assert array_depth(Kinds.Bool()) == 0
    assert array_depth(Kinds.FixedArray(3, Kinds.Array(Kinds.Bool()))) == 1
    assert array_depth(Kinds.Tuple((Kinds.Array(Kinds.Bool()), Kinds.Array(Kinds.Bool())))) == 1
    assert array_depth(Kinds.Array(Kinds.Array(Kinds.Bool()))) == 2
    assert array_depth(Kinds.Array(Kinds.Tuple((Kinds.Bool(), Kinds.Array(Kinds.Bool()))))) == 2
