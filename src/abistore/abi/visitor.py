"""Depth-first traversal shared by kinds and values.

A single walker expands a node into one of three shapes (leaf, transparent
sequence, dynamic array) and yields:

- `Visits.ArrayStart(length)` when entering a dynamic array
- `Visits.Leaf(node)` for every scalar, in declaration order
- `Visits.ArrayEnd()` when leaving it

Tuples and fixed arrays are transparent: their children are walked in order
without any start/end marker. For a kind the array element is walked once
(`length=None`); for a value every element is walked (`length=len(values)`).
Because both trees go through the same walker, the sequence produced for a
value always has the shape of the sequence produced for its kind.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar, assert_never

from .kinds import Kind, Kinds
from .values import Value, Values

N = TypeVar("N")


class Visits:
    @dataclass(frozen=True, slots=True)
    class ArrayStart:
        length: int | None = None

    @dataclass(frozen=True, slots=True)
    class ArrayEnd:
        pass

    @dataclass(frozen=True)
    class Leaf(Generic[N]):
        node: N


Visit = Visits.ArrayStart | Visits.ArrayEnd | Visits.Leaf


# ---------- node shapes ----------


@dataclass(frozen=True, slots=True)
class _Scalar:
    pass


@dataclass(frozen=True)
class _Sequence(Generic[N]):
    children: Sequence[N]


@dataclass(frozen=True)
class _Dynamic(Generic[N]):
    length: int | None
    children: Sequence[N]


_Shape = _Scalar | _Sequence | _Dynamic

_SCALAR = _Scalar()


def _walk(node: N, expand: Callable[[N], _Shape]) -> Iterator[Visit]:
    match expand(node):
        case _Scalar():
            yield Visits.Leaf(node)
        case _Sequence(children=children):
            for child in children:
                yield from _walk(child, expand)
        case _Dynamic(length=length, children=children):
            yield Visits.ArrayStart(length)
            for child in children:
                yield from _walk(child, expand)
            yield Visits.ArrayEnd()


def _expand_kind(kind: Kind) -> _Shape:
    match kind:
        case (
            Kinds.Int()
            | Kinds.Uint()
            | Kinds.Address()
            | Kinds.Bool()
            | Kinds.FixedBytes()
            | Kinds.Function()
            | Kinds.Bytes()
            | Kinds.String()
        ):
            return _SCALAR
        case Kinds.Tuple(components=components):
            return _Sequence(components)
        case Kinds.FixedArray(size=size, element=element):
            return _Sequence((element,) * size)
        case Kinds.Array(element=element):
            return _Dynamic(None, (element,))
        case _:
            assert_never(kind)


def _expand_value(value: Value) -> _Shape:
    match value:
        case (
            Values.Int()
            | Values.Uint()
            | Values.Address()
            | Values.Bool()
            | Values.FixedBytes()
            | Values.Function()
            | Values.Bytes()
            | Values.String()
        ):
            return _SCALAR
        case Values.Tuple(values=values) | Values.FixedArray(values=values):
            return _Sequence(values)
        case Values.Array(values=values):
            return _Dynamic(len(values), values)
        case _:
            assert_never(value)


def visit_kind(kind: Kind) -> Iterator[Visit]:
    """Walk a kind; dynamic array elements are visited once."""
    return _walk(kind, _expand_kind)


def visit_value(value: Value) -> Iterator[Visit]:
    """Walk a value; dynamic array elements are visited once per element."""
    return _walk(value, _expand_value)


def array_depth(kind: Kind) -> int:
    """Maximum dynamic-array nesting depth of `kind` (0 when it has none)."""
    level = 0
    max_level = 0
    for visit in visit_kind(kind):
        match visit:
            case Visits.ArrayStart():
                level += 1
                max_level = max(max_level, level)
            case Visits.ArrayEnd():
                level -= 1
    return max_level
