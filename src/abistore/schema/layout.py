"""Route traversal leaves into tables.

`layout` is the one place that decides which table a leaf belongs to. The
schema compiler calls it with kinds and a column mapper, the encoder with
values and a cell encoder; both therefore assign leaves to tables in the
same order.

Routing rules:
- leaves outside dynamic arrays go to the root segment (table 0)
- every `ArrayStart` opens a new segment that receives the leaves until the
  matching `ArrayEnd`
- root leaves of all fields are concatenated; array segments are appended
  in the order they are encountered
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from abistore.abi.visitor import Visit, Visits

N = TypeVar("N")
C = TypeVar("C")


@dataclass
class Segment(Generic[C]):
    """Cells routed to one table.

    `length` is None for the root segment and for array segments built from
    kinds; for values it is the element count of the array.
    """

    is_array: bool
    length: int | None = None
    cells: list[C] = field(default_factory=list)


def layout(
    nodes: Iterable[N],
    visit: Callable[[N], Iterator[Visit]],
    leaf: Callable[[N], C],
) -> list[Segment[C]]:
    root: Segment[C] = Segment(is_array=False)
    segments = [root]
    for node in nodes:
        current = root
        for visited in visit(node):
            match visited:
                case Visits.ArrayStart(length=length):
                    current = Segment(is_array=True, length=length)
                    segments.append(current)
                case Visits.ArrayEnd():
                    current = root
                case Visits.Leaf(node=leaf_node):
                    current.cells.append(leaf(leaf_node))
    return segments
