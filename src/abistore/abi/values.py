"""Typed ABI values.

`Values` mirrors `Kinds`: one frozen dataclass per ABI type, each exposing
`.kind`. Constructors validate ranges and lengths so a value always encodes
to the width its kind declares.

`to_value(kind, raw)` builds typed values from plain Python objects as
returned by `eth_abi.decode` (ints, bools, bytes, checksum address strings,
tuples and lists).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, assert_never

from eth_utils import to_canonical_address

from .kinds import Kind, Kinds


def _address_bytes(value: bytes | str) -> bytes:
    if isinstance(value, str):
        return to_canonical_address(value)
    return bytes(value)


class Values:
    @dataclass(frozen=True, slots=True)
    class Int:
        bits: int
        value: int

        def __post_init__(self) -> None:
            bound = 1 << (self.bits - 1)
            if not -bound <= self.value < bound:
                raise ValueError(f"{self.value} does not fit int{self.bits}")

        @property
        def kind(self) -> Kind:
            return Kinds.Int(self.bits)

    @dataclass(frozen=True, slots=True)
    class Uint:
        bits: int
        value: int

        def __post_init__(self) -> None:
            if not 0 <= self.value < (1 << self.bits):
                raise ValueError(f"{self.value} does not fit uint{self.bits}")

        @property
        def kind(self) -> Kind:
            return Kinds.Uint(self.bits)

    @dataclass(frozen=True, slots=True)
    class Address:
        value: bytes

        def __post_init__(self) -> None:
            if len(self.value) != 20:
                raise ValueError(f"address must be 20 bytes, got {len(self.value)}")

        @classmethod
        def from_hex(cls, address: str) -> Values.Address:
            return cls(to_canonical_address(address))

        @property
        def kind(self) -> Kind:
            return Kinds.Address()

    @dataclass(frozen=True, slots=True)
    class Bool:
        value: bool

        @property
        def kind(self) -> Kind:
            return Kinds.Bool()

    @dataclass(frozen=True, slots=True)
    class FixedBytes:
        value: bytes

        def __post_init__(self) -> None:
            if not 1 <= len(self.value) <= 32:
                raise ValueError(f"fixed bytes must be 1..32 bytes, got {len(self.value)}")

        @property
        def kind(self) -> Kind:
            return Kinds.FixedBytes(len(self.value))

    @dataclass(frozen=True, slots=True)
    class Function:
        address: bytes
        selector: bytes

        def __post_init__(self) -> None:
            if len(self.address) != 20 or len(self.selector) != 4:
                raise ValueError("function reference needs a 20-byte address and a 4-byte selector")

        @property
        def kind(self) -> Kind:
            return Kinds.Function()

    @dataclass(frozen=True, slots=True)
    class Bytes:
        value: bytes

        @property
        def kind(self) -> Kind:
            return Kinds.Bytes()

    @dataclass(frozen=True, slots=True)
    class String:
        value: str

        @property
        def kind(self) -> Kind:
            return Kinds.String()

    @dataclass(frozen=True, slots=True)
    class Tuple:
        values: tuple[Value, ...]

        @property
        def kind(self) -> Kind:
            return Kinds.Tuple(tuple(v.kind for v in self.values))

    @dataclass(frozen=True, slots=True)
    class FixedArray:
        element: Kind
        values: tuple[Value, ...]

        def __post_init__(self) -> None:
            _check_elements(self.element, self.values)

        @property
        def kind(self) -> Kind:
            return Kinds.FixedArray(len(self.values), self.element)

    @dataclass(frozen=True, slots=True)
    class Array:
        element: Kind
        values: tuple[Value, ...] = ()

        def __post_init__(self) -> None:
            _check_elements(self.element, self.values)

        @property
        def kind(self) -> Kind:
            return Kinds.Array(self.element)


Value = (
    Values.Int
    | Values.Uint
    | Values.Address
    | Values.Bool
    | Values.FixedBytes
    | Values.Function
    | Values.Bytes
    | Values.String
    | Values.Tuple
    | Values.FixedArray
    | Values.Array
)


def _check_elements(element: Kind, values: Sequence[Value]) -> None:
    for i, value in enumerate(values):
        if value.kind != element:
            raise ValueError(f"array element {i} is {value.kind}, expected {element}")


def to_value(kind: Kind, raw: Any) -> Value:
    """Convert a plain decoded Python object into a typed value of `kind`."""
    match kind:
        case Kinds.Int(bits=bits):
            return Values.Int(bits, int(raw))
        case Kinds.Uint(bits=bits):
            return Values.Uint(bits, int(raw))
        case Kinds.Address():
            return Values.Address(_address_bytes(raw))
        case Kinds.Bool():
            return Values.Bool(bool(raw))
        case Kinds.FixedBytes(size=size):
            data = bytes(raw)
            if len(data) != size:
                raise ValueError(f"expected {size} bytes, got {len(data)}")
            return Values.FixedBytes(data)
        case Kinds.Function():
            # eth_abi decodes `function` as bytes24
            data = bytes(raw)
            return Values.Function(data[:20], data[20:])
        case Kinds.Bytes():
            return Values.Bytes(bytes(raw))
        case Kinds.String():
            return Values.String(str(raw))
        case Kinds.Tuple(components=components):
            if len(raw) != len(components):
                raise ValueError(f"expected {len(components)} tuple components, got {len(raw)}")
            return Values.Tuple(tuple(to_value(c, r) for c, r in zip(components, raw)))
        case Kinds.FixedArray(size=size, element=element):
            if len(raw) != size:
                raise ValueError(f"expected {size} array elements, got {len(raw)}")
            return Values.FixedArray(element, tuple(to_value(element, r) for r in raw))
        case Kinds.Array(element=element):
            return Values.Array(element, tuple(to_value(element, r) for r in raw))
        case _:
            assert_never(kind)
