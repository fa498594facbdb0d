"""ABI type grammar.

`Kinds` namespaces one frozen dataclass per ABI type:

- scalars: `Int`, `Uint`, `Address`, `Bool`, `FixedBytes`, `Function`,
  `Bytes`, `String`
- composites: `Tuple`, `FixedArray` (fixed size), `Array` (dynamic)

Kinds compare by value, so two independently parsed `uint256[]` are equal.
Type strings are parsed with `eth_abi.grammar`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from eth_abi.grammar import ABIType, BasicType, TupleType, parse


def _check_bits(bits: int) -> None:
    if not (8 <= bits <= 256 and bits % 8 == 0):
        raise ValueError(f"invalid integer bit width {bits}")


class Kinds:
    @dataclass(frozen=True, slots=True)
    class Int:
        bits: int = 256

        def __post_init__(self) -> None:
            _check_bits(self.bits)

    @dataclass(frozen=True, slots=True)
    class Uint:
        bits: int = 256

        def __post_init__(self) -> None:
            _check_bits(self.bits)

    @dataclass(frozen=True, slots=True)
    class Address:
        pass

    @dataclass(frozen=True, slots=True)
    class Bool:
        pass

    @dataclass(frozen=True, slots=True)
    class FixedBytes:
        size: int

        def __post_init__(self) -> None:
            if not 1 <= self.size <= 32:
                raise ValueError(f"invalid fixed bytes length {self.size}")

    @dataclass(frozen=True, slots=True)
    class Function:
        pass

    @dataclass(frozen=True, slots=True)
    class Bytes:
        pass

    @dataclass(frozen=True, slots=True)
    class String:
        pass

    @dataclass(frozen=True, slots=True)
    class Tuple:
        components: tuple[Kind, ...]

    @dataclass(frozen=True, slots=True)
    class FixedArray:
        size: int
        element: Kind

        def __post_init__(self) -> None:
            if self.size < 0:
                raise ValueError(f"invalid fixed array size {self.size}")

    @dataclass(frozen=True, slots=True)
    class Array:
        element: Kind


Kind = (
    Kinds.Int
    | Kinds.Uint
    | Kinds.Address
    | Kinds.Bool
    | Kinds.FixedBytes
    | Kinds.Function
    | Kinds.Bytes
    | Kinds.String
    | Kinds.Tuple
    | Kinds.FixedArray
    | Kinds.Array
)


def type_string(kind: Kind) -> str:
    """Canonical ABI type string, e.g. `(uint256,bool)[]`."""
    match kind:
        case Kinds.Int(bits=bits):
            return f"int{bits}"
        case Kinds.Uint(bits=bits):
            return f"uint{bits}"
        case Kinds.Address():
            return "address"
        case Kinds.Bool():
            return "bool"
        case Kinds.FixedBytes(size=size):
            return f"bytes{size}"
        case Kinds.Function():
            return "function"
        case Kinds.Bytes():
            return "bytes"
        case Kinds.String():
            return "string"
        case Kinds.Tuple(components=components):
            return "(" + ",".join(type_string(c) for c in components) + ")"
        case Kinds.FixedArray(size=size, element=element):
            return f"{type_string(element)}[{size}]"
        case Kinds.Array(element=element):
            return f"{type_string(element)}[]"
        case _:
            assert_never(kind)


def _basic_kind(base: str, sub: int | tuple[int, int] | None) -> Kind:
    match base:
        case "int":
            return Kinds.Int(sub if isinstance(sub, int) else 256)
        case "uint":
            return Kinds.Uint(sub if isinstance(sub, int) else 256)
        case "address":
            return Kinds.Address()
        case "bool":
            return Kinds.Bool()
        case "bytes" if isinstance(sub, int):
            return Kinds.FixedBytes(sub)
        case "bytes":
            return Kinds.Bytes()
        case "function":
            return Kinds.Function()
        case "string":
            return Kinds.String()
    raise ValueError(f"unsupported ABI type {base}{sub or ''}")


def _from_abi_type(node: ABIType) -> Kind:
    if isinstance(node, TupleType):
        kind: Kind = Kinds.Tuple(tuple(_from_abi_type(c) for c in node.components))
    elif isinstance(node, BasicType):
        kind = _basic_kind(node.base, node.sub)
    else:
        raise ValueError(f"unsupported ABI type node {node!r}")

    # arrlist lists dimensions innermost first: `uint8[2][]` is ((2,), ())
    for dim in node.arrlist or ():
        kind = Kinds.FixedArray(dim[0], kind) if dim else Kinds.Array(kind)
    return kind


def parse_kind(type_str: str) -> Kind:
    """Parse an ABI type string such as `uint256`, `(address,bytes)[3]`."""
    return _from_abi_type(parse(type_str))
