"""
Argot value kinds.

Scope
- Kind: the closed set of value families an option can hold.
- ValueKind: a kind plus its bit width (numbers) or item kind (lists).
- Width aliases: typing.Annotated spellings (Int8 … Float64) used in dataclass
  annotations to ask for an exact storage width.
- resolve(): map a field annotation to a ValueKind (None when unsupported).

Mapping
- bool               → boolean
- str                → string
- int                → signed 64-bit
- float              → 64-bit float
- Int8/16/32/64      → signed with that width
- UInt, UInt8/16/32/64 → unsigned with that width (UInt is 64-bit)
- Float32/Float64    → float with that precision
- list[T]            → list-of-scalar, T being any non-boolean scalar above
"""
import typing
from enum import IntEnum
from typing import Annotated, NamedTuple


class Kind(IntEnum):
    BOOLEAN  = 1
    STRING   = 2
    SIGNED   = 3
    UNSIGNED = 4
    FLOAT    = 5
    LIST     = 6


class ValueKind(NamedTuple):
    """
    the value kind of one option.

    fields
    - kind: Kind
    - width: bit width for SIGNED/UNSIGNED/FLOAT, 0 otherwise.
    - item: the ValueKind of list items for LIST, None otherwise.
    """
    kind: Kind
    width: int = 0
    item: "ValueKind | None" = None

    @property
    def boolean(self):
        return self.kind is Kind.BOOLEAN

    def describe(self):
        """
        short lowercase label used in messages ("unsigned 8-bit integer", "list of strings", ...).
        """
        match self.kind:
            case Kind.BOOLEAN:
                return "boolean"
            case Kind.STRING:
                return "string"
            case Kind.SIGNED:
                return "signed %d-bit integer" % self.width
            case Kind.UNSIGNED:
                return "unsigned %d-bit integer" % self.width
            case Kind.FLOAT:
                return "%d-bit float" % self.width
            case Kind.LIST:
                return "list of %s" % self.item.describe()


BOOLEAN = ValueKind(Kind.BOOLEAN)
STRING = ValueKind(Kind.STRING)

Int8 = Annotated[int, ValueKind(Kind.SIGNED, 8)]
Int16 = Annotated[int, ValueKind(Kind.SIGNED, 16)]
Int32 = Annotated[int, ValueKind(Kind.SIGNED, 32)]
Int64 = Annotated[int, ValueKind(Kind.SIGNED, 64)]
UInt = Annotated[int, ValueKind(Kind.UNSIGNED, 64)]
UInt8 = Annotated[int, ValueKind(Kind.UNSIGNED, 8)]
UInt16 = Annotated[int, ValueKind(Kind.UNSIGNED, 16)]
UInt32 = Annotated[int, ValueKind(Kind.UNSIGNED, 32)]
UInt64 = Annotated[int, ValueKind(Kind.UNSIGNED, 64)]
Float32 = Annotated[float, ValueKind(Kind.FLOAT, 32)]
Float64 = Annotated[float, ValueKind(Kind.FLOAT, 64)]

_plain = {
    bool: BOOLEAN,
    str: STRING,
    int: ValueKind(Kind.SIGNED, 64),
    float: ValueKind(Kind.FLOAT, 64),
}


def _scalar(annotation):
    if typing.get_origin(annotation) is Annotated:
        origin, *metadata = typing.get_args(annotation)
        for marker in metadata:
            if not isinstance(marker, ValueKind):
                continue
            if marker.kind in (Kind.SIGNED, Kind.UNSIGNED) and origin is int:
                return marker
            if marker.kind is Kind.FLOAT and origin is float:
                return marker
            return None
        return _scalar(origin)
    try:
        return _plain.get(annotation)
    except TypeError:  # unhashable annotations
        return None


def resolve(annotation, /):
    """
    map a (possibly Annotated) field annotation to its ValueKind.

    returns None when the annotation has no supported kind, e.g. a bare `list`,
    `list[bool]`, `dict[...]`, `Any` or an arbitrary class.
    """
    if typing.get_origin(annotation) is list:
        arguments = typing.get_args(annotation)
        if len(arguments) != 1:
            return None
        item = _scalar(arguments[0])
        if item is None or item.boolean:
            return None
        return ValueKind(Kind.LIST, item=item)
    return _scalar(annotation)


__all__ = (
    "Kind",
    "ValueKind",
    "BOOLEAN",
    "STRING",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Float32",
    "Float64",
    "resolve",
)
