"""
Argot coercion: turn one raw value token into a field's kind and store it.

Rules
- strings are stored verbatim.
- integers are plain decimal with an optional sign (unsigned kinds take no sign)
  and must fit the field's exact bit width.
- floats are ASCII decimal or exponent literals, or inf/infinity/nan, with an
  optional sign (no blanks, no digit-group underscores); 32-bit fields are rounded
  through IEEE single precision, and a finite literal that overflows the
  width is rejected.
- lists are replaced on the first assignment of a scan (the caller's default is
  discarded) and appended to afterwards; `touched` records which list fields
  were already replaced during the current scan.
"""
import math
import re
import struct

from .faults import *
from .kinds import Kind

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")
_FLOAT = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|(?i:inf|infinity|nan))")


class _Rejected(ValueError):
    """a token that does not fit the requested kind; carries the reason."""


def _integer(kind, text):
    if not (_UNSIGNED if kind.kind is Kind.UNSIGNED else _SIGNED).fullmatch(text):
        raise _Rejected("not a number")
    value = int(text, 10)
    if kind.kind is Kind.UNSIGNED:
        low, high = 0, (1 << kind.width) - 1
    else:
        low, high = -(1 << (kind.width - 1)), (1 << (kind.width - 1)) - 1
    if not low <= value <= high:
        raise _Rejected("out of range [%d, %d]" % (low, high))
    return value


def _float(kind, text):
    if not _FLOAT.fullmatch(text):
        raise _Rejected("not a number")
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise _Rejected("out of range")
    if kind.width == 32:
        try:
            value = struct.unpack("f", struct.pack("f", value))[0]
        except OverflowError:
            raise _Rejected("out of range") from None
        if math.isinf(value) and "inf" not in text.lower():
            raise _Rejected("out of range")
    return value


def coerce(kind, text, /):
    """
    convert `text` into a value of the scalar `kind`.

    raises ValueError with a short reason when the token does not fit; callers
    turn it into a ValueFormatError (see assign()).
    """
    match kind.kind:
        case Kind.STRING:
            return text
        case Kind.SIGNED | Kind.UNSIGNED:
            return _integer(kind, text)
        case Kind.FLOAT:
            return _float(kind, text)
        case Kind.LIST:
            return coerce(kind.item, text)
    raise TypeError("coerce() cannot convert into %s" % kind.describe())


def assign(descriptor, text, touched, /, *, input=None, index=None):
    """
    coerce `text` for `descriptor` and write it through its binding.

    parameters
    - descriptor: the OptionDescriptor being assigned (never boolean here).
    - text: the raw value token.
    - touched: set of list descriptors already replaced during this scan (updated in place).
    - input/index: the option token and its 1-based position, for messages.
    """
    try:
        value = coerce(descriptor.kind, text)
    except ValueError as reason:
        trigger(ValueFormatError(
            "invalid value %r for option %r: expected %s (%s)" % (
                text, input or descriptor.aliases[0], descriptor.kind.describe(), reason
            ),
            title="invalid value",
            code=FaultCode.VALUE_FORMAT,
            input=input,
            index=index,
            hint="pass a %s" % (descriptor.kind.item or descriptor.kind).describe(),
            docs=getdoc(FaultCode.VALUE_FORMAT),
        ))

    if descriptor.kind.kind is not Kind.LIST:
        descriptor.binding.set(value)
        return

    if descriptor not in touched:
        touched.add(descriptor)
        descriptor.binding.set([])
    descriptor.binding.get().append(value)


__all__ = (
    "coerce",
    "assign",
)
