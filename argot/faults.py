"""
Argot faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the engine
  can surface. Codes are grouped by domain to keep copy consistent and make
  logs/searches predictable.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (always raised to the caller).
- report(): print a fault on the stderr console (for host programs that catch it).
- getdoc(): optional description lookup for a code from the host application.

Domains
- schema (101xx): problems in the declared data shape, detected before any token is read.
- tokens (111xx): problems in the argument vector, detected while scanning.

Integration
- The schema builder, validator, coercion and scanner call trigger(fault, **ctx).
- Faults are never caught inside the engine: parsing halts at the point of
  failure and storage written so far is left as-is.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - schema (1010x)
      • SCHEMA_SHAPE, INVALID_ALIAS, ALIAS_COLLISION
    - tokens (1111x)
      • UNRECOGNIZED_OPTION, MISSING_VALUE, VALUE_FORMAT

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- schema errors (10xxx) ---
    SCHEMA_SHAPE                = 10101
    INVALID_ALIAS               = 10102
    ALIAS_COLLISION             = 10103

    # --- token errors (11xxx) ---
    UNRECOGNIZED_OPTION         = 11111
    MISSING_VALUE               = 11112
    VALUE_FORMAT                = 11113

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base of every argot fault.

    attributes
    - message: one lowercased sentence describing what went wrong.
    - options: read-only mapping of rendering/context options (title, code, hint,
      input, index, tag, route, colorful, fancy, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        code = self.options.get("code")
        prog = text(getattr(main, "__prog__", "argot"), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code else "?", styler("code")),
            " | ",
            text(str(self.options.get("title", "error")).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class SchemaShapeError(CommandException): ...
class InvalidAliasError(CommandException): ...
class AliasCollisionError(CommandException): ...
class UnrecognizedOptionError(CommandException): ...
class MissingValueError(CommandException): ...
class ValueFormatError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - CommandException.__trigger__ raises, so this call never returns for them.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def report(fault, /, **options):
    """
    print a fault on the stderr console, merging rendering options (colorful, fancy).
    """
    if not isinstance(fault, CommandException):
        raise TypeError("report() argument must be a command exception")
    console.print(fault.__replace__(**options))


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "SchemaShapeError",
    "InvalidAliasError",
    "AliasCollisionError",
    "UnrecognizedOptionError",
    "MissingValueError",
    "ValueFormatError",
    "FaultCode",
    "trigger",
    "report",
    "getdoc",
)
