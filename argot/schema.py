r"""
Argot schema: option descriptors, command nodes, and their construction from dataclasses.

Overview
- Binding: a writable handle onto one attribute of the caller's storage.
- OptionDescriptor: one tagged field (aliases, value kind, binding, captured default).
- CommandNode: one level of the command hierarchy (root or a named sub-command),
  owning its descriptors and child nodes; immutable once built.
- build(instance): reflect over a dataclass instance and produce the root CommandNode.
- option(...) / command(...): dataclasses.field() shorthands carrying the "cli" tag.

Tag grammar
- A tag is a comma-separated list of aliases; blanks around commas are ignored.
- Option aliases:
  • short: "-" followed by one character, alphanumeric or one of "?!@#" (e.g. -h, -?).
  • long: "--" followed by a letter and at least one more letter, digit, "-" or "_"
    (e.g. --help, --no-verify).
- Command aliases (dataclass-typed fields): bare words; the first is canonical and the
  rest are synonyms. A trailing "!" marks a full-stop command (see CommandNode.terminal).

Example
    @dataclass
    class Gen:
        length: int = option("-l, --length", 48)

    @dataclass
    class Options:
        help: bool = option("-h, -?, --help", False)
        url: str = option("-U, --url", "")
        gen: Gen = command("gen, generate", Gen)

    root = build(Options())

Errors (raised through argot.faults.trigger)
- SchemaShapeError: the top-level value is not a dataclass instance, a tagged field
  has no supported value kind, or a structure cannot be written to (frozen).
- InvalidAliasError: an alias breaks the grammar above.
- AliasCollisionError: two child commands of one node share a command alias.
"""
import copy
import dataclasses
import re
import typing

from .faults import *
from .kinds import resolve
from .utils import Unset, mirror

_SHORT = re.compile(r"-[A-Za-z0-9?!@#]")
_LONG = re.compile(r"--[A-Za-z][A-Za-z0-9_-]+")
_COMMAND = re.compile(r"[^\s\-!][^\s!]*!?")


class Binding:
    """
    writable handle onto `owner.name`.
    """
    __slots__ = ("owner", "name")

    def __init__(self, owner, name, /):
        self.owner = owner
        self.name = name

    def get(self):
        return getattr(self.owner, self.name)

    def set(self, value, /):
        setattr(self.owner, self.name, value)

    def __repr__(self):
        return "Binding(%s.%s)" % (type(self.owner).__name__, self.name)


class OptionDescriptor:
    """
    parsed representation of one tagged field.

    attributes
    - tag: the raw tag, kept for messages.
    - aliases: every distinct alias in declaration order (duplicates in a tag are dropped).
    - shorts / longs: frozensets of the short ("-x") and long ("--name") aliases.
    - kind: the ValueKind values are coerced into.
    - binding: where values are written.
    - default: a copy of the stored value taken when the descriptor was built.
    """
    __slots__ = ("tag", "aliases", "shorts", "longs", "kind", "binding", "default")

    def __init__(self, tag, aliases, kind, binding, /):
        self.tag = tag
        self.aliases = tuple(dict.fromkeys(aliases))
        self.shorts = frozenset(alias for alias in self.aliases if not alias.startswith("--"))
        self.longs = frozenset(alias for alias in self.aliases if alias.startswith("--"))
        self.kind = kind
        self.binding = binding
        self.default = copy.copy(binding.get())

    @property
    def name(self):
        return self.binding.name

    def __repr__(self):
        return "OptionDescriptor(%r, %s)" % (", ".join(self.aliases), self.kind.describe())


class CommandNode:
    """
    one level of the command hierarchy.

    attributes
    - name: canonical name ("" at root).
    - aliases: every name this command answers to, canonical first.
    - parent: the enclosing node (None at root), non-owning.
    - terminal: when True, everything after this command is left uninterpreted.
    - options: descriptors declared directly at this level (read-only view).
    - switches: own option alias -> descriptor (read-only view).
    - children: every alias of every child command -> child node (read-only view).
    """

    options = mirror("options")
    switches = mirror("switches")
    children = mirror("children")

    def __init__(self, aliases=(), /, parent=None, *, terminal=False):
        self.aliases = tuple(aliases)
        self.name = self.aliases[0] if self.aliases else ""
        self.parent = parent
        self.terminal = terminal
        self._options = []
        self._switches = {}
        self._children = {}

    @property
    def path(self):
        """
        canonical names from the root (excluded) down to this node.
        """
        path = []
        node = self
        while node.parent is not None:
            path.append(node.name)
            node = node.parent
        return tuple(reversed(path))

    @property
    def route(self):
        """
        "global" at the root, the space-joined path elsewhere (e.g. "thing create").
        """
        return " ".join(self.path) or "global"

    def lookup(self, alias, /):
        """
        resolve an option alias against this node and all of its ancestors.

        returns the OptionDescriptor, or None when the alias is not visible here.
        """
        node = self
        while node is not None:
            try:
                return node._switches[alias]
            except KeyError:
                node = node.parent
        return None

    def walk(self):
        """
        yield this node and every descendant, depth-first, each node once.
        """
        pending = [self]
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(list(dict.fromkeys(node._children.values()))))

    def descriptors(self):
        """
        yield every descriptor of this subtree.
        """
        for node in self.walk():
            yield from node._options

    def _declare(self, descriptor, /):
        self._options.append(descriptor)
        for alias in descriptor.aliases:
            self._switches.setdefault(alias, descriptor)

    def _adopt(self, child, /):
        for alias in child.aliases:
            if self._children.setdefault(alias, child) is not child:
                trigger(AliasCollisionError(
                    "command %r reused in %s command" % (alias, self.route),
                    title="alias collision",
                    code=FaultCode.ALIAS_COLLISION,
                    input=alias,
                    route=self.route,
                    hint="give each sub-command of %s a distinct name" % self.route,
                    docs=getdoc(FaultCode.ALIAS_COLLISION),
                ))

    def __repr__(self):
        return "CommandNode(%r)" % self.route


def _invalid(token, tag):
    trigger(InvalidAliasError(
        "invalid alias %r in tag %r" % (token, tag),
        title="invalid alias",
        code=FaultCode.INVALID_ALIAS,
        input=token,
        tag=tag,
        hint="use -x for short aliases and --name (two or more characters) for long ones",
        docs=getdoc(FaultCode.INVALID_ALIAS),
    ))


def _split(tag):
    if not isinstance(tag, str):
        raise TypeError("cli tag must be a string")
    tokens = [token for token in map(str.strip, tag.split(",")) if token]
    if not tokens:
        _invalid(tag, tag)
    return tokens


def _option_aliases(tag):
    tokens = _split(tag)
    for token in tokens:
        if not (_SHORT.fullmatch(token) or _LONG.fullmatch(token)):
            _invalid(token, tag)
    return tokens


def _command_aliases(tag):
    tokens = _split(tag)
    for token in tokens:
        if not _COMMAND.fullmatch(token):
            _invalid(token, tag)
    terminal = any(token.endswith("!") for token in tokens)
    return tuple(dict.fromkeys(token.rstrip("!") for token in tokens)), terminal


def _unsupported(owner, field, annotation):
    trigger(SchemaShapeError(
        "cannot operate on this type: field %r of %s is %r" % (
            field.name, type(owner).__name__, annotation
        ),
        title="unsupported type",
        code=FaultCode.SCHEMA_SHAPE,
        input=field.name,
        hint="use bool, str, int, float, a width alias such as UInt8, a list of those, or a dataclass",
        docs=getdoc(FaultCode.SCHEMA_SHAPE),
    ))


def _populate(node, instance):
    if type(instance).__dataclass_params__.frozen:
        trigger(SchemaShapeError(
            "cannot operate on frozen structure %s" % type(instance).__name__,
            title="frozen structure",
            code=FaultCode.SCHEMA_SHAPE,
            hint="drop frozen=True so parsed values can be stored",
            docs=getdoc(FaultCode.SCHEMA_SHAPE),
        ))

    hints = typing.get_type_hints(type(instance), include_extras=True)
    for field in dataclasses.fields(instance):
        if (tag := field.metadata.get("cli")) is None:
            continue
        annotation = hints.get(field.name, field.type)
        value = getattr(instance, field.name)

        if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
            if not dataclasses.is_dataclass(value) or isinstance(value, type):
                _unsupported(instance, field, annotation)
            aliases, terminal = _command_aliases(tag)
            child = CommandNode(aliases, node, terminal=terminal)
            node._adopt(child)
            _populate(child, value)
            continue

        if (kind := resolve(annotation)) is None:
            _unsupported(instance, field, annotation)
        node._declare(OptionDescriptor(tag, _option_aliases(tag), kind, Binding(instance, field.name)))


def build(instance, /):
    """
    build the CommandNode tree describing a dataclass instance.

    behavior
    - only fields carrying a "cli" metadata tag take part; others are ignored.
    - option fields become OptionDescriptors bound to `instance` (defaults are
      captured now, from the current field values).
    - dataclass-typed fields become child commands bound to the nested instance.

    the returned tree is not validated; see argot.validation.validate().
    """
    if not dataclasses.is_dataclass(instance) or isinstance(instance, type):
        trigger(SchemaShapeError(
            "argot only operates on structures, not %s" % type(instance).__name__,
            title="not a structure",
            code=FaultCode.SCHEMA_SHAPE,
            hint="pass a dataclass instance",
            docs=getdoc(FaultCode.SCHEMA_SHAPE),
        ))
    root = CommandNode()
    _populate(root, instance)
    return root


def option(tag, /, default=Unset, *, factory=Unset, **kwargs):
    """
    dataclasses.field() carrying an option tag.

    - default: plain default value.
    - factory: default factory (use it for lists).
    - kwargs: forwarded to dataclasses.field (repr, compare, ...).
    """
    if default is not Unset and factory is not Unset:
        raise ValueError("option() accepts either a default or a factory, not both")
    return dataclasses.field(
        default=dataclasses.MISSING if default is Unset else default,
        default_factory=dataclasses.MISSING if factory is Unset else factory,
        metadata={"cli": tag},
        **kwargs,
    )


def command(tag, factory, /, **kwargs):
    """
    dataclasses.field() declaring a sub-command whose options live in `factory()`.
    """
    if not callable(factory):
        raise TypeError("command() factory must be callable")
    return dataclasses.field(default_factory=factory, metadata={"cli": tag}, **kwargs)


__all__ = (
    "Binding",
    "OptionDescriptor",
    "CommandNode",
    "build",
    "option",
    "command",
)
