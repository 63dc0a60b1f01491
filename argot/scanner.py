"""
Argot scanner: the single-pass token dispatcher.

What this module provides
- Scanner: walks an argument vector once, assigning option values through the
  schema's bindings and descending into sub-commands as their names show up.
- Scan: the result of one pass (command path, leftover positionals, unscanned remainder).
- parse(): one-shot entry point (build + validate + scan).

Token classes (checked in this order)
- ""        → disables command recognition for the rest of the pass; kept as a positional.
- "--"      → everything after it is kept verbatim as positionals; the pass ends.
- "-" or a word not starting with "-" → a sub-command name while still seeking, otherwise a positional.
- "--name"  → long option; booleans need no value ("--no-..." aliases store False),
              everything else consumes the next token.
- "-abc"    → run of short options; booleans are set one by one, the first non-boolean
              takes the rest of the run (or the next token) as its value.

Options resolve against the current command and all of its ancestors, so global
options stay usable after a sub-command name.
"""
import logging
import shlex
import sys
from collections.abc import Iterable
from typing import NamedTuple

from .coercion import assign
from .faults import *
from .schema import CommandNode, build
from .utils import Unset, ordinal
from .validation import validate

logger = logging.getLogger(__name__)


class Scan(NamedTuple):
    command: str
    leftover: list
    remainder: list


class Scanner:
    """
    token dispatcher bound to one (validated) schema.

    the scanner keeps no state between passes; each scan() starts at the root with
    an empty command stack, seeking sub-commands, and a fresh set of touched lists.
    """

    def __init__(self, root, /):
        if not isinstance(root, CommandNode):
            raise TypeError("Scanner() argument must be a command node")
        self.root = root

    def _resolve(self, node, input, index):
        if (descriptor := node.lookup(input)) is None:
            trigger(UnrecognizedOptionError(
                "unrecognized option %r for %s command" % (input, node.route),
                title="unrecognized option",
                code=FaultCode.UNRECOGNIZED_OPTION,
                input=input,
                index=index,
                route=node.route,
                hint="check the %s position; options of sub-commands are only known after the sub-command name" % ordinal(index),
                docs=getdoc(FaultCode.UNRECOGNIZED_OPTION),
            ))
        return descriptor

    @staticmethod
    def _missing(input, index):
        trigger(MissingValueError(
            "missing required value for %r option" % input,
            title="missing value",
            code=FaultCode.MISSING_VALUE,
            input=input,
            index=index,
            hint="add a value after the option from %s position" % ordinal(index),
            docs=getdoc(FaultCode.MISSING_VALUE),
        ))

    def scan(self, tokens, /, *, halt=False):
        """
        run one pass over `tokens`.

        parameters
        - tokens: sequence of strings.
        - halt: stop right before the first sub-command name of the root instead of
          descending into it; that name and everything after it become `remainder`.

        returns Scan(command, leftover, remainder); raises the first fault met.
        """
        tokens = list(tokens)
        node = self.root
        stack = []
        seeking = True
        leftover = []
        touched = set()

        index = 0
        while index < len(tokens):
            token = tokens[index]
            index += 1

            if not token:
                seeking = False
                leftover.append(token)
                continue

            if token == "--":
                leftover.extend(tokens[index:])
                break

            if not token.startswith("-") or token == "-":
                if seeking and (child := node.children.get(token)) is not None:
                    if halt:
                        return Scan("", leftover, tokens[index - 1:])
                    stack.append(child.name)
                    node = child
                    logger.debug("descending into %r from %s position", node.route, ordinal(index))
                    if node.terminal:
                        logger.debug("full stop at %r, %d token(s) left as-is", node.route, len(tokens) - index)
                        leftover.extend(tokens[index:])
                        break
                    continue
                seeking = False
                leftover.append(token)
                continue

            if token.startswith("--"):
                descriptor = self._resolve(node, token, index)
                if descriptor.kind.boolean:
                    descriptor.binding.set(not token[2:].startswith("no-"))
                    continue
                if index >= len(tokens):
                    self._missing(token, index)
                assign(descriptor, tokens[index], touched, input=token, index=index)
                index += 1
                continue

            run = token[1:]
            while run:
                input, run = "-" + run[0], run[1:]
                descriptor = self._resolve(node, input, index)
                if descriptor.kind.boolean:
                    descriptor.binding.set(True)
                    continue
                if run:
                    assign(descriptor, run, touched, input=input, index=index)
                    break
                if index >= len(tokens):
                    self._missing(input, index)
                assign(descriptor, tokens[index], touched, input=input, index=index)
                index += 1
                break

        return Scan(" ".join(stack), leftover, [])


def tokenize(tokens=Unset, /):
    """
    normalize an argument vector.

    - Unset: sys.argv[1:].
    - str: split shell-style (shlex.split).
    - Iterable[str]: copied into a list; empty strings are kept (they are meaningful).
    """
    if tokens is Unset:
        return sys.argv[1:]
    if isinstance(tokens, str):
        return shlex.split(tokens)
    if isinstance(tokens, Iterable):
        tokens = list(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("tokens must be a string or an iterable of strings")
        return tokens
    raise TypeError("tokens must be a string or an iterable of strings")


def prepare(object, /):
    """
    return a validated schema root for a dataclass instance or an existing CommandNode.
    """
    root = object if isinstance(object, CommandNode) else build(object)
    validate(root)
    return root


def parse(object, tokens=Unset, /):
    """
    parse an argument vector into `object` in one shot.

    parameters
    - object: a dataclass instance (its schema is built and validated here) or a
      CommandNode built earlier with argot.build().
    - tokens: see tokenize(); defaults to sys.argv[1:].

    returns (command, leftover):
    - command: canonical sub-command path joined by spaces ("" when none matched).
    - leftover: positionals and everything after "--", in order.
    """
    scan = Scanner(prepare(object)).scan(tokenize(tokens))
    return scan.command, scan.leftover


__all__ = (
    "Scan",
    "Scanner",
    "tokenize",
    "prepare",
    "parse",
)
