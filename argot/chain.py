"""
Argot chained parser: several sub-command invocations in one argument vector.

    tool -k -t x sub --target my-target -- sub -k
         \\_____/ \\____________________/    \\_____/
         preamble      segment #1          segment #2

Lifecycle
- construction: the preamble (everything before the first root sub-command name)
  is scanned eagerly and applied to storage; a snapshot of every binding is taken
  right after; the rest is split on each "--" into pending segments.
- next(): restores every binding from the snapshot, scans the next segment from
  the root (nested sub-commands included), and exposes its command path and
  leftover. Options given in one segment therefore never leak into the next.

Notes
- positionals met in the preamble are kept in `preamble` (they are not part of
  any segment).
- empty segments (e.g. a trailing "--") are dropped.
- a Parser writes into the caller's storage; do not share one storage object
  between parsers used concurrently.
"""
import copy
import logging

from .scanner import Scanner, prepare, tokenize
from .utils import Unset

logger = logging.getLogger(__name__)


def _segments(tokens):
    segment = []
    for token in tokens:
        if token == "--":
            if segment:
                yield segment
            segment = []
            continue
        segment.append(token)
    if segment:
        yield segment


class Parser:
    """
    iterate over chained sub-command invocations.

    attributes
    - root: the validated schema root.
    - preamble: leftover positionals of the preamble scan.
    - command: command path produced by the latest successful next() ("" before).
    - leftover: leftover positionals of the latest segment.

    usage
        parser = Parser(options, ["-k", "sub", "--", "list"])
        while parser.next():
            run(parser.command, parser.leftover)

        # or, equivalently
        for command, leftover in Parser(options, argv):
            run(command, leftover)
    """

    def __init__(self, object, tokens=Unset, /):
        self.root = prepare(object)
        self._scanner = Scanner(self.root)

        scan = self._scanner.scan(tokenize(tokens), halt=True)
        self.preamble = scan.leftover
        self.command = ""
        self.leftover = []

        self._descriptors = tuple(self.root.descriptors())
        self._snapshot = tuple(copy.copy(descriptor.binding.get()) for descriptor in self._descriptors)
        self._pending = list(_segments(scan.remainder))
        self._cursor = 0
        logger.debug("chained parser ready with %d segment(s)", len(self._pending))

    def _restore(self):
        logger.debug("restoring %d binding(s) from the preamble snapshot", len(self._descriptors))
        for descriptor, value in zip(self._descriptors, self._snapshot):
            descriptor.binding.set(copy.copy(value))

    @property
    def pending(self):
        """
        number of segments not yet consumed by next().
        """
        return len(self._pending) - self._cursor

    def next(self):
        """
        advance to the next segment.

        returns False when every segment was consumed; otherwise resets storage to
        the post-preamble snapshot, scans the segment, updates `command` and
        `leftover`, and returns True. Faults raised by the scan propagate as-is; the
        faulty segment is consumed all the same, so a later call moves on to the
        next one (`command` and `leftover` keep their previous values).
        """
        if self._cursor >= len(self._pending):
            return False

        segment = self._pending[self._cursor]
        self._cursor += 1
        self._restore()
        scan = self._scanner.scan(segment)
        self.command = scan.command
        self.leftover = scan.leftover
        logger.debug("segment %d resolved to %r", self._cursor, self.command)
        return True

    def __iter__(self):
        while self.next():
            yield self.command, self.leftover

    def __repr__(self):
        return "Parser(%r, pending=%d)" % (self.root, self.pending)


__all__ = (
    "Parser",
)
