"""
Argot schema validation: alias uniqueness across the command hierarchy.

Rule
- For every node, its own option aliases and the option aliases of all of its
  ancestors (root included) must be pairwise distinct.
- Siblings, and everything below them, never see each other's aliases, so two
  sub-commands may freely declare the same -v/--verbose.

Walk
- Iterative depth-first traversal; each pending entry carries the set of aliases
  inherited from the ancestors of that node. A node checks its aliases against
  that set (plus the ones it has already declared itself) and hands a fresh,
  merged copy to each child.
"""
import logging

from .faults import *

logger = logging.getLogger(__name__)


def validate(root, /):
    """
    check the alias-uniqueness invariant for the tree rooted at `root`.

    raises AliasCollisionError naming the reused alias and the route of the node
    where the collision shows up ("global" for the root, "thing create" below it).
    """
    pending = [(root, frozenset())]
    while pending:
        node, inherited = pending.pop()
        seen = set(inherited)
        for descriptor in node.options:
            for alias in descriptor.aliases:
                if alias in seen:
                    trigger(AliasCollisionError(
                        "option %r reused in %s command" % (alias, node.route),
                        title="alias collision",
                        code=FaultCode.ALIAS_COLLISION,
                        input=alias,
                        tag=descriptor.tag,
                        route=node.route,
                        hint="rename %r in the %s command or in one of its parents" % (alias, node.route),
                        docs=getdoc(FaultCode.ALIAS_COLLISION),
                    ))
                seen.add(alias)

        visible = frozenset(seen)
        for child in reversed(list(dict.fromkeys(node.children.values()))):
            pending.append((child, visible))

    logger.debug("schema %r validated", root)


__all__ = (
    "validate",
)
