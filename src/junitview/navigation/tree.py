"""Path-descriptor lookups into a report tree.

A path is a tuple of row indices starting from the report's top-level
suite list. ``()`` is the root, ``(0,)`` the first suite, ``(0, 2)`` the
third row (child suites first, then cases) of that suite, and so on.
"""

from __future__ import annotations

from junitview.core.exceptions import NavigationError
from junitview.core.models import Node, Report, Suite


def rows_of(node: Report | Node) -> tuple[Node, ...]:
    """Rows listed when a node is opened."""
    if isinstance(node, Report):
        return node.suites
    if isinstance(node, Suite):
        return node.children
    return ()


def resolve(report: Report, path: tuple[int, ...]) -> Report | Node:
    """Return the node a path points at.

    Raises:
        NavigationError: If any index in the path is out of range.
    """
    node: Report | Node = report
    for depth, index in enumerate(path):
        rows = rows_of(node)
        if not 0 <= index < len(rows):
            raise NavigationError(
                f"path {path} does not resolve in {report.source_name!r} "
                f"(index {index} at depth {depth}, {len(rows)} rows)"
            )
        node = rows[index]
    return node


def ancestry(report: Report, path: tuple[int, ...]) -> list[Node]:
    """Nodes visited along a path, outermost first."""
    nodes = []
    for depth in range(1, len(path) + 1):
        node = resolve(report, path[:depth])
        nodes.append(node)
    return nodes
