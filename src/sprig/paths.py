"""Structural path keys for addressing nodes inside a tree.

A path key names a node by the child positions leading to it from the root:
the root is ``"root"``, its second child is ``"root.1"``, that child's first
child is ``"root.1.0"``, and so on. Single-child wrappers (``Decorated``,
``Interactive``, ``Tagged``) contribute position ``0``.

Keys depend only on the shape of the tree above a node, so they stay stable
across renders as long as that shape does. Hover tracking
(:class:`~sprig.events.Hover`) and backend hit-testing both rely on this.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Optional

from sprig.nodes import Interactive, LineEdit, Node, children_of

ROOT_KEY = "root"
"""Path key of the tree's root node."""

SEPARATOR = "."


def child_key(parent_key: str, position: int) -> str:
    """Return the path key of the child at *position* under *parent_key*."""
    return f"{parent_key}{SEPARATOR}{position}"


def iter_paths(node: Node, key: str = ROOT_KEY) -> Iterator[tuple[str, Node]]:
    """Yield ``(path_key, node)`` pairs for the whole tree in pre-order."""
    yield key, node
    for position, kid in enumerate(children_of(node)):
        yield from iter_paths(kid, child_key(key, position))


def parse_key(key: str) -> list[int]:
    """Split a path key into its child positions.

    Raises:
        ValueError: If *key* does not start at the root or contains a
            non-numeric position.
    """
    parts = key.split(SEPARATOR)
    if parts[0] != ROOT_KEY:
        raise ValueError(f"Path key must start with '{ROOT_KEY}': {key!r}")
    try:
        return [int(part) for part in parts[1:]]
    except ValueError:
        raise ValueError(f"Invalid path key: {key!r}") from None


def node_at(tree: Node, key: str) -> Optional[Node]:
    """Return the node addressed by *key*, or ``None`` if the path does not exist."""
    current = tree
    for position in parse_key(key):
        kids = children_of(current)
        if position < 0 or position >= len(kids):
            return None
        current = kids[position]
    return current


def hit_targets(tree: Node) -> dict[str, Any]:
    """Map the path key of every interactive node to what it emits.

    ``Interactive`` nodes map to their action. ``LineEdit`` nodes map to
    their ``on_change`` handler, which the caller invokes with the new text.
    """
    targets: dict[str, Any] = {}
    for key, node in iter_paths(tree):
        if isinstance(node, Interactive):
            targets[key] = node.action
        elif isinstance(node, LineEdit):
            targets[key] = node.on_change
    return targets
