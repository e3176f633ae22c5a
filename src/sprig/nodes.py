"""The node tree: sprig's declarative UI description.

A UI is a tree of immutable node values. There is one frozen dataclass per
node variant, and :data:`Node` is the closed union of all of them:

==============  ===========================================================
Variant         Meaning
==============  ===========================================================
``Empty``       Nothing at all.
``Text``        A run of text.
``Decorated``   A child drawn with :class:`~sprig.models.Attributes`.
``Row``         Children laid out left to right.
``Column``      Children laid out top to bottom.
``Stack``       Children layered on top of each other.
``Interactive`` A child that emits ``action`` when activated.
``LineEdit``    A text input; ``on_change(new_value)`` returns an action.
``Tagged``      A child marked with a semantic :class:`~sprig.tags.Tag`.
``FlexSpace``   Space that grows to fill the parent.
``FixedSpace``  A fixed gap of ``pixels``.
==============  ===========================================================

Nodes compare by value, so two independently built trees with the same shape
and contents are equal. "Changing" a node always means building a new one.

Generic structure is handled by type-keyed dispatch tables
(:func:`children_of`, :func:`replace_children`) rather than methods on the
node classes, so rewrite rules and backends see plain data.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from sprig.models import Attributes
from sprig.tags import Tag


@dataclass(frozen=True)
class Empty:
    """A node that renders nothing."""


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class Decorated:
    attributes: Attributes
    child: Node


@dataclass(frozen=True)
class Row:
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class Column:
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class Stack:
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class Interactive:
    """A child that emits ``action`` when the user activates it.

    ``action`` is opaque to sprig: it is whatever the host routes back into
    its own update loop.
    """

    action: Any
    child: Node


@dataclass(frozen=True)
class LineEdit:
    """A single-line text input.

    ``on_change`` is called with the new text and returns the action to
    emit. Handlers should be comparable by value (plain functions, or
    frozen dataclasses with ``__call__``) so trees stay comparable.
    """

    on_change: Callable[[str], Any]
    value: str = ""


@dataclass(frozen=True)
class Tagged:
    tag: Tag
    child: Node


@dataclass(frozen=True)
class FlexSpace:
    """Space that expands to fill whatever the parent has left."""


@dataclass(frozen=True)
class FixedSpace:
    pixels: int


Node = Union[
    Empty,
    Text,
    Decorated,
    Row,
    Column,
    Stack,
    Interactive,
    LineEdit,
    Tagged,
    FlexSpace,
    FixedSpace,
]
"""Closed union of every node variant."""

NODE_TYPES: tuple[type, ...] = (
    Empty,
    Text,
    Decorated,
    Row,
    Column,
    Stack,
    Interactive,
    LineEdit,
    Tagged,
    FlexSpace,
    FixedSpace,
)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def empty() -> Empty:
    return Empty()


def text(content: str) -> Text:
    return Text(content)


def row(*children: Node) -> Row:
    return Row(children)


def column(*children: Node) -> Column:
    return Column(children)


def stack(*children: Node) -> Stack:
    return Stack(children)


def decorate(
    child: Node, attributes: Optional[Attributes] = None, **changes: Any
) -> Decorated:
    """Wrap *child* in a :class:`Decorated` node.

    Args:
        child: The node to decorate.
        attributes: Base attributes. Defaults to :class:`Attributes` with
            every field at its framework default.
        **changes: Individual attribute overrides applied on top of
            *attributes* (e.g. ``rounding=8``).
    """
    attrs = attributes if attributes is not None else Attributes()
    if changes:
        attrs = attrs.with_(**changes)
    return Decorated(attrs, child)


def interactive(action: Any, child: Node) -> Interactive:
    return Interactive(action, child)


def line_edit(on_change: Callable[[str], Any], value: str = "") -> LineEdit:
    return LineEdit(on_change, value)


def tag(role: Tag, child: Node) -> Tagged:
    return Tagged(role, child)


def flex_space() -> FlexSpace:
    return FlexSpace()


def fixed_space(pixels: int) -> FixedSpace:
    return FixedSpace(pixels)


# ---------------------------------------------------------------------------
# Generic structure
# ---------------------------------------------------------------------------

_CHILDREN: dict[type, Callable[[Any], tuple[Node, ...]]] = {
    Decorated: lambda node: (node.child,),
    Interactive: lambda node: (node.child,),
    Tagged: lambda node: (node.child,),
    Row: lambda node: node.children,
    Column: lambda node: node.children,
    Stack: lambda node: node.children,
}

_REPLACE: dict[type, Callable[[Any, tuple[Node, ...]], Node]] = {
    Decorated: lambda node, kids: replace(node, child=kids[0]),
    Interactive: lambda node, kids: replace(node, child=kids[0]),
    Tagged: lambda node, kids: replace(node, child=kids[0]),
    Row: lambda node, kids: Row(kids),
    Column: lambda node, kids: Column(kids),
    Stack: lambda node, kids: Stack(kids),
}


def children_of(node: Node) -> tuple[Node, ...]:
    """Return the direct children of *node* in positional order.

    Single-child wrappers (``Decorated``, ``Interactive``, ``Tagged``) have
    exactly one child; leaves have none.
    """
    accessor = _CHILDREN.get(type(node))
    return accessor(node) if accessor is not None else ()


def replace_children(node: Node, children: Iterable[Node]) -> Node:
    """Return a copy of *node* with its children replaced, position for position.

    Raises:
        ValueError: If the number of children does not match the node's arity.
    """
    kids = tuple(children)
    builder = _REPLACE.get(type(node))
    if builder is None:
        if kids:
            raise ValueError(f"{type(node).__name__} nodes have no children")
        return node
    if type(node) in (Decorated, Interactive, Tagged) and len(kids) != 1:
        raise ValueError(
            f"{type(node).__name__} takes exactly one child, got {len(kids)}"
        )
    return builder(node, kids)


def map_children(node: Node, fn: Callable[[Node], Node]) -> Node:
    """Apply *fn* to every direct child of *node*.

    Returns *node* itself when *fn* returned every child unchanged (by
    identity), so untouched subtrees are shared rather than copied.
    """
    kids = children_of(node)
    if not kids:
        return node
    new_kids = tuple(fn(kid) for kid in kids)
    if all(new is old for new, old in zip(new_kids, kids)):
        return node
    return replace_children(node, new_kids)


def transform(node: Node, fn: Callable[[Node], Node]) -> Node:
    """Rebuild *node* bottom-up: children first, then *fn* on the node itself."""
    return fn(map_children(node, lambda kid: transform(kid, fn)))


def walk(node: Node) -> Iterator[Node]:
    """Yield *node* and all its descendants in pre-order."""
    yield node
    for kid in children_of(node):
        yield from walk(kid)


def map_actions(
    node: Node,
    on_action: Callable[[Any], Any],
    on_handler: Callable[[Callable[[str], Any]], Callable[[str], Any]],
) -> Node:
    """Rewrite every action value in the tree.

    ``Interactive.action`` values go through *on_action*; ``LineEdit``
    handlers go through *on_handler*. Everything else is rebuilt unchanged.
    """

    def step(current: Node) -> Node:
        if isinstance(current, Interactive):
            return replace(current, action=on_action(current.action))
        if isinstance(current, LineEdit):
            return replace(current, on_change=on_handler(current.on_change))
        return current

    return transform(node, step)
