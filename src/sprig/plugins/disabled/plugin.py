"""Disabled plugin -- grey out ``Tag.DISABLED`` subtrees and drop their interaction."""

from __future__ import annotations

from sprig.models import Attributes
from sprig.nodes import Decorated, Interactive, LineEdit, Node, Tagged, Text, transform
from sprig.plugins.base import Plugin
from sprig.state import PluginState
from sprig.tags import Tag

DISABLED_ATTRIBUTES = Attributes(font_color="grey50")


def strip_interaction(node: Node) -> Node:
    """Replace interactive nodes with their child and line edits with their text."""

    def step(current: Node) -> Node:
        if isinstance(current, Interactive):
            return current.child
        if isinstance(current, LineEdit):
            return Text(current.value)
        return current

    return transform(node, step)


class DisabledPlugin(Plugin):
    """Makes everything under ``Tag.DISABLED`` inert and dimmed."""

    @property
    def name(self) -> str:
        return "disabled"

    @property
    def description(self) -> str:
        return "Grey out Tag.DISABLED subtrees and remove their actions"

    def rewrite(self, state: PluginState, node: Node) -> Node:
        if isinstance(node, Tagged) and node.tag == Tag.DISABLED:
            return Tagged(
                Tag.DISABLED,
                Decorated(DISABLED_ATTRIBUTES, strip_interaction(node.child)),
            )
        return node
