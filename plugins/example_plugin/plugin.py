"""Example third-party plugin that upper-cases headings.

Register it from your own package's ``pyproject.toml``::

    [project.entry-points."sprig.plugins"]
    shout = "example_plugin.plugin:ShoutPlugin"
"""

from __future__ import annotations

from sprig.nodes import Node, Tagged, Text, transform
from sprig.plugins.base import Plugin
from sprig.state import PluginState
from sprig.tags import Tag


def _upper(node: Node) -> Node:
    if isinstance(node, Text):
        return Text(node.content.upper())
    return node


class ShoutPlugin(Plugin):
    """Upper-cases every text under a ``Tag.HEADING`` node."""

    @property
    def name(self) -> str:
        return "shout"

    @property
    def description(self) -> str:
        return "Upper-case heading text"

    def rewrite(self, state: PluginState, node: Node) -> Node:
        if isinstance(node, Tagged) and node.tag == Tag.HEADING:
            return Tagged(node.tag, transform(node.child, _upper))
        return node
