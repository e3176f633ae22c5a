"""Accordion plugin -- collapsible sections keyed by their header text.

A ``Tagged(Tag.ACCORDION, Column(header, *body))`` shows only a clickable
header until it is opened. The header's first text is the section key;
clicking raises ``PluginEvent("accordion", key)`` and :meth:`reduce` flips
``state[key]`` between ``"open"`` and ``"closed"``. Sections start closed.
"""

from __future__ import annotations

from sprig.nodes import Column, Interactive, Node, Row, Tagged, Text, walk
from sprig.pipeline.envelope import PluginLocal
from sprig.plugins.base import Plugin
from sprig.state import PluginState
from sprig.tags import Tag

OPEN = "open"
CLOSED = "closed"
OPEN_MARKER = "v"
CLOSED_MARKER = ">"


def section_key(header: Node) -> str:
    for node in walk(header):
        if isinstance(node, Text) and node.content.strip():
            return node.content.strip()
    return ""


class AccordionPlugin(Plugin):
    """Collapses ``Tag.ACCORDION`` sections to their header until clicked."""

    @property
    def name(self) -> str:
        return "accordion"

    @property
    def description(self) -> str:
        return "Make Tag.ACCORDION sections collapsible"

    def reduce(self, payload: str, state: PluginState) -> PluginState:
        current = state.get(payload, CLOSED)
        return {**state, payload: CLOSED if current == OPEN else OPEN}

    def rewrite(self, state: PluginState, node: Node) -> Node:
        if not (isinstance(node, Tagged) and node.tag == Tag.ACCORDION):
            return node
        if isinstance(node.child, Column) and node.child.children:
            header, *body = node.child.children
        else:
            header, body = node.child, []

        key = section_key(header)
        is_open = state.get(key, CLOSED) == OPEN
        marker = Text(OPEN_MARKER if is_open else CLOSED_MARKER)
        toggle = Interactive(PluginLocal(key), Row((marker, header)))
        if is_open:
            return Tagged(Tag.SECTION, Column((toggle, *body)))
        return Tagged(Tag.SECTION, Column((toggle,)))
