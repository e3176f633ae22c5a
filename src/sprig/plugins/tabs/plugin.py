"""Tabs plugin -- turn a ``Tag.TABS`` container into a tab bar plus one pane.

Input shape::

    Tagged(Tag.TABS, Row|Column|Stack(pane_0, pane_1, ...))

Output shape::

    Column(
        Tagged(Tag.TOOLBAR, Row(header_0, header_1, ...)),
        pane_selected,
    )

Each header is an ``Interactive`` node whose action is a plugin-local payload
holding the pane index, so clicking it raises ``PluginEvent("tabs", "<i>")``
and :meth:`TabsPlugin.reduce` stores the index under ``"index"``. The header
label is the first text found in the pane.
"""

from __future__ import annotations

from sprig.models import Attributes
from sprig.nodes import (
    Column,
    Decorated,
    Interactive,
    Node,
    Row,
    Stack,
    Tagged,
    Text,
    walk,
)
from sprig.pipeline.envelope import PluginLocal
from sprig.plugins.base import Plugin
from sprig.state import PluginState
from sprig.tags import Tag

INDEX_KEY = "index"
LABEL_LIMIT = 24
_ACTIVE_ATTRIBUTES = Attributes(border_width=1, padding=8)


def pane_label(pane: Node, position: int) -> str:
    """Return the header label for *pane*: its first text, or ``"Tab N"``."""
    for node in walk(pane):
        if isinstance(node, Text) and node.content.strip():
            return node.content.strip()[:LABEL_LIMIT]
    return f"Tab {position + 1}"


def selected_index(state: PluginState, pane_count: int) -> int:
    """Read the selected pane index from *state*, falling back to the first pane."""
    try:
        index = int(state.get(INDEX_KEY, "0"))
    except ValueError:
        return 0
    if 0 <= index < pane_count:
        return index
    return 0


class TabsPlugin(Plugin):
    """Shows one pane of a ``Tag.TABS`` container at a time."""

    @property
    def name(self) -> str:
        return "tabs"

    @property
    def description(self) -> str:
        return "Render Tag.TABS containers as a tab bar with one visible pane"

    @property
    def init_state(self) -> PluginState:
        return {INDEX_KEY: "0"}

    def reduce(self, payload: str, state: PluginState) -> PluginState:
        if payload.isdigit():
            return {**state, INDEX_KEY: payload}
        return state

    def rewrite(self, state: PluginState, node: Node) -> Node:
        if not (isinstance(node, Tagged) and node.tag == Tag.TABS):
            return node
        if isinstance(node.child, (Row, Column, Stack)):
            panes = node.child.children
        else:
            panes = (node.child,)
        if not panes:
            return node

        selected = selected_index(state, len(panes))
        headers = []
        for position, pane in enumerate(panes):
            label: Node = Text(pane_label(pane, position))
            if position == selected:
                label = Tagged(Tag.ACTIVE, Decorated(_ACTIVE_ATTRIBUTES, label))
            else:
                label = Tagged(Tag.INACTIVE, label)
            headers.append(Interactive(PluginLocal(str(position)), label))

        return Column((Tagged(Tag.TOOLBAR, Row(tuple(headers))), panes[selected]))
