"""Submit plugin -- style ``Tag.SUBMIT`` subtrees as primary buttons.

The button is drawn square; it declares a dependency on ``rounded`` so that,
placed before ``rounded`` in the pipeline, it gets rounded corners.
"""

from __future__ import annotations

from sprig.models import Attributes
from sprig.nodes import Decorated, Node, Tagged
from sprig.plugins.base import Plugin
from sprig.state import PluginState
from sprig.tags import Tag

BUTTON_ATTRIBUTES = Attributes(
    font_color="white",
    background_color="blue",
    padding=8,
    border_width=1,
    border_color="blue",
)


class SubmitPlugin(Plugin):
    """Wraps the child of every ``Tag.SUBMIT`` node in button decoration."""

    @property
    def name(self) -> str:
        return "submit"

    @property
    def description(self) -> str:
        return "Style Tag.SUBMIT subtrees as primary buttons"

    @property
    def dependencies(self) -> tuple[str, ...]:
        return ("rounded",)

    def rewrite(self, state: PluginState, node: Node) -> Node:
        if isinstance(node, Tagged) and node.tag == Tag.SUBMIT:
            return Tagged(Tag.SUBMIT, Decorated(BUTTON_ATTRIBUTES, node.child))
        return node
