"""Background plugin -- paint every decorated node with one background colour."""

from __future__ import annotations

from sprig.models import GlobalConfig
from sprig.nodes import Decorated, Node
from sprig.plugins.base import Plugin
from sprig.state import PluginState

DEFAULT_COLOR = "white"


class BackgroundPlugin(Plugin):
    """Sets ``background_color`` on every ``Decorated`` node.

    The colour comes from the constructor or the ``color`` option
    (``plugins.options.background``).
    """

    def __init__(self, color: str = DEFAULT_COLOR) -> None:
        self._color = color

    @property
    def name(self) -> str:
        return "background"

    @property
    def description(self) -> str:
        return "Apply a uniform background colour to decorated nodes"

    def on_init(self, config: GlobalConfig) -> None:
        self._color = config.plugins.options.get(self.name, {}).get("color", self._color)

    def _key(self) -> tuple:
        return (self.name, self._color)

    def rewrite(self, state: PluginState, node: Node) -> Node:
        if isinstance(node, Decorated) and node.attributes.background_color != self._color:
            return Decorated(
                node.attributes.with_(background_color=self._color), node.child
            )
        return node
