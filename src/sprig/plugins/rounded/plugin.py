"""Rounded plugin -- give square decorated nodes rounded corners."""

from __future__ import annotations

from sprig.models import GlobalConfig
from sprig.nodes import Decorated, Node
from sprig.plugins.base import Plugin, int_option
from sprig.state import PluginState

DEFAULT_RADIUS = 16


class RoundedPlugin(Plugin):
    """Sets ``rounding`` to ``radius`` on every ``Decorated`` node whose rounding is 0.

    Nodes that already carry a rounding keep it.
    """

    def __init__(self, radius: int = DEFAULT_RADIUS) -> None:
        self._radius = radius

    @property
    def name(self) -> str:
        return "rounded"

    @property
    def description(self) -> str:
        return "Round the corners of square decorated nodes"

    def on_init(self, config: GlobalConfig) -> None:
        self._radius = int_option(config, self.name, "radius", self._radius)

    def _key(self) -> tuple:
        return (self.name, self._radius)

    def rewrite(self, state: PluginState, node: Node) -> Node:
        if isinstance(node, Decorated) and node.attributes.rounding == 0:
            return Decorated(node.attributes.with_(rounding=self._radius), node.child)
        return node
