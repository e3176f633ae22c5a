"""Trim plugin -- shorten long text runs.

Any ``Text`` longer than ``max_length`` characters becomes a ``Row`` of the
first ``max_length`` characters followed by an ellipsis ``Text``. The limit
is read from the ``max_length`` option (``plugins.options.trim``).
"""

from __future__ import annotations

from sprig.models import GlobalConfig
from sprig.nodes import Node, Row, Text
from sprig.plugins.base import Plugin, int_option
from sprig.state import PluginState

DEFAULT_MAX_LENGTH = 50
ELLIPSIS = "..."


class TrimPlugin(Plugin):
    """Cuts text runs longer than ``max_length`` and appends ``"..."``."""

    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH) -> None:
        self._max_length = max_length

    @property
    def name(self) -> str:
        return "trim"

    @property
    def description(self) -> str:
        return f"Shorten text longer than {self._max_length} characters"

    @property
    def max_length(self) -> int:
        return self._max_length

    def on_init(self, config: GlobalConfig) -> None:
        self._max_length = int_option(config, self.name, "max_length", self._max_length)

    def _key(self) -> tuple:
        return (self.name, self._max_length)

    def rewrite(self, state: PluginState, node: Node) -> Node:
        if isinstance(node, Text) and len(node.content) > self._max_length:
            return Row((Text(node.content[: self._max_length]), Text(ELLIPSIS)))
        return node
