"""The rewrite pipeline: fold a plugin list over a node tree.

Each plugin in a :class:`~sprig.pipeline.config.PipelineConfig` gets one full
bottom-up traversal of the current tree, in config order:

1. :func:`~sprig.pipeline.envelope.embed` wraps existing actions as
   ``External``.
2. Every node, after its children, goes through ``plugin.rewrite(state, node)``.
3. :func:`~sprig.pipeline.envelope.collapse` turns the plugin's
   ``PluginLocal`` payloads into host messages.

The collapsed tree is the next plugin's input, so later plugins see
everything earlier plugins produced, including nodes those plugins
introduced. The cost is one traversal per plugin per render; nothing is
cached.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from sprig.nodes import Node, transform
from sprig.pipeline.config import PipelineConfig
from sprig.pipeline.envelope import HostEmbedder, collapse, embed
from sprig.state import PluginState

if TYPE_CHECKING:
    from sprig.plugins.base import Plugin

logger = logging.getLogger(__name__)


def apply_plugin(
    plugin: Plugin,
    state: PluginState,
    tree: Node,
    embed_host_message: HostEmbedder,
) -> Node:
    """Run one plugin's rewrite rule over every node of *tree*.

    Args:
        plugin: The plugin whose :meth:`~sprig.plugins.base.Plugin.rewrite`
            is applied.
        state: The plugin's current state record. Never mutated.
        tree: The input tree, with host-level actions.
        embed_host_message: Wraps the plugin's own events for the host.

    Returns:
        The rewritten tree, again with host-level actions only.
    """
    embedded = embed(tree)
    rewritten = transform(embedded, lambda node: plugin.rewrite(state, node))
    return collapse(rewritten, plugin.name, embed_host_message)


def rewrite_tree(
    config: PipelineConfig,
    plugin_states: Mapping[str, PluginState],
    tree: Node,
) -> Node:
    """Run every plugin in *config* over *tree*, in order.

    Args:
        config: The validated pipeline.
        plugin_states: Stored state per plugin name; plugins without an
            entry use their ``init_state``.
        tree: The host's source tree.

    Returns:
        The final tree, ready for a render backend.
    """
    current = tree
    for plugin in config.plugins:
        stored = plugin_states.get(plugin.name)
        state = dict(stored) if stored is not None else dict(plugin.init_state)
        logger.debug("Applying plugin '%s' with state %s", plugin.name, state)
        current = apply_plugin(plugin, state, current, config.embed_host_message)
    return current
