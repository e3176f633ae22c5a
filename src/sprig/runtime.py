"""Host-facing entry points: :func:`render` and :func:`update`.

A host drives sprig with two calls per interaction cycle::

    config = build_config(active_plugins, embed_host_message=MyMsg.framework)
    state = FrameworkState()

    output = render(config, state, build_tree(model))
    ...
    state = update(config, event, state)   # for Hover / Unhover / PluginEvent

:func:`render` is a pure function of the config, the plugin states and the
tree. :func:`update` processes exactly one event and returns a complete new
state.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sprig.backends.base import RenderBackend
from sprig.events import FrameworkEvent, Hover, PluginEvent, Unhover
from sprig.nodes import Node
from sprig.pipeline.config import PipelineConfig
from sprig.pipeline.rewrite import rewrite_tree
from sprig.state import FrameworkState

logger = logging.getLogger(__name__)


def render(
    config: PipelineConfig,
    state: FrameworkState,
    tree: Node,
    backend: Optional[RenderBackend] = None,
) -> Any:
    """Rewrite *tree* through the pipeline and hand it to a render backend.

    Args:
        config: The validated pipeline.
        state: Current framework state; plugin states feed the rewrite and
            hovered keys feed the backend.
        tree: The host's freshly built source tree.
        backend: Render backend to use. Defaults to
            :class:`~sprig.backends.RichBackend`.

    Returns:
        Whatever the backend produces.
    """
    if backend is None:
        from sprig.backends.rich_backend import RichBackend

        backend = RichBackend()
    final = rewrite_tree(config, state.plugin_states, tree)
    return backend.render(final, state.hovered_keys)


def update(
    config: PipelineConfig, event: FrameworkEvent, state: FrameworkState
) -> FrameworkState:
    """Apply one framework event to *state*.

    * :class:`~sprig.events.Hover` / :class:`~sprig.events.Unhover` add or
      remove a path key from ``hovered_keys``.
    * :class:`~sprig.events.PluginEvent` runs the named plugin's reducer and
      stores the result under its name. Events for plugins that are not in
      *config* are dropped and *state* is returned as is.

    Args:
        config: The pipeline active when the event is processed.
        event: The event to apply.
        state: The state before the event.

    Returns:
        The state after the event. Parts the event does not touch are the
        same objects as in *state*.
    """
    if isinstance(event, Hover):
        return state.with_hover(event.key)
    if isinstance(event, Unhover):
        return state.without_hover(event.key)
    if isinstance(event, PluginEvent):
        plugin = config.find_plugin(event.plugin)
        if plugin is None:
            logger.debug(
                "Dropping event for inactive plugin '%s': %r",
                event.plugin,
                event.payload,
            )
            return state
        next_state = plugin.reduce(event.payload, state.state_for(plugin))
        logger.debug("Plugin '%s' state -> %s", plugin.name, next_state)
        return state.with_plugin_state(plugin.name, next_state)
    raise TypeError(f"Not a framework event: {event!r}")
