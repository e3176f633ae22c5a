"""Event bridge between host actions and plugin-private events.

While a plugin rewrites a tree, every action in it is one of two cases:

* :class:`External` -- an action that was already in the tree. It belongs to
  the host (or to an earlier plugin) and passes through untouched.
* :class:`PluginLocal` -- a payload attached by the rewriting plugin to a
  node it introduced, meant for that plugin's own reducer.

:func:`embed` wraps a tree's actions before the plugin runs and
:func:`collapse` unwraps them afterwards, turning each
:class:`PluginLocal` into ``embed_host_message(PluginEvent(plugin, payload))``.
The envelope never outlives one plugin's step, so the host only ever sees its
own message type.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from sprig.events import FrameworkEvent, PluginEvent
from sprig.nodes import Node, map_actions

HostEmbedder = Callable[[FrameworkEvent], Any]


@dataclass(frozen=True)
class External:
    """A host-level action carried through a plugin's rewrite unchanged."""

    action: Any


@dataclass(frozen=True)
class PluginLocal:
    """A payload addressed to the reducer of the plugin doing the rewrite."""

    payload: str


Envelope = Union[External, PluginLocal]


@dataclass(frozen=True)
class EmbeddedHandler:
    """Wraps an existing ``LineEdit`` handler so it returns :class:`External`."""

    handler: Callable[[str], Any]

    def __call__(self, value: str) -> External:
        return External(self.handler(value))


@dataclass(frozen=True)
class CollapsedHandler:
    """Wraps a plugin-made ``LineEdit`` handler so its envelope is collapsed."""

    handler: Callable[[str], Any]
    plugin: str
    embed_host_message: HostEmbedder

    def __call__(self, value: str) -> Any:
        return collapse_action(self.handler(value), self.plugin, self.embed_host_message)


def embed(tree: Node) -> Node:
    """Wrap every action in *tree* as :class:`External`."""
    return map_actions(tree, External, EmbeddedHandler)


def collapse_action(value: Any, plugin: str, embed_host_message: HostEmbedder) -> Any:
    """Unwrap one action produced during *plugin*'s rewrite.

    Values that are neither envelope case pass through as they are.
    """
    if isinstance(value, External):
        return value.action
    if isinstance(value, PluginLocal):
        return embed_host_message(PluginEvent(plugin, value.payload))
    return value


def collapse_handler(
    handler: Callable[[str], Any], plugin: str, embed_host_message: HostEmbedder
) -> Callable[[str], Any]:
    # Handlers embedded by this step get their original callable back.
    if isinstance(handler, EmbeddedHandler):
        return handler.handler
    return CollapsedHandler(handler, plugin, embed_host_message)


def collapse(tree: Node, plugin: str, embed_host_message: HostEmbedder) -> Node:
    """Unwrap every action in *tree* after *plugin*'s rewrite."""
    return map_actions(
        tree,
        lambda action: collapse_action(action, plugin, embed_host_message),
        lambda handler: collapse_handler(handler, plugin, embed_host_message),
    )
