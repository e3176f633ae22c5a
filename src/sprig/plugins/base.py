"""Abstract base class for sprig plugins.

A plugin is a rewrite rule over the node tree plus a small private state
machine. Every plugin must subclass :class:`Plugin` and implement
:attr:`~Plugin.name` and :meth:`~Plugin.rewrite`. The remaining members have
defaults so plugins only override what they need:

* :attr:`~Plugin.dependencies` -- names of plugins that must also be active.
* :attr:`~Plugin.init_state` -- the state record used until the first event.
* :meth:`~Plugin.reduce` -- folds a plugin-local event payload into the state.
* :meth:`~Plugin.on_init` -- reads per-plugin options from the settings.

Plugins are registered as entry points in the ``sprig.plugins`` group
and discovered at runtime by :class:`~sprig.plugins.manager.PluginManager`.

Example:
    Minimal plugin implementation::

        class Shout(Plugin):
            @property
            def name(self) -> str:
                return "shout"

            def rewrite(self, state, node):
                if isinstance(node, Text):
                    return Text(node.content.upper())
                return node
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from typing import Optional

from sprig.models import GlobalConfig
from sprig.nodes import Node
from sprig.state import PluginState

logger = logging.getLogger(__name__)


def int_option(config: GlobalConfig, plugin: str, key: str, default: int) -> int:
    """Read an integer option from ``config.plugins.options[plugin]``.

    Missing or non-integer values fall back to *default*; the latter is
    logged as a warning.
    """
    raw = config.plugins.options.get(plugin, {}).get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            "Ignoring option %s.%s=%r: not an integer", plugin, key, raw
        )
        return default


class Plugin(ABC):
    """Base class for all sprig plugins.

    Subclasses must implement :attr:`name` and :meth:`rewrite`.

    A plugin instance holds no per-session state of its own: its state record
    lives in :class:`~sprig.state.FrameworkState` and is handed to
    :meth:`rewrite` and :meth:`reduce`. Two instances of the same class are
    equal when their :meth:`_key` values are, that is when they are
    configured alike, which is what :func:`~sprig.plugins.manager.toggle_plugin`
    relies on.

    The plugin lifecycle is:

    1. Instantiation -- the :class:`PluginManager` calls the no-arg constructor.
    2. :meth:`on_init` -- called once with the global configuration.
    3. :meth:`rewrite` -- called once per node on every render.
    4. :meth:`reduce` -- called once per plugin-local event addressed to it.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique plugin name used for state and event routing.

        Returns:
            A short identifier (e.g. ``"tabs"``).
        """
        ...

    @property
    def version(self) -> str:
        return "0.1.0"

    @property
    def description(self) -> str:
        return ""

    @property
    def dependencies(self) -> tuple[str, ...]:
        """Names of plugins that must be present in the same pipeline.

        Only presence is checked; a dependency may sit before or after this
        plugin in the list.
        """
        return ()

    @property
    def init_state(self) -> PluginState:
        """State record used while nothing has been stored for this plugin."""
        return {}

    def on_init(self, config: GlobalConfig) -> None:
        """Called once when the plugin is loaded by the :class:`PluginManager`.

        Args:
            config: The global sprig configuration. Per-plugin options live in
                ``config.plugins.options[self.name]``.
        """

    def reduce(self, payload: str, state: PluginState) -> PluginState:
        """Fold a plugin-local event payload into *state*.

        Must be total: payloads the plugin does not understand should return
        *state* unchanged. The default keeps the state as is.

        Args:
            payload: The string the plugin attached to a node it introduced.
            state: A copy of the plugin's current state record.

        Returns:
            The next state record.
        """
        return state

    @abstractmethod
    def rewrite(self, state: PluginState, node: Node) -> Node:
        """Rewrite a single node.

        Called bottom-up on every node of the tree: the node's children have
        already been rewritten by this plugin. Must return *node* unchanged
        for every shape it does not recognise, and must not mutate *state*.

        Args:
            state: The plugin's current state record.
            node: The node to rewrite. Its actions are wrapped in
                :class:`~sprig.pipeline.envelope.External`; new interactive
                nodes should carry :class:`~sprig.pipeline.envelope.PluginLocal`
                payloads.

        Returns:
            The replacement node, or *node* itself.
        """
        ...

    def _key(self) -> tuple:
        """Values that identify this plugin's behaviour.

        Plugins with constructor or ``on_init`` options extend the key with
        them so that differently configured instances compare unequal.
        """
        return (self.name,)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plugin):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self), self._key()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class FunctionPlugin(Plugin):
    """A plugin assembled from plain callables.

    Useful for hosts and tests that want a plugin without defining a class.
    Two ``FunctionPlugin`` instances are equal when every constructor argument
    is equal.

    Args:
        name: Unique plugin name.
        rewrite: ``(state, node) -> node`` rewrite rule.
        reduce: ``(payload, state) -> state`` reducer. Defaults to keeping
            the state unchanged.
        init_state: Initial state record.
        dependencies: Names of plugins that must also be active.
        description: One-line description shown by ``sprig plugins list``.

    Example::

        trim = FunctionPlugin("trim", lambda state, node: node)
    """

    def __init__(
        self,
        name: str,
        rewrite: Callable[[PluginState, Node], Node],
        reduce: Optional[Callable[[str, PluginState], PluginState]] = None,
        init_state: Optional[Mapping[str, str]] = None,
        dependencies: Iterable[str] = (),
        description: str = "",
    ) -> None:
        self._name = name
        self._rewrite = rewrite
        self._reduce = reduce
        self._init_state = dict(init_state or {})
        self._dependencies = tuple(dependencies)
        self._description = description

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def dependencies(self) -> tuple[str, ...]:
        return self._dependencies

    @property
    def init_state(self) -> PluginState:
        return dict(self._init_state)

    def reduce(self, payload: str, state: PluginState) -> PluginState:
        if self._reduce is None:
            return state
        return self._reduce(payload, state)

    def rewrite(self, state: PluginState, node: Node) -> Node:
        return self._rewrite(state, node)

    def _key(self) -> tuple:
        return (
            self._name,
            self._rewrite,
            self._reduce,
            tuple(sorted(self._init_state.items())),
            self._dependencies,
            self._description,
        )
