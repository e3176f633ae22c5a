"""Plugin manager -- discovery, registration, and active-list selection.

This module contains :class:`PluginManager`, the host-side registry of known
plugins. It loads the built-in plugins, discovers third-party plugins
registered as Python entry points, and turns the settings' ordered
``plugins.enabled`` list into a validated
:class:`~sprig.pipeline.config.PipelineConfig`.

The registry is a convenience for hosts such as the ``sprig`` CLI. The core
never consults it: :func:`~sprig.runtime.render` and
:func:`~sprig.runtime.update` only ever see the explicit config.

The entry-point group used for discovery is ``sprig.plugins``.
Third-party packages register plugins by declaring an entry point under this
group in their ``pyproject.toml``::

    [project.entry-points."sprig.plugins"]
    my-plugin = "my_package.plugin:MyPlugin"
"""

from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Sequence
from typing import Optional

from sprig.exceptions import PluginError
from sprig.models import GlobalConfig
from sprig.pipeline.config import PipelineConfig, build_config, identity_embedder
from sprig.pipeline.envelope import HostEmbedder
from sprig.plugins.base import Plugin

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "sprig.plugins"
"""The entry-point group name used for plugin discovery."""


def builtin_plugins() -> list[Plugin]:
    """Return fresh instances of every plugin shipped with sprig, in default order."""
    from sprig.plugins.accordion import AccordionPlugin
    from sprig.plugins.background import BackgroundPlugin
    from sprig.plugins.disabled import DisabledPlugin
    from sprig.plugins.rounded import RoundedPlugin
    from sprig.plugins.submit import SubmitPlugin
    from sprig.plugins.tabs import TabsPlugin
    from sprig.plugins.trim import TrimPlugin

    return [
        TrimPlugin(),
        TabsPlugin(),
        AccordionPlugin(),
        DisabledPlugin(),
        SubmitPlugin(),
        RoundedPlugin(),
        BackgroundPlugin(),
    ]


def toggle_plugin(active: Sequence[Plugin], plugin: Plugin) -> list[Plugin]:
    """Switch *plugin* on or off in an ordered active list.

    Membership is by value. If *plugin* is present, every equal entry is
    removed; otherwise it is appended to the end. The caller rebuilds its
    config from the result with :func:`~sprig.pipeline.config.build_config`.
    """
    if plugin in active:
        return [entry for entry in active if entry != plugin]
    return [*active, plugin]


class PluginManager:
    """Discovers, loads, and selects sprig plugins.

    The *enabled* and *disabled* lists in
    :class:`~sprig.models.PluginsConfig` control selection. When *enabled* is
    non-empty it is the exact pipeline, in order; otherwise every loaded
    plugin that is **not** in *disabled* is active, in load order.

    Example:
        Typical usage::

            manager = PluginManager()
            manager.load_builtins(global_config)
            manager.discover(global_config)
            config = manager.get_pipeline(global_config)
    """

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}
        self._pipelines: dict[tuple, PipelineConfig] = {}

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def load_builtins(self, config: GlobalConfig) -> list[str]:
        """Load the plugins shipped with sprig.

        Args:
            config: Passed to each plugin's ``on_init``.

        Returns:
            The names of the built-in plugins that were loaded.
        """
        loaded: list[str] = []
        for plugin in builtin_plugins():
            self.load_plugin(plugin.name, plugin, config)
            loaded.append(plugin.name)
        return loaded

    def discover(self, config: GlobalConfig) -> list[str]:
        """Discover and load plugins via Python entry points.

        Entry points whose name is already loaded (for example the built-ins,
        which sprig also registers as entry points) or listed in
        ``plugins.disabled`` are skipped.

        Args:
            config: The global configuration.

        Returns:
            A list of plugin names that were newly loaded. Plugins that fail
            to load are logged as warnings and skipped.
        """
        loaded_names: list[str] = []
        disabled_set = set(config.plugins.disabled)

        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            name = ep.name
            if name in self._plugins:
                logger.debug("Plugin '%s' already loaded, skipping", name)
                continue
            if name in disabled_set:
                logger.debug("Plugin '%s' is disabled, skipping", name)
                continue

            try:
                plugin_cls = ep.load()
                plugin: Plugin = plugin_cls()
                self.load_plugin(name, plugin, config)
                loaded_names.append(name)
            except Exception as exc:
                logger.warning("Failed to load plugin '%s': %s", name, exc)

        return loaded_names

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_plugin(self, name: str, plugin: Plugin, config: GlobalConfig) -> None:
        """Load and initialise a single plugin instance.

        Args:
            name: The name to register the plugin under. Must equal
                ``plugin.name``, since state and events are routed by it.
            plugin: The plugin instance to load.
            config: Passed to the plugin's ``on_init`` method.

        Raises:
            PluginError: If the name is already registered or does not match
                the plugin's own name.
        """
        if name in self._plugins:
            raise PluginError(f"Plugin '{name}' is already loaded")
        if plugin.name != name:
            raise PluginError(
                f"Plugin registered as '{name}' reports name '{plugin.name}'"
            )

        plugin.on_init(config)
        self._plugins[name] = plugin
        self._pipelines.clear()
        logger.info("Loaded plugin '%s' v%s", name, plugin.version)

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def get_plugin(self, name: str) -> Plugin:
        """Retrieve a loaded plugin by name.

        Raises:
            PluginError: If no plugin with the given *name* is loaded.
        """
        try:
            return self._plugins[name]
        except KeyError:
            raise PluginError(f"Plugin '{name}' is not loaded") from None

    def list_plugins(self) -> list[dict[str, str]]:
        """List all loaded plugins with their metadata.

        Returns:
            A list of dicts with ``"name"``, ``"version"``, ``"description"``
            and ``"dependencies"`` (comma separated) keys.
        """
        return [
            {
                "name": plugin.name,
                "version": plugin.version,
                "description": plugin.description,
                "dependencies": ", ".join(plugin.dependencies),
            }
            for plugin in self._plugins.values()
        ]

    def active_plugins(self, config: GlobalConfig) -> list[Plugin]:
        """Return the ordered active plugin list selected by *config*.

        Raises:
            PluginError: If ``plugins.enabled`` names a plugin that is not
                loaded.
        """
        if config.plugins.enabled:
            return [self.get_plugin(name) for name in config.plugins.enabled]
        disabled_set = set(config.plugins.disabled)
        return [
            plugin
            for name, plugin in self._plugins.items()
            if name not in disabled_set
        ]

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def get_pipeline(
        self,
        config: GlobalConfig,
        embed_host_message: HostEmbedder = identity_embedder,
    ) -> PipelineConfig:
        """Build (or return the cached) pipeline config for *config*'s active list.

        The cache is cleared whenever :meth:`load_plugin` registers a plugin.

        Raises:
            PluginError: If the active list names an unknown plugin.
            ConfigError: If :func:`~sprig.pipeline.config.build_config`
                rejects the active list.
        """
        plugins = self.active_plugins(config)
        key = (tuple(plugin.name for plugin in plugins), embed_host_message)
        cached: Optional[PipelineConfig] = self._pipelines.get(key)
        if cached is None:
            cached = build_config(plugins, embed_host_message)
            self._pipelines[key] = cached
        return cached

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def cleanup(self) -> None:
        """Forget every loaded plugin and cached pipeline."""
        self._plugins.clear()
        self._pipelines.clear()
