"""Plugin system for sprig -- the plugin contract, discovery, and built-ins.

Third-party packages can register plugins by declaring an entry point in the
``sprig.plugins`` group. At runtime, :class:`PluginManager` loads the
built-ins, discovers those entry points, and builds a validated pipeline from
the ordered active list in the settings.

Key names:

* :class:`Plugin` -- Abstract base class that all plugins must extend.
* :class:`FunctionPlugin` -- A plugin assembled from plain callables.
* :class:`PluginManager` -- Discovers, loads, and selects plugins.
* :func:`toggle_plugin` -- Switch a plugin on or off in an active list.

Example:
    Typical usage from a host::

        from sprig.plugins import PluginManager

        manager = PluginManager()
        manager.load_builtins(global_config)
        manager.discover(global_config)
        config = manager.get_pipeline(global_config)
"""

from sprig.plugins.base import FunctionPlugin, Plugin
from sprig.plugins.manager import PluginManager, builtin_plugins, toggle_plugin

__all__ = [
    "Plugin",
    "FunctionPlugin",
    "PluginManager",
    "builtin_plugins",
    "toggle_plugin",
]
