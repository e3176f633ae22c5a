"""The ``tabs`` built-in plugin."""

from sprig.plugins.tabs.plugin import TabsPlugin

__all__ = ["TabsPlugin"]
