"""The ``background`` built-in plugin."""

from sprig.plugins.background.plugin import BackgroundPlugin

__all__ = ["BackgroundPlugin"]
