"""The ``rounded`` built-in plugin."""

from sprig.plugins.rounded.plugin import RoundedPlugin

__all__ = ["RoundedPlugin"]
