"""The ``trim`` built-in plugin."""

from sprig.plugins.trim.plugin import TrimPlugin

__all__ = ["TrimPlugin"]
