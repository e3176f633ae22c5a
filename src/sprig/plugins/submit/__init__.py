"""The ``submit`` built-in plugin."""

from sprig.plugins.submit.plugin import SubmitPlugin

__all__ = ["SubmitPlugin"]
