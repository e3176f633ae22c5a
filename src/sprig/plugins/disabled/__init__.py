"""The ``disabled`` built-in plugin."""

from sprig.plugins.disabled.plugin import DisabledPlugin

__all__ = ["DisabledPlugin"]
