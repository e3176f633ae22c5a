"""The ``accordion`` built-in plugin."""

from sprig.plugins.accordion.plugin import AccordionPlugin

__all__ = ["AccordionPlugin"]
