"""Render backends -- turn a final node tree into concrete output.

* :class:`RenderBackend` -- abstract interface every backend implements.
* :class:`RichBackend` -- terminal rendering with :mod:`rich`, used by the
  ``sprig render`` command and as the default for :func:`~sprig.runtime.render`.
"""

from sprig.backends.base import RenderBackend
from sprig.backends.rich_backend import RichBackend

__all__ = ["RenderBackend", "RichBackend"]
