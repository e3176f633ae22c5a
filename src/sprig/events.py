"""Framework events routed back into :func:`~sprig.runtime.update`.

Three kinds exist:

* :class:`Hover` / :class:`Unhover` -- the pointer entered or left the node
  at a path key (see :mod:`sprig.paths`).
* :class:`PluginEvent` -- a plugin-private payload raised by a node a plugin
  introduced during rewriting, addressed to that plugin by name.

Hosts receive :class:`PluginEvent` values wrapped in their own message type by
the config's ``embed_host_message`` function, and hand them back to
:func:`~sprig.runtime.update` unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Hover:
    key: str


@dataclass(frozen=True)
class Unhover:
    key: str


@dataclass(frozen=True)
class PluginEvent:
    """A payload for the reducer of the plugin called ``plugin``."""

    plugin: str
    payload: str


FrameworkEvent = Union[Hover, Unhover, PluginEvent]
