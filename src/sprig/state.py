"""Framework state that survives between renders.

:class:`FrameworkState` holds the set of hovered path keys and one string
key/value record per plugin. It is immutable: every update builds a new
instance and leaves untouched parts shared with the old one, so callers can
compare before and after states directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sprig.pipeline.config import PipelineConfig
    from sprig.plugins.base import Plugin

PluginState = dict[str, str]


@dataclass(frozen=True)
class FrameworkState:
    """Hover keys plus per-plugin state records.

    Attributes:
        hovered_keys: Path keys of the nodes currently under the pointer.
        plugin_states: Stored state per plugin name. A plugin with no entry
            is in its ``init_state``.
    """

    hovered_keys: frozenset[str] = frozenset()
    plugin_states: Mapping[str, PluginState] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "hovered_keys", frozenset(self.hovered_keys))
        if not isinstance(self.plugin_states, MappingProxyType):
            object.__setattr__(
                self, "plugin_states", MappingProxyType(dict(self.plugin_states))
            )

    def state_for(self, plugin: Plugin) -> PluginState:
        """Return a copy of *plugin*'s stored state, or its ``init_state``."""
        stored = self.plugin_states.get(plugin.name)
        if stored is None:
            return dict(plugin.init_state)
        return dict(stored)

    def with_plugin_state(self, name: str, state: PluginState) -> FrameworkState:
        """Return a new state with *name*'s record replaced by *state*."""
        states = dict(self.plugin_states)
        states[name] = dict(state)
        return replace(self, plugin_states=MappingProxyType(states))

    def with_hover(self, key: str) -> FrameworkState:
        if key in self.hovered_keys:
            return self
        return replace(self, hovered_keys=self.hovered_keys | {key})

    def without_hover(self, key: str) -> FrameworkState:
        if key not in self.hovered_keys:
            return self
        return replace(self, hovered_keys=self.hovered_keys - {key})


def prune_plugin_states(
    state: FrameworkState, config: PipelineConfig
) -> FrameworkState:
    """Drop stored state for plugins that are not in *config*.

    Deactivated plugins keep their state by default so they resume where they
    left off when reactivated. Hosts that prefer a fresh start call this after
    rebuilding their config.
    """
    active = {plugin.name for plugin in config.plugins}
    kept = {name: st for name, st in state.plugin_states.items() if name in active}
    if len(kept) == len(state.plugin_states):
        return state
    return replace(state, plugin_states=MappingProxyType(kept))
