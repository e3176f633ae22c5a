"""Dependency validation and the validated pipeline config.

:func:`build_config` is the only way to obtain a :class:`PipelineConfig`.
It checks that every declared dependency names some *other* plugin in the
list and that no two plugins share a name. Dependencies are matched by name
only: their position in the list and cycles between them are not checked.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from sprig.exceptions import DependenciesMissing, DuplicatePluginNames, PluginError
from sprig.pipeline.envelope import HostEmbedder

if TYPE_CHECKING:
    from sprig.events import FrameworkEvent
    from sprig.plugins.base import Plugin

logger = logging.getLogger(__name__)

_VALIDATED = object()


def identity_embedder(event: FrameworkEvent) -> Any:
    """Default host embedding: the host message *is* the framework event."""
    return event


@dataclass(frozen=True)
class PipelineConfig:
    """An ordered, validated plugin list plus the host-message embedding.

    Attributes:
        plugins: Plugins in pipeline order. Each plugin sees the output of
            all plugins before it.
        embed_host_message: Turns a :class:`~sprig.events.FrameworkEvent`
            into the host's own message type.
    """

    plugins: tuple[Plugin, ...]
    embed_host_message: HostEmbedder = identity_embedder
    _token: object = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self._token is not _VALIDATED:
            raise PluginError("PipelineConfig must be created with build_config()")

    @property
    def plugin_names(self) -> list[str]:
        return [plugin.name for plugin in self.plugins]

    def find_plugin(self, name: str) -> Optional[Plugin]:
        """Return the first plugin called *name*, or ``None``."""
        for plugin in self.plugins:
            if plugin.name == name:
                return plugin
        return None


def missing_dependencies(plugins: list[Plugin]) -> list[str]:
    """Return one entry per dependency not satisfied by another plugin.

    Args:
        plugins: The ordered plugin list.

    Returns:
        The unresolved dependency names in plugin-list order, duplicates
        retained. Empty when every dependency is satisfied.
    """
    missing: list[str] = []
    for index, plugin in enumerate(plugins):
        others = {
            other.name for pos, other in enumerate(plugins) if pos != index
        }
        for dependency in plugin.dependencies:
            if dependency not in others:
                missing.append(dependency)
    return missing


def build_config(
    plugins: Iterable[Plugin],
    embed_host_message: HostEmbedder = identity_embedder,
) -> PipelineConfig:
    """Validate an ordered plugin list and build a :class:`PipelineConfig`.

    Args:
        plugins: Plugins in the order they should rewrite the tree.
        embed_host_message: Wraps framework events raised by plugin-introduced
            nodes into the host's message type. Defaults to passing the
            :class:`~sprig.events.FrameworkEvent` through as is.

    Returns:
        A config whose ``plugins`` preserve the input order exactly.

    Raises:
        DependenciesMissing: If any declared dependency is not the name of
            another plugin in the list.
        DuplicatePluginNames: If two plugins share a name.
    """
    ordered = list(plugins)

    missing = missing_dependencies(ordered)
    if missing:
        logger.debug("Rejecting plugin list %s: missing %s",
                     [p.name for p in ordered], missing)
        raise DependenciesMissing(missing)

    counts = Counter(plugin.name for plugin in ordered)
    duplicates = [name for name, count in counts.items() if count > 1]
    if duplicates:
        raise DuplicatePluginNames(duplicates)

    logger.debug("Built pipeline: %s", [p.name for p in ordered])
    return PipelineConfig(tuple(ordered), embed_host_message, _VALIDATED)
