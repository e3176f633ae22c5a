"""Abstract base class for render backends.

A backend turns a final node tree into concrete output: terminal renderables,
DOM nodes, widgets. It is a direct structural mapping with one obligation:
it must address nodes with the path-key scheme from :mod:`sprig.paths`, so
that the hover keys it reports back through
:class:`~sprig.events.Hover` / :class:`~sprig.events.Unhover` match the keys
it highlights on the next render.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Set
from typing import Any

from sprig.nodes import Node


class RenderBackend(ABC):
    """Base class for all render backends."""

    @abstractmethod
    def render(self, tree: Node, hovered_keys: Set[str] = frozenset()) -> Any:
        """Map *tree* to the backend's output type.

        Args:
            tree: The fully rewritten tree.
            hovered_keys: Path keys of nodes currently under the pointer.

        Returns:
            Backend-specific output.
        """
        ...
