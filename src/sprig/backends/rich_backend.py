"""Terminal render backend built on :mod:`rich`.

Maps each node variant to a Rich renderable:

* ``Row`` becomes a borderless :class:`~rich.table.Table` grid, with
  ``FlexSpace`` children taking the spare width.
* ``Column`` and ``Stack`` become a :class:`~rich.console.Group` (a terminal
  cannot overlay, so stack layers are drawn one after another).
* ``Decorated`` becomes a :class:`~rich.panel.Panel` when it has a border,
  otherwise a styled :class:`~rich.padding.Padding`.
* ``Interactive`` and ``LineEdit`` are underlined, or drawn with the
  configured hover style when their path key is hovered.

Font sizes and background images have no terminal equivalent and are ignored.
"""

from __future__ import annotations

from collections.abc import Set
from typing import Optional

from rich import box
from rich.color import Color, ColorParseError
from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.style import Style
from rich.styled import Styled
from rich.table import Table
from rich.text import Text as RichText

from sprig.backends.base import RenderBackend
from sprig.models import Attributes, BorderStyle, RenderConfig
from sprig.nodes import (
    Column,
    Decorated,
    Empty,
    FixedSpace,
    FlexSpace,
    Interactive,
    LineEdit,
    Node,
    Row,
    Stack,
    Tagged,
    Text,
)
from sprig.paths import ROOT_KEY, child_key

_BOXES = {
    BorderStyle.SOLID: box.SQUARE,
    BorderStyle.DASHED: box.ASCII,
    BorderStyle.DOTTED: box.MINIMAL,
    BorderStyle.DOUBLE: box.DOUBLE,
}

_DEFAULTS = Attributes()


def _color(value: Optional[str]) -> Optional[str]:
    """Return *value* if Rich can parse it as a colour, else ``None``."""
    if not value or value == "transparent":
        return None
    try:
        Color.parse(value)
    except ColorParseError:
        return None
    return value


def attributes_style(attrs: Attributes) -> Style:
    """Translate node attributes into a Rich text style.

    The default font colour is left to the terminal theme.
    """
    font_color = None if attrs.font_color == _DEFAULTS.font_color else attrs.font_color
    return Style(
        color=_color(font_color),
        bgcolor=_color(attrs.background_color),
    )


class RichBackend(RenderBackend):
    """Render node trees to Rich renderables.

    Args:
        config: Render settings (hover style, path annotations, pixel scale).
            Defaults to :class:`~sprig.models.RenderConfig` defaults.

    Example::

        from rich.console import Console

        console = Console()
        console.print(RichBackend().render(tree, {"root.0"}))
    """

    def __init__(self, config: Optional[RenderConfig] = None) -> None:
        self._config = config or RenderConfig()

    def render(
        self, tree: Node, hovered_keys: Set[str] = frozenset()
    ) -> RenderableType:
        return self._render(tree, ROOT_KEY, hovered_keys)

    # ------------------------------------------------------------------
    # Per-variant rendering
    # ------------------------------------------------------------------

    def _render(self, node: Node, key: str, hovered: Set[str]) -> RenderableType:
        if isinstance(node, Text):
            return RichText(node.content)
        if isinstance(node, (Empty, FlexSpace)):
            return RichText("")
        if isinstance(node, FixedSpace):
            return RichText(" " * (node.pixels // self._config.pixels_per_cell))
        if isinstance(node, Tagged):
            return self._render(node.child, child_key(key, 0), hovered)
        if isinstance(node, Decorated):
            return self._render_decorated(node, key, hovered)
        if isinstance(node, Row):
            return self._render_row(node, key, hovered)
        if isinstance(node, (Column, Stack)):
            return Group(
                *(
                    self._render(kid, child_key(key, pos), hovered)
                    for pos, kid in enumerate(node.children)
                )
            )
        if isinstance(node, Interactive):
            inner = self._render(node.child, child_key(key, 0), hovered)
            return self._annotate(Styled(inner, self._target_style(key, hovered)), key)
        if isinstance(node, LineEdit):
            field_text = RichText(f"[ {node.value} ]", style=self._target_style(key, hovered))
            return self._annotate(field_text, key)
        raise TypeError(f"Not a sprig node: {node!r}")

    def _render_decorated(
        self, node: Decorated, key: str, hovered: Set[str]
    ) -> RenderableType:
        attrs = node.attributes
        inner = self._render(node.child, child_key(key, 0), hovered)
        style = attributes_style(attrs)
        pad = attrs.padding // self._config.pixels_per_cell
        if attrs.border_width > 0 and attrs.border_style != BorderStyle.NONE:
            frame = _BOXES.get(attrs.border_style, box.SQUARE)
            if attrs.rounding > 0 and attrs.border_style == BorderStyle.SOLID:
                frame = box.ROUNDED
            return Panel(
                inner,
                box=frame,
                style=style,
                border_style=Style(color=_color(attrs.border_color)),
                padding=(0, pad),
                expand=False,
            )
        return Padding(inner, (0, pad), style=style, expand=False)

    def _render_row(self, node: Row, key: str, hovered: Set[str]) -> RenderableType:
        grid = Table.grid(padding=(0, 1))
        cells: list[RenderableType] = []
        for pos, kid in enumerate(node.children):
            if isinstance(kid, FlexSpace):
                grid.add_column(ratio=1)
            else:
                grid.add_column()
            cells.append(self._render(kid, child_key(key, pos), hovered))
        if cells:
            grid.add_row(*cells)
        return grid

    def _target_style(self, key: str, hovered: Set[str]) -> Style:
        if key in hovered:
            return Style.parse(self._config.hover_style)
        return Style(underline=True)

    def _annotate(self, renderable: RenderableType, key: str) -> RenderableType:
        if not self._config.show_paths:
            return renderable
        grid = Table.grid(padding=(0, 1))
        grid.add_column(style="dim")
        grid.add_column()
        grid.add_row(key, renderable)
        return grid
