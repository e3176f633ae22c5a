"""Tests for sprig.runtime.render and the Rich backend."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel

from sprig.backends.base import RenderBackend
from sprig.backends.rich_backend import RichBackend, attributes_style
from sprig.models import Attributes, BorderStyle, RenderConfig
from sprig.nodes import (
    Column,
    Decorated,
    FixedSpace,
    FlexSpace,
    Interactive,
    LineEdit,
    Node,
    Row,
    Tagged,
    Text,
)
from sprig.pipeline import build_config
from sprig.plugins.trim import TrimPlugin
from sprig.runtime import render
from sprig.state import FrameworkState
from sprig.tags import Tag


class RecordingBackend(RenderBackend):
    """Backend that returns what it was given."""

    def render(self, tree: Node, hovered_keys=frozenset()) -> Any:
        return tree, hovered_keys


def _text_of(renderable, **console_kwargs) -> str:
    console = Console(width=80, record=True, color_system=None, **console_kwargs)
    console.print(renderable)
    return console.export_text()


class TestRender:
    def test_backend_gets_final_tree_and_hover(self) -> None:
        config = build_config([TrimPlugin(max_length=2)])
        state = FrameworkState(hovered_keys={"root.0"})
        tree, hovered = render(config, state, Text("abcd"), RecordingBackend())
        assert tree == Row((Text("ab"), Text("...")))
        assert hovered == frozenset({"root.0"})

    def test_render_is_pure(self, sample_tree) -> None:
        config = build_config([TrimPlugin(max_length=3)])
        state = FrameworkState()
        first = render(config, state, sample_tree, RecordingBackend())
        second = render(config, state, sample_tree, RecordingBackend())
        assert first == second

    def test_default_backend_is_rich(self, sample_tree) -> None:
        output = render(build_config([]), FrameworkState(), sample_tree)
        text = _text_of(output)
        assert "Settings" in text
        assert "[ untitled ]" in text


class TestRichBackend:
    def test_row_and_column_layout(self) -> None:
        tree = Column((Row((Text("left"), FlexSpace(), Text("right"))), Text("below")))
        lines = _text_of(RichBackend().render(tree)).splitlines()
        assert "left" in lines[0] and "right" in lines[0]
        assert "below" in lines[1]

    def test_tagged_renders_child(self) -> None:
        assert "Title" in _text_of(RichBackend().render(Tagged(Tag.HEADING, Text("Title"))))

    def test_fixed_space_scales_by_cell(self) -> None:
        backend = RichBackend(RenderConfig(pixels_per_cell=4))
        renderable = backend.render(FixedSpace(16))
        assert renderable.plain == "    "

    def test_border_becomes_panel(self) -> None:
        node = Decorated(Attributes(border_width=1, rounding=8), Text("boxed"))
        renderable = RichBackend().render(node)
        assert isinstance(renderable, Panel)
        assert "╭" in _text_of(renderable)

    def test_no_border_style(self) -> None:
        node = Decorated(Attributes(border_width=1, border_style=BorderStyle.NONE), Text("x"))
        assert not isinstance(RichBackend().render(node), Panel)

    def test_show_paths_annotates_targets(self) -> None:
        backend = RichBackend(RenderConfig(show_paths=True))
        tree = Column((Text("a"), Interactive("go", Text("Go")), LineEdit(str.upper, "v")))
        text = _text_of(backend.render(tree))
        assert "root.1" in text
        assert "root.2" in text

    def test_attributes_style(self) -> None:
        style = attributes_style(Attributes(font_color="red", background_color="white"))
        assert style.color.name == "red"
        assert style.bgcolor.name == "white"

    def test_default_and_unknown_colors_ignored(self) -> None:
        style = attributes_style(Attributes(background_color="not-a-colour"))
        assert style.color is None
        assert style.bgcolor is None
