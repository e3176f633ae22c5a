"""Tests for the External / PluginLocal event bridge."""

from __future__ import annotations

from sprig.events import PluginEvent
from sprig.nodes import Column, Interactive, LineEdit, Text
from sprig.pipeline.config import identity_embedder
from sprig.pipeline.envelope import (
    CollapsedHandler,
    EmbeddedHandler,
    External,
    PluginLocal,
    collapse,
    collapse_action,
    collapse_handler,
    embed,
)


def _wrap(event):
    return {"framework": event}


class TestEmbed:
    def test_actions_become_external(self) -> None:
        tree = Column((Interactive("save", Text("Save")), LineEdit(str.upper, "x")))
        embedded = embed(tree)
        assert embedded.children[0] == Interactive(External("save"), Text("Save"))
        handler = embedded.children[1].on_change
        assert handler == EmbeddedHandler(str.upper)
        assert handler("abc") == External("ABC")

    def test_tree_without_actions_unchanged(self) -> None:
        tree = Column((Text("a"),))
        assert embed(tree) is tree


class TestCollapseAction:
    def test_external_unwrapped(self) -> None:
        assert collapse_action(External("save"), "tabs", _wrap) == "save"

    def test_plugin_local_becomes_host_message(self) -> None:
        result = collapse_action(PluginLocal("2"), "tabs", _wrap)
        assert result == {"framework": PluginEvent("tabs", "2")}

    def test_identity_embedder(self) -> None:
        assert collapse_action(PluginLocal("2"), "tabs", identity_embedder) == PluginEvent(
            "tabs", "2"
        )

    def test_other_values_pass_through(self) -> None:
        assert collapse_action("raw", "tabs", _wrap) == "raw"


class TestCollapseHandler:
    def test_embedded_handler_unwrapped_to_original(self) -> None:
        assert collapse_handler(EmbeddedHandler(str.upper), "p", _wrap) is str.upper

    def test_plugin_handler_collapsed_on_call(self) -> None:
        def local(value: str):
            return PluginLocal(value)

        handler = collapse_handler(local, "search", _wrap)
        assert isinstance(handler, CollapsedHandler)
        assert handler("query") == {"framework": PluginEvent("search", "query")}

    def test_plugin_handler_can_forward_host_action(self) -> None:
        handler = collapse_handler(lambda value: External(("host", value)), "p", _wrap)
        assert handler("x") == ("host", "x")


class TestRoundTrip:
    def test_collapse_undoes_embed(self) -> None:
        tree = Column((Interactive("save", Text("Save")), LineEdit(str.upper, "x")))
        assert collapse(embed(tree), "any", _wrap) == tree

    def test_new_local_node_collapsed(self) -> None:
        tree = Interactive(PluginLocal("open"), Text("Intro"))
        assert collapse(tree, "accordion", _wrap) == Interactive(
            {"framework": PluginEvent("accordion", "open")}, Text("Intro")
        )
