"""Shared test fixtures for sprig.

Provides isolated settings directories, output-state management, a CLI
runner, and a few small trees and plugins reused across test modules. These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from sprig.models import Attributes
from sprig.nodes import Column, Decorated, Interactive, LineEdit, Node, Row, Tagged, Text
from sprig.output import OutputFormat, OutputManager, reset_output, set_output
from sprig.plugins.base import FunctionPlugin
from sprig.tags import Tag


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _reset_sprig_logger() -> None:
    """Drop handlers the CLI callback attached to the ``sprig`` logger.

    They write to the CliRunner's streams, which are closed once the
    invocation returns.
    """
    yield
    logger = logging.getLogger("sprig")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate settings to a temporary directory.

    Points XDG_CONFIG_HOME at a subdirectory of tmp_path, clears
    SPRIG_PLUGINS and changes the working directory to tmp_path so no
    project ``sprig.json`` leaks in.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setattr("sprig.config._is_xdg_platform", lambda: True)
    monkeypatch.delenv("SPRIG_PLUGINS", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


# ---------------------------------------------------------------------------
# Trees and plugins
# ---------------------------------------------------------------------------


def on_rename(value: str) -> dict[str, str]:
    """Module-level handler so trees built in different tests compare equal."""
    return {"rename": value}


@pytest.fixture
def sample_tree() -> Node:
    """A small form exercising every action-carrying node kind."""
    return Column(
        (
            Tagged(Tag.HEADING, Text("Settings")),
            Decorated(Attributes(padding=8), Text("Name")),
            LineEdit(on_rename, "untitled"),
            Row((Interactive("save", Text("Save")), Interactive("cancel", Text("Cancel")))),
        )
    )


@pytest.fixture
def identity_plugin() -> FunctionPlugin:
    return FunctionPlugin("identity", lambda state, node: node)


@pytest.fixture
def tree_document() -> dict[str, Any]:
    """A tree document as it would appear in a JSON file."""
    return {
        "type": "column",
        "children": [
            {"type": "tag", "tag": "heading", "child": {"type": "text", "text": "Settings"}},
            {
                "type": "tag",
                "tag": "tabs",
                "child": {
                    "type": "row",
                    "children": [
                        {"type": "text", "text": "General"},
                        {"type": "text", "text": "Advanced"},
                    ],
                },
            },
            {"type": "line_edit", "action": "rename", "value": "untitled"},
            {
                "type": "tag",
                "tag": "submit",
                "child": {
                    "type": "interactive",
                    "action": "save",
                    "child": {"type": "text", "text": "Save"},
                },
            },
        ],
    }


@pytest.fixture
def tree_file(tmp_path: Path, tree_document: dict[str, Any]) -> Path:
    path = tmp_path / "page.json"
    path.write_text(json.dumps(tree_document))
    return path
