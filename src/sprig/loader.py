"""Load node trees from JSON or YAML documents, and dump them back.

Tree documents describe one node per mapping, selected by its ``type``
field::

    type: column
    children:
      - type: tag
        tag: heading
        child: {type: text, text: Settings}
      - type: line_edit
        action: rename
        value: untitled
      - type: interactive
        action: save
        child: {type: text, text: Save}

Documents are validated against the :data:`~sprig.models.NodeDocument`
models before being converted to :mod:`sprig.nodes` values. A ``line_edit``
document has no callable, so its handler is an :class:`ActionTemplate`
producing ``{"action": <action>, "value": <new text>}``.

The public functions are:

* :func:`load_tree` -- read and parse a document from a file or stdin.
* :func:`parse_tree` -- convert an already-decoded document to a node tree.
* :func:`dump_tree` -- convert a node tree to a JSON-compatible document.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import yaml
from pydantic import TypeAdapter, ValidationError

from sprig.events import Hover, PluginEvent, Unhover
from sprig.exceptions import TreeLoadError
from sprig.models import (
    ColumnDocument,
    DecoratedDocument,
    EmptyDocument,
    FixedSpaceDocument,
    FlexSpaceDocument,
    InteractiveDocument,
    LineEditDocument,
    NodeDocument,
    RowDocument,
    StackDocument,
    TagDocument,
    TextDocument,
)
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
from sprig.pipeline.envelope import CollapsedHandler

_ADAPTER: TypeAdapter[Any] = TypeAdapter(NodeDocument)


@dataclass(frozen=True)
class ActionTemplate:
    """``LineEdit`` handler for document trees: reports the action name and new text."""

    action: str

    def __call__(self, value: str) -> dict[str, str]:
        return {"action": self.action, "value": value}


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_tree(source: str) -> Node:
    """Load a tree document from a file path, or from stdin when *source* is ``-``.

    Supports JSON and YAML. The format is taken from the file extension and
    falls back to content-based detection.

    Raises:
        TreeLoadError: If the source cannot be read, parsed, or validated.
    """
    if source == "-":
        content = sys.stdin.read()
        hint = ""
    else:
        path = Path(source)
        if not path.is_file():
            raise TreeLoadError(f"Tree file not found: {source}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise TreeLoadError(f"Failed to read tree file {source}: {exc}") from exc
        suffix = path.suffix.lower()
        hint = "json" if suffix == ".json" else "yaml" if suffix in (".yaml", ".yml") else ""

    if not content.strip():
        raise TreeLoadError(f"Tree document is empty: {source}")
    return parse_tree(_parse_content(content, hint))


def _parse_content(content: str, hint: str) -> Any:
    """Decode *content* as JSON or YAML, guided by *hint*."""
    if hint == "json" or (not hint and content.lstrip().startswith(("{", "["))):
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise TreeLoadError(f"Invalid JSON tree document: {exc}") from exc
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise TreeLoadError(f"Invalid YAML tree document: {exc}") from exc


def parse_tree(data: Any) -> Node:
    """Validate a decoded tree document and convert it to a node tree.

    Raises:
        TreeLoadError: If *data* does not match the document schema.
    """
    try:
        document = _ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise TreeLoadError(f"Invalid tree document: {exc}") from exc
    return _to_node(document)


def _to_node(document: Any) -> Node:
    converter = _CONVERTERS[type(document)]
    return converter(document)


_CONVERTERS: dict[type, Callable[[Any], Node]] = {
    EmptyDocument: lambda doc: Empty(),
    TextDocument: lambda doc: Text(doc.text),
    DecoratedDocument: lambda doc: Decorated(doc.attributes, _to_node(doc.child)),
    RowDocument: lambda doc: Row(tuple(_to_node(kid) for kid in doc.children)),
    ColumnDocument: lambda doc: Column(tuple(_to_node(kid) for kid in doc.children)),
    StackDocument: lambda doc: Stack(tuple(_to_node(kid) for kid in doc.children)),
    InteractiveDocument: lambda doc: Interactive(doc.action, _to_node(doc.child)),
    LineEditDocument: lambda doc: LineEdit(ActionTemplate(doc.action), doc.value),
    TagDocument: lambda doc: Tagged(doc.tag, _to_node(doc.child)),
    FlexSpaceDocument: lambda doc: FlexSpace(),
    FixedSpaceDocument: lambda doc: FixedSpace(doc.pixels),
}


# ---------------------------------------------------------------------------
# Dumping
# ---------------------------------------------------------------------------


def dump_action(action: Any) -> Any:
    """Return a JSON-compatible description of an action value."""
    if isinstance(action, PluginEvent):
        return {"plugin": action.plugin, "payload": action.payload}
    if isinstance(action, (Hover, Unhover)):
        return {type(action).__name__.lower(): action.key}
    if action is None or isinstance(action, (str, int, float, bool, list, dict)):
        return action
    return repr(action)


def _dump_handler(handler: Any) -> str:
    if isinstance(handler, ActionTemplate):
        return handler.action
    if isinstance(handler, CollapsedHandler):
        return f"plugin:{handler.plugin}"
    return getattr(handler, "__name__", repr(handler))


def dump_tree(node: Node) -> dict[str, Any]:
    """Convert *node* to a tree document.

    Plugin events become ``{"plugin": ..., "payload": ...}`` actions; handlers
    other than :class:`ActionTemplate` are described by name. The result is
    for display: :func:`parse_tree` reads it back exactly only when the tree
    holds plain actions and :class:`ActionTemplate` handlers. Dumped plugin
    events come back as plain dict actions, and other handlers come back as
    an :class:`ActionTemplate` named after the dumped description (for
    example ``"plugin:tabs"``).
    """
    if isinstance(node, Empty):
        return {"type": "empty"}
    if isinstance(node, Text):
        return {"type": "text", "text": node.content}
    if isinstance(node, Decorated):
        return {
            "type": "decorated",
            "attributes": node.attributes.model_dump(mode="json", exclude_defaults=True),
            "child": dump_tree(node.child),
        }
    if isinstance(node, Row):
        return {"type": "row", "children": [dump_tree(kid) for kid in node.children]}
    if isinstance(node, Column):
        return {"type": "column", "children": [dump_tree(kid) for kid in node.children]}
    if isinstance(node, Stack):
        return {"type": "stack", "children": [dump_tree(kid) for kid in node.children]}
    if isinstance(node, Interactive):
        return {
            "type": "interactive",
            "action": dump_action(node.action),
            "child": dump_tree(node.child),
        }
    if isinstance(node, LineEdit):
        return {
            "type": "line_edit",
            "action": _dump_handler(node.on_change),
            "value": node.value,
        }
    if isinstance(node, Tagged):
        return {"type": "tag", "tag": node.tag.value, "child": dump_tree(node.child)}
    if isinstance(node, FlexSpace):
        return {"type": "flex_space"}
    if isinstance(node, FixedSpace):
        return {"type": "fixed_space", "pixels": node.pixels}
    raise TypeError(f"Not a sprig node: {node!r}")
