"""Inspect commands -- examine trees and the tag vocabulary.

Provides the ``sprig inspect`` sub-command group with read-only commands:
``paths`` lists the path key of every node in a tree (after the active
plugins have rewritten it, unless ``--raw`` is given), and ``tags`` lists the
semantic tags plugins recognise.
"""

from __future__ import annotations

from typing import Optional

import typer

from sprig.nodes import Interactive, LineEdit, Node, Tagged, Text
from sprig.output import error, get_output


inspect_app = typer.Typer(no_args_is_help=True)


def _describe(node: Node) -> str:
    """Short human-readable summary of a node's own fields."""
    if isinstance(node, Text):
        return repr(node.content)
    if isinstance(node, Tagged):
        return node.tag.value
    if isinstance(node, Interactive):
        from sprig.loader import dump_action

        return f"action={dump_action(node.action)}"
    if isinstance(node, LineEdit):
        return f"value={node.value!r}"
    return ""


@inspect_app.command("paths")
def inspect_paths(
    tree_file: str = typer.Argument(
        help="Tree document (JSON or YAML), or '-' for stdin."
    ),
    plugin: Optional[list[str]] = typer.Option(
        None, "--plugin", "-P", help="Plugin to activate, in pipeline order (repeatable)."
    ),
    raw: bool = typer.Option(
        False, "--raw", help="List the tree as loaded, before any plugin runs."
    ),
) -> None:
    """List every node of a tree with its path key.

    Path keys are what ``sprig render --hover/--click`` accept.

    Example::

        sprig inspect paths page.yaml
        sprig inspect paths page.yaml --raw
    """
    from sprig.exceptions import SprigError
    from sprig.loader import load_tree
    from sprig.paths import iter_paths
    from sprig.pipeline.rewrite import rewrite_tree

    try:
        tree = load_tree(tree_file)
    except SprigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not raw:
        from sprig.commands.plugins import load_pipeline

        _, pipeline = load_pipeline(plugin)
        tree = rewrite_tree(pipeline, {}, tree)

    rows = [
        [key, type(node).__name__, _describe(node)]
        for key, node in iter_paths(tree)
    ]
    get_output().print_table(["Path", "Node", "Detail"], rows, title="Tree paths")


@inspect_app.command("tags")
def inspect_tags() -> None:
    """List the semantic tags a tree document may use.

    Example::

        sprig inspect tags
    """
    from sprig.tags import Tag

    rows = [[member.value, member.name] for member in Tag]
    get_output().print_table(["Tag", "Name"], rows, title=f"Tags ({len(rows)})")
