"""Render command -- run a tree document through the plugin pipeline.

``sprig render`` is a small terminal host. It loads a tree document, builds
the pipeline from settings and ``--plugin`` flags, replays hovers, clicks and
text input through :func:`~sprig.runtime.update`, and prints the final tree
with the :class:`~sprig.backends.RichBackend` (or as JSON with ``--json``).

Clicks are resolved against the *current* rewritten tree, so a click can hit a
node that an earlier click made appear (for example a tab's pane).
"""

from __future__ import annotations

from typing import Optional

import typer

from sprig.events import Hover, PluginEvent
from sprig.exceptions import InvalidUsageError, SprigError
from sprig.nodes import Interactive, LineEdit, Node
from sprig.output import debug, error, get_output, info
from sprig.pipeline.config import PipelineConfig
from sprig.state import FrameworkState


def _activate(
    pipeline: PipelineConfig,
    state: FrameworkState,
    tree: Node,
    key: str,
    text: Optional[str] = None,
) -> FrameworkState:
    """Activate the node at *key* in the rewritten tree and apply its event.

    Raises:
        InvalidUsageError: If *key* does not address an interactive node, or
            addresses a line edit without *text* (or vice versa).
    """
    from sprig.loader import dump_action
    from sprig.paths import node_at
    from sprig.pipeline.rewrite import rewrite_tree
    from sprig.runtime import update

    final = rewrite_tree(pipeline, state.plugin_states, tree)
    try:
        target = node_at(final, key)
    except ValueError as exc:
        raise InvalidUsageError(str(exc)) from None

    if isinstance(target, Interactive) and text is None:
        action = target.action
    elif isinstance(target, LineEdit) and text is not None:
        action = target.on_change(text)
    elif text is None:
        raise InvalidUsageError(f"No clickable node at '{key}'")
    else:
        raise InvalidUsageError(f"No line edit at '{key}'")

    if isinstance(action, PluginEvent):
        debug(f"{key}: plugin event {action.plugin}({action.payload!r})")
        return update(pipeline, action, state)
    info(f"{key}: host action {dump_action(action)}")
    return state


def _parse_input(value: str) -> tuple[str, str]:
    key, sep, text = value.partition("=")
    if not sep:
        raise InvalidUsageError(f"Expected KEY=TEXT for --input, got: {value}")
    return key, text


def render_command(
    tree_file: str = typer.Argument(
        help="Tree document (JSON or YAML), or '-' for stdin."
    ),
    plugin: Optional[list[str]] = typer.Option(
        None, "--plugin", "-P", help="Plugin to activate, in pipeline order (repeatable)."
    ),
    hover: Optional[list[str]] = typer.Option(
        None, "--hover", help="Path key to mark as hovered (repeatable)."
    ),
    click: Optional[list[str]] = typer.Option(
        None, "--click", help="Path key of an interactive node to activate (repeatable, in order)."
    ),
    input_text: Optional[list[str]] = typer.Option(
        None, "--input", help="KEY=TEXT to type into a line edit (repeatable, after clicks)."
    ),
    show_paths: bool = typer.Option(
        False, "--paths", help="Annotate interactive nodes with their path key."
    ),
) -> None:
    """Render a tree document through the active plugins.

    Example::

        sprig render page.yaml
        sprig render page.yaml -P tabs --click root.0.0.1
        sprig --json render page.yaml --input root.2=hello
    """
    from sprig.backends.rich_backend import RichBackend
    from sprig.commands.plugins import load_pipeline
    from sprig.loader import dump_tree, load_tree
    from sprig.output import OutputFormat
    from sprig.pipeline.rewrite import rewrite_tree
    from sprig.runtime import render, update

    config, pipeline = load_pipeline(plugin)

    try:
        tree = load_tree(tree_file)
        state = FrameworkState()
        for key in click or []:
            state = _activate(pipeline, state, tree, key)
        for entry in input_text or []:
            key, text = _parse_input(entry)
            state = _activate(pipeline, state, tree, key, text)
        for key in hover or []:
            state = update(pipeline, Hover(key), state)
    except SprigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    output = get_output()
    if output.format == OutputFormat.JSON:
        final = rewrite_tree(pipeline, state.plugin_states, tree)
        output.print_json(
            {
                "plugins": pipeline.plugin_names,
                "tree": dump_tree(final),
                "state": {
                    "hovered_keys": sorted(state.hovered_keys),
                    "plugin_states": dict(state.plugin_states),
                },
            }
        )
        return

    render_config = config.render
    if show_paths:
        render_config = render_config.model_copy(update={"show_paths": True})
    output.print_renderable(render(pipeline, state, tree, RichBackend(render_config)))
