"""Plugin commands -- list registered plugins and check a pipeline.

Provides the ``sprig plugins`` sub-command group, plus
:func:`load_pipeline`, which the other commands use to turn settings and
``--plugin`` flags into a validated
:class:`~sprig.pipeline.config.PipelineConfig`.
"""

from __future__ import annotations

from typing import Optional

import typer

from sprig.exceptions import DependenciesMissing, SprigError
from sprig.models import GlobalConfig
from sprig.output import error, get_output, success, suggest
from sprig.pipeline.config import PipelineConfig
from sprig.plugins.manager import PluginManager


plugins_app = typer.Typer(no_args_is_help=True)


def load_manager(config: GlobalConfig) -> PluginManager:
    """Return a manager holding the built-ins plus any entry-point plugins."""
    manager = PluginManager()
    manager.load_builtins(config)
    manager.discover(config)
    return manager


def load_pipeline(
    plugins: Optional[list[str]] = None,
) -> tuple[GlobalConfig, PipelineConfig]:
    """Resolve settings and build the active pipeline.

    Args:
        plugins: Plugin names from ``--plugin`` flags, in pipeline order.

    Returns:
        A ``(GlobalConfig, PipelineConfig)`` tuple.

    Raises:
        typer.Exit: With the error's exit code when the settings are invalid,
            a plugin is unknown, or the pipeline fails validation.
    """
    from sprig.config import resolve_config

    try:
        config = resolve_config(cli_plugins=plugins)
        manager = load_manager(config)
        pipeline = manager.get_pipeline(config)
    except DependenciesMissing as exc:
        error(str(exc))
        suggest("Add the missing plugins with --plugin, or drop the plugins that need them.")
        raise typer.Exit(code=exc.exit_code) from None
    except SprigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    return config, pipeline


@plugins_app.command("list")
def plugins_list() -> None:
    """List every registered plugin and whether it is active.

    Example::

        sprig plugins list
        sprig --json plugins list
    """
    from sprig.config import resolve_config

    try:
        config = resolve_config()
        manager = load_manager(config)
        active = {plugin.name for plugin in manager.active_plugins(config)}
    except SprigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    headers = ["Name", "Version", "Active", "Depends on", "Description"]
    rows = [
        [
            info["name"],
            info["version"],
            "yes" if info["name"] in active else "",
            info["dependencies"] or "-",
            info["description"],
        ]
        for info in manager.list_plugins()
    ]
    get_output().print_table(headers, rows, title=f"Plugins ({len(rows)})")


@plugins_app.command("check")
def plugins_check(
    plugin: Optional[list[str]] = typer.Option(
        None, "--plugin", "-P", help="Plugin to activate, in pipeline order (repeatable)."
    ),
) -> None:
    """Validate the active plugin list without rendering anything.

    Exits with code 8 if a dependency is missing or a name is duplicated.

    Example::

        sprig plugins check
        sprig plugins check -P submit -P rounded
    """
    _, pipeline = load_pipeline(plugin)
    order = " -> ".join(pipeline.plugin_names) or "(empty)"
    success(f"Pipeline OK: {order}")
