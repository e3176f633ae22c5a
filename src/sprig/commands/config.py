"""Config commands -- view and modify global settings.

Provides the ``sprig config`` sub-command group for reading, updating, and
resetting the user's global settings file
(:class:`~sprig.models.GlobalConfig`): the active plugin list, per-plugin
options, output format and render preferences.
"""

from __future__ import annotations

from typing import Any

import typer

from sprig.output import error, get_output, info, success


config_app = typer.Typer(no_args_is_help=True)

_OPTIONS_PATH = ["plugins", "options"]


@config_app.command("show")
def config_show() -> None:
    """Show current configuration.

    Example::

        sprig config show
        sprig --json config show
    """
    from sprig.config import get_config_dir, load_global_config

    config = load_global_config()
    info(f"Config directory: {get_config_dir()}")
    get_output().print_json(config.model_dump(mode="json"))


def _coerce(key: str, current: Any, value: str) -> Any:
    """Convert *value* to the type of the field it replaces."""
    if isinstance(current, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(current, int):
        try:
            return int(value)
        except ValueError:
            error(f"Expected integer for {key}, got: {value}")
            raise typer.Exit(code=2) from None
    if isinstance(current, list):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g. 'plugins.enabled' or "
        "'plugins.options.trim.max_length')."
    ),
    value: str = typer.Argument(help="Value to set. Lists are comma separated."),
) -> None:
    """Set a configuration value.

    Values are coerced to the existing field's type (bool, int, list or str).
    Keys under ``plugins.options`` may be new, since plugin options are free
    form.

    Example::

        sprig config set plugins.enabled trim,tabs,submit,rounded
        sprig config set plugins.options.trim.max_length 30
        sprig config set render.show_paths true
    """
    from sprig.config import load_global_config, save_global_config
    from sprig.models import GlobalConfig

    config = load_global_config()
    data = config.model_dump(mode="json")

    keys = key.split(".")
    target = data
    for depth, k in enumerate(keys[:-1]):
        under_options = keys[:depth] == _OPTIONS_PATH
        if k not in target and under_options:
            target[k] = {}
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    free_form = keys[: len(_OPTIONS_PATH)] == _OPTIONS_PATH and len(keys) == 4
    if final_key not in target and not free_form:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    coerced = _coerce(key, target.get(final_key), value)
    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except Exception as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset configuration to defaults.

    Example::

        sprig config reset --force
    """
    from sprig.config import save_global_config
    from sprig.models import GlobalConfig

    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
