"""Typer application and CLI entry point for sprig.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``render``, ``plugins``, ``inspect``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, invokes the Typer app, and
maps :class:`~sprig.exceptions.SprigError` to its exit code. Any other
unhandled exception is written to a crash log under the config directory.

See Also:
    :mod:`sprig.config`: Settings resolution.
    :mod:`sprig.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from sprig import __version__
from sprig.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="sprig",
    help="Render declarative UI trees through a plugin rewrite pipeline.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

from sprig.commands.config import config_app  # noqa: E402
from sprig.commands.inspect import inspect_app  # noqa: E402
from sprig.commands.plugins import plugins_app  # noqa: E402
from sprig.commands.render import render_command  # noqa: E402

app.command("render")(render_command)
app.add_typer(plugins_app, name="plugins", help="List plugins and validate a pipeline.")
app.add_typer(inspect_app, name="inspect", help="Inspect tree paths and tags.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"sprig {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, console: Any) -> None:
    """Route the ``sprig`` logger through Rich on stderr.

    Warnings are always shown; ``--verbose`` lowers the level to DEBUG so the
    pipeline and plugin manager report what they do.
    """
    from rich.logging import RichHandler

    logger = logging.getLogger("sprig")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = RichHandler(console=console, show_time=False, show_path=verbose)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~sprig.output.OutputManager` and points
    the ``sprig`` logger at its stderr console. The output format comes from
    ``--json``/``--plain`` when given, else from the ``output.format`` setting.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        json_output: Force JSON output format.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output and logging.
    """
    from sprig.config import resolve_config
    from sprig.exceptions import SettingsError
    from sprig.output import OutputFormat, OutputManager, set_output

    cli_format: Optional[str] = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    # Unreadable settings still allow ``sprig config reset``.
    try:
        fmt = OutputFormat(resolve_config(cli_format=cli_format).output.format)
    except SettingsError:
        fmt = OutputFormat(cli_format or OutputFormat.AUTO.value)

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)
    _configure_logging(verbose, output.stderr_console)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from sprig.config import get_config_dir

    logs_dir = get_config_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``sprig`` console script.

    Unhandled :class:`~sprig.exceptions.SprigError` instances cause a clean
    exit with the error's ``exit_code``. All other exceptions produce a crash
    log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from sprig.exceptions import SprigError
        from sprig.output import error

        if isinstance(exc, SprigError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
