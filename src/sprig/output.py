"""Terminal output for the ``sprig`` command line.

Data and diagnostics are kept apart: rendered trees, tables and JSON go to
stdout so they can be piped, while status lines, warnings and errors go to
stderr. Styling is only applied when stdout is a terminal and colour has not
been switched off with ``NO_COLOR``, ``TERM=dumb`` or ``--no-color``.

:func:`~sprig.app.main_callback` builds one :class:`OutputManager` per
invocation and installs it with :func:`set_output`. Commands then call the
module-level helpers (:func:`info`, :func:`error`, ...), which forward to it.
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from rich.console import Console, RenderableType
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How command results are written to stdout.

    ``AUTO`` picks ``RICH`` on a colour-capable terminal and ``PLAIN``
    everywhere else.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


@dataclass(frozen=True)
class _Channel:
    """Presentation of one diagnostic level on stderr."""

    prefix: str
    markup: str
    quiet_hides: bool = False
    verbose_only: bool = False


_CHANNELS = {
    "info": _Channel("", "{}", quiet_hides=True),
    "success": _Channel("", "[green]{}[/green]", quiet_hides=True),
    "suggest": _Channel("→ ", "[dim]{}[/dim]", quiet_hides=True),
    "warning": _Channel("Warning: ", "[yellow]Warning:[/yellow] {}"),
    "error": _Channel("Error: ", "[bold red]Error:[/bold red] {}"),
    "debug": _Channel("[debug] ", "[dim]\\[debug] {}[/dim]", verbose_only=True),
}


class OutputManager:
    """Holds the output preferences of one CLI invocation.

    Args:
        format: Requested stdout format; ``AUTO`` is resolved here.
        no_color: Force uncoloured output on both streams.
        quiet: Hide info, success and suggestion lines.
        verbose: Show debug lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._format = _resolve_format(format, self._no_color)

        rich_stdout = self._format == OutputFormat.RICH
        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color or not rich_stdout,
            force_terminal=rich_stdout,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def stderr_console(self) -> Console:
        """Console bound to stderr; log records are routed through it."""
        return self._stderr

    # ------------------------------------------------------------------ #
    # stdout
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def print_json(self, data: Any) -> None:
        """Write *data* as indented JSON, syntax-highlighted in Rich mode."""
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format == OutputFormat.RICH:
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
            return
        self.print_data(text)

    def print_renderable(self, renderable: RenderableType) -> None:
        """Write a Rich renderable, such as a rendered tree, to stdout."""
        self._stdout.print(renderable)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write rows under *headers*.

        JSON mode emits a list of header-keyed objects and plain mode emits
        tab-separated lines with the header first. The title is only shown
        in Rich mode.
        """
        if self._format == OutputFormat.JSON:
            self.print_json([dict(zip(headers, row)) for row in rows])
            return
        if self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return

        table = Table(*headers, title=title, header_style="bold cyan")
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def _emit(self, level: str, message: str) -> None:
        channel = _CHANNELS[level]
        if channel.quiet_hides and self._quiet:
            return
        if channel.verbose_only and not self._verbose:
            return
        if self._no_color:
            print(channel.prefix + message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(channel.markup.format(escape(message)))

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def suggest(self, message: str) -> None:
        """Print a hint about what to try next."""
        self._emit("suggest", message)

    def warning(self, message: str) -> None:
        """Print a warning. Shown even with ``--quiet``."""
        self._emit("warning", message)

    def error(self, message: str) -> None:
        """Print an error. Shown even with ``--quiet``."""
        self._emit("error", message)

    def debug(self, message: str) -> None:
        """Print a debug line. Requires ``--verbose``."""
        self._emit("debug", message)


def _resolve_format(requested: OutputFormat, no_color: bool) -> OutputFormat:
    if requested != OutputFormat.AUTO:
        return requested
    if _is_tty() and not no_color:
        return OutputFormat.RICH
    return OutputFormat.PLAIN


def _is_tty() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _should_disable_color() -> bool:
    """``NO_COLOR`` (set to anything) or ``TERM=dumb`` turns colour off."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager so the next call builds a fresh one."""
    global _output
    _output = None


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
