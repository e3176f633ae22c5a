"""Exception hierarchy for sprig.

All exceptions inherit from :class:`SprigError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`sprig.exit_codes`.
The top-level error handler in :func:`sprig.app.main` catches
``SprigError`` and exits with the appropriate code.

Subclass hierarchy::

    SprigError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- TreeLoadError           (exit 7)
    +-- ConfigError             (exit 8)
    |   +-- DependenciesMissing
    |   +-- DuplicatePluginNames
    +-- PluginError             (exit 10)
    +-- SettingsError           (exit 1)

Only :class:`ConfigError` and its subclasses come out of the rewrite core,
and only from :func:`~sprig.pipeline.config.build_config`. Stale plugin
events and unrecognised node shapes are not errors at all.
"""

from __future__ import annotations

from sprig.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PIPELINE_ERROR,
    EXIT_PLUGIN_ERROR,
    EXIT_TREE_LOAD_ERROR,
)


class SprigError(Exception):
    """Base exception for all sprig errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`sprig.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SprigError):
    """Raised for invalid CLI arguments such as an unknown path key."""

    exit_code = EXIT_INVALID_USAGE


class TreeLoadError(SprigError):
    """Raised when a tree document cannot be read, parsed, or validated."""

    exit_code = EXIT_TREE_LOAD_ERROR


class ConfigError(SprigError):
    """Raised when an ordered plugin list cannot become a pipeline config.

    The host is expected to show a fallback view; neither
    :func:`~sprig.runtime.render` nor :func:`~sprig.runtime.update` can be
    called without a valid config.
    """

    exit_code = EXIT_PIPELINE_ERROR


class DependenciesMissing(ConfigError):
    """One or more declared plugin dependencies are not in the plugin list.

    Attributes:
        missing: One entry per unresolved ``(plugin, dependency)`` reference,
            in plugin-list order. The same name appears several times when
            several plugins miss it.
    """

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            "Missing plugin dependencies: " + ", ".join(self.missing)
        )


class DuplicatePluginNames(ConfigError):
    """Two or more plugins in one list share a name.

    Attributes:
        names: Each duplicated name, once, in first-seen order.
    """

    def __init__(self, names: list[str]):
        self.names = list(names)
        super().__init__("Duplicate plugin names: " + ", ".join(self.names))


class PluginError(SprigError):
    """Raised when a plugin fails to load or is looked up but not registered."""

    exit_code = EXIT_PLUGIN_ERROR


class SettingsError(SprigError):
    """Raised for settings problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
