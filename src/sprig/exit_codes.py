"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~sprig.exceptions.SprigError` subclass.
Shell wrappers and CI scripts can inspect the exit code to tell a broken
plugin pipeline from an unreadable tree document without parsing stderr.

Example::

    $ sprig render page.yaml --plugin submit
    $ echo $?
    8   # EXIT_PIPELINE_ERROR -- "submit" depends on a plugin that is not active
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_TREE_LOAD_ERROR = 7
"""The tree document could not be read or validated."""

EXIT_PIPELINE_ERROR = 8
"""The plugin pipeline could not be built (missing dependencies, duplicate names)."""

EXIT_PLUGIN_ERROR = 10
"""A plugin failed to load or is not registered."""
