"""Built-in CLI sub-commands for sprig.

* :mod:`~sprig.commands.render` -- run a tree through the plugin pipeline.
* :mod:`~sprig.commands.plugins` -- list plugins and validate a pipeline.
* :mod:`~sprig.commands.inspect` -- examine tree paths and the tag set.
* :mod:`~sprig.commands.config` -- view and modify global settings.

Multi-command groups export a :class:`typer.Typer` sub-application; the
single ``render`` command is a plain callback registered on the root app.
"""
