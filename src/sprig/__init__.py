"""sprig -- a declarative UI tree with a plugin rewrite pipeline.

Applications describe their interface as an immutable tree of nodes
(:mod:`sprig.nodes`). An ordered list of plugins rewrites that tree before a
backend draws it, and each plugin may keep a small string-keyed state that
only its own events can change.

Typical usage::

    from sprig import nodes, runtime
    from sprig.pipeline import build_config
    from sprig.plugins.tabs import TabsPlugin
    from sprig.state import FrameworkState

    config = build_config([TabsPlugin()])
    state = FrameworkState()
    output = runtime.render(config, state, tree)
    state = runtime.update(config, event, state)

Modules:
    nodes: Node types and structural traversal.
    pipeline: Plugin validation, the event envelope and the rewrite fold.
    runtime: The ``render`` and ``update`` entry points.
    state: Immutable framework state.
    plugins: Plugin base classes, the registry and built-in plugins.
    app: Typer application for the ``sprig`` command-line host.
"""

__version__ = "0.1.0"
