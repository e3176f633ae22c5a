"""Plugin pipeline -- dependency validation, the event bridge, and tree rewriting.

Typical usage::

    from sprig.pipeline import build_config, rewrite_tree

    config = build_config([trim, tabs])
    final = rewrite_tree(config, state.plugin_states, tree)

Sub-modules:

* :mod:`~sprig.pipeline.config` -- :func:`build_config` and the validated
  :class:`PipelineConfig`.
* :mod:`~sprig.pipeline.envelope` -- ``External`` / ``PluginLocal`` wrapping
  of actions for the duration of one plugin's rewrite.
* :mod:`~sprig.pipeline.rewrite` -- the left-to-right fold of plugins over a
  tree.
"""

from sprig.pipeline.config import PipelineConfig, build_config, identity_embedder
from sprig.pipeline.envelope import External, PluginLocal
from sprig.pipeline.rewrite import apply_plugin, rewrite_tree

__all__ = [
    "PipelineConfig",
    "build_config",
    "identity_embedder",
    "External",
    "PluginLocal",
    "apply_plugin",
    "rewrite_tree",
]
