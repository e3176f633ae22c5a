"""Canonical Pydantic models shared across sprig modules.

The models fall into three groups:

**Node attributes** -- :class:`Attributes` and :class:`BorderStyle`, the
styling record carried by :class:`~sprig.nodes.Decorated` nodes.

**Settings models** -- serialised as JSON in the user's config directory:
    :class:`PluginsConfig`, :class:`OutputConfig`, :class:`RenderConfig`
    and :class:`GlobalConfig`.

**Tree document models** -- the validated shape of JSON/YAML tree documents
read by :mod:`sprig.loader`. One model per node variant, joined into the
:data:`NodeDocument` discriminated union on the ``type`` field.

All models use Pydantic v2.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from sprig.tags import Tag


# --- Node attributes ---


class BorderStyle(str, enum.Enum):
    """Line style used when a decorated node has a non-zero border width."""

    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"
    DOUBLE = "double"
    NONE = "none"


class Attributes(BaseModel):
    """Visual attributes of a :class:`~sprig.nodes.Decorated` node.

    Every field has a framework-wide default so plugins can read or override a
    single field without knowing about the others. Instances are frozen; use
    :meth:`with_` to derive a modified copy.

    Example::

        attrs = Attributes(background_color="white")
        rounded = attrs.with_(rounding=16)
        assert rounded.background_color == "white"
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    font_color: str = "black"
    font_size: int = 14
    background_color: str = "transparent"
    background_image: Optional[str] = None
    padding: int = Field(default=0, ge=0)
    rounding: int = Field(default=0, ge=0)
    border_color: str = "black"
    border_width: int = Field(default=0, ge=0)
    border_style: BorderStyle = BorderStyle.SOLID

    def with_(self, **changes: Any) -> Attributes:
        """Return a validated copy with *changes* applied.

        Raises:
            pydantic.ValidationError: If a field name is unknown or a value
                has the wrong type.
        """
        return type(self).model_validate({**self.model_dump(), **changes})


# --- Settings ---


class PluginsConfig(BaseModel):
    """Active plugin list and per-plugin options stored in :class:`GlobalConfig`.

    ``enabled`` is ordered: it *is* the pipeline order. When empty, every
    registered plugin not listed in ``disabled`` is active, in registration
    order.
    """

    enabled: list[str] = Field(default_factory=list)
    disabled: list[str] = Field(default_factory=list)
    options: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description="Per-plugin string options, keyed by plugin name",
    )


class OutputConfig(BaseModel):
    """Default output format, used when neither ``--json`` nor ``--plain`` is given."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class RenderConfig(BaseModel):
    """Settings for the terminal render backend."""

    show_paths: bool = Field(
        default=False, description="Annotate interactive nodes with their path key"
    )
    hover_style: str = Field(
        default="reverse", description="Rich style applied to hovered nodes"
    )
    pixels_per_cell: int = Field(
        default=8, ge=1, description="Pixels per terminal cell for fixed spaces"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/sprig/config.json``.

    Loaded and saved by :func:`~sprig.config.load_global_config` and
    :func:`~sprig.config.save_global_config`. See
    :func:`~sprig.config.resolve_config` for the precedence chain.
    """

    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)


# --- Tree documents ---


class EmptyDocument(BaseModel):
    type: Literal["empty"]


class TextDocument(BaseModel):
    type: Literal["text"]
    text: str


class DecoratedDocument(BaseModel):
    type: Literal["decorated"]
    attributes: Attributes = Field(default_factory=Attributes)
    child: NodeDocument


class RowDocument(BaseModel):
    type: Literal["row"]
    children: list[NodeDocument] = Field(default_factory=list)


class ColumnDocument(BaseModel):
    type: Literal["column"]
    children: list[NodeDocument] = Field(default_factory=list)


class StackDocument(BaseModel):
    type: Literal["stack"]
    children: list[NodeDocument] = Field(default_factory=list)


class InteractiveDocument(BaseModel):
    """An interactive node; ``action`` is any JSON value the host understands."""

    type: Literal["interactive"]
    action: Any = None
    child: NodeDocument


class LineEditDocument(BaseModel):
    """A text input; edits produce ``{"action": action, "value": <text>}``."""

    type: Literal["line_edit"]
    action: str
    value: str = ""


class TagDocument(BaseModel):
    type: Literal["tag"]
    tag: Tag
    child: NodeDocument


class FlexSpaceDocument(BaseModel):
    type: Literal["flex_space"]


class FixedSpaceDocument(BaseModel):
    type: Literal["fixed_space"]
    pixels: int = Field(ge=0)


NodeDocument = Annotated[
    Union[
        EmptyDocument,
        TextDocument,
        DecoratedDocument,
        RowDocument,
        ColumnDocument,
        StackDocument,
        InteractiveDocument,
        LineEditDocument,
        TagDocument,
        FlexSpaceDocument,
        FixedSpaceDocument,
    ],
    Field(discriminator="type"),
]
"""Discriminated union of every tree document shape, keyed on ``type``."""

for _model in (
    DecoratedDocument,
    RowDocument,
    ColumnDocument,
    StackDocument,
    InteractiveDocument,
    TagDocument,
):
    _model.model_rebuild()
