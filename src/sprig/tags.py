"""Semantic role markers attached to subtrees with :class:`~sprig.nodes.Tagged`.

A tag says what a subtree *is* ("this is the submit button", "these are
tabs") without saying how it looks. Backends ignore tags entirely; plugin
rewrite rules match on them so they can restyle or restructure a subtree
regardless of its shape.

The catalog is closed: adding a role means adding a member here.
"""

from __future__ import annotations

from enum import Enum


class Tag(str, Enum):
    """Enumeration of semantic roles a subtree can play."""

    # Interaction state
    SUBMIT = "submit"
    ACTIVE = "active"
    INACTIVE = "inactive"
    DISABLED = "disabled"
    SELECTED = "selected"
    FOCUSED = "focused"

    # Text roles
    HEADING = "heading"
    SUBHEADING = "subheading"
    LABEL = "label"
    CAPTION = "caption"
    PARAGRAPH = "paragraph"
    CODE = "code"
    LINK = "link"
    ERROR = "error"
    WARNING = "warning"
    HINT = "hint"

    # Compositional roles
    TABS = "tabs"
    TAB = "tab"
    ACCORDION = "accordion"
    BUTTON = "button"
    CARD = "card"
    SECTION = "section"
    TOOLBAR = "toolbar"
    MENU = "menu"
    MENU_ITEM = "menu_item"
    LIST = "list"
    LIST_ITEM = "list_item"
    FORM = "form"
    FIELD = "field"
    DIALOG = "dialog"
    BADGE = "badge"
    AVATAR = "avatar"
    DIVIDER = "divider"
    HEADER = "header"
    FOOTER = "footer"
    SIDEBAR = "sidebar"
    CONTENT = "content"
    NAVIGATION = "navigation"
    BREADCRUMB = "breadcrumb"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    TOOLTIP = "tooltip"
    PROGRESS = "progress"
    CHECKBOX = "checkbox"
    TOGGLE = "toggle"
