# dot_gen/constants.py
from __future__ import annotations

from typing import Any

DEFAULT_TITLE = "Data Model"
DEFAULT_VERSION = "1.0"
DEFAULT_DESCRIPTION = ""
DEFAULT_RANKDIR = "TB"
DEFAULT_RELATIONSHIP_TYPE = "one_to_many"
DEFAULT_SPECIAL_SECTION_STYLE = "bold_red"

DEFAULT_NODE_DEFAULTS: dict[str, str] = {"fontname": "Arial", "shape": "none"}

MAIN_TEMPLATE_DEFAULT = "diagram.dot.j2"
ENTITY_TEMPLATE_DEFAULT = "entity.dot.j2"
RELATIONSHIP_TEMPLATE_DEFAULT = "relationship.dot.j2"

# Order matters: StyleDefinition fields are declared in this order.
STYLE_SECTIONS: tuple[str, ...] = (
    "header",
    "body",
    "separator",
    "mandatory",
    "special_section",
    "constraint",
    "relationship",
)

STYLE_PROPERTIES: tuple[str, ...] = (
    "bgcolor",
    "forecolor",
    "color",
    "font",
    "font_size",
    "bold",
    "style",
)

# Last step of the style cascade. Pairs not listed resolve to None.
FALLBACK_STYLES: dict[tuple[str, str], Any] = {
    ("header", "bgcolor"): "#333333",
    ("header", "forecolor"): "white",
    ("header", "font"): "Arial",
    ("header", "font_size"): 12,
    ("body", "bgcolor"): "#FFFFFF",
    ("body", "forecolor"): "#000000",
    ("separator", "color"): "#333333",
    ("mandatory", "bgcolor"): "#FFFFFF",
    ("mandatory", "forecolor"): "#DC2626",
    ("special_section", "bgcolor"): "#FFFFFF",
    ("special_section", "forecolor"): "#DC2626",
    ("constraint", "bgcolor"): "#F5F5F5",
    ("constraint", "forecolor"): "#666666",
    ("relationship", "color"): "#666666",
    ("relationship", "font_size"): 9,
    ("relationship", "style"): "solid",
}

GRAPHVIZ_COMMAND = "dot"
IMAGE_FORMAT_DEFAULT = "png"
RENDER_TIMEOUT_SECONDS = 60.0
