# dot_gen/styles.py
"""Style cascade: entity-specific definition, then default definition, then
the built-in fallback table. Presence is what counts: `0`, `False` and `""`
set in a definition are returned as-is, only `None` falls through."""
from __future__ import annotations

from typing import Any, Optional

from .config import DiagramConfig, StyleDefinition, normalize_key
from .constants import FALLBACK_STYLES, STYLE_PROPERTIES, STYLE_SECTIONS

# (key in the flat map, section, property)
_ENTITY_STYLE_KEYS: tuple[tuple[str, str, str], ...] = (
    ("header_bg", "header", "bgcolor"),
    ("header_text", "header", "forecolor"),
    ("header_font", "header", "font"),
    ("header_font_size", "header", "font_size"),
    ("header_bold", "header", "bold"),
    ("body_bg", "body", "bgcolor"),
    ("body_text", "body", "forecolor"),
    ("body_font", "body", "font"),
    ("body_font_size", "body", "font_size"),
    ("separator_color", "separator", "color"),
    ("mandatory_bg", "mandatory", "bgcolor"),
    ("mandatory_text", "mandatory", "forecolor"),
    ("special_section_bg", "special_section", "bgcolor"),
    ("special_section_text", "special_section", "forecolor"),
    ("constraint_bg", "constraint", "bgcolor"),
    ("constraint_text", "constraint", "forecolor"),
)

_RELATIONSHIP_STYLE_KEYS: tuple[tuple[str, str, str], ...] = (
    ("color", "relationship", "color"),
    ("font_size", "relationship", "font_size"),
    ("style", "relationship", "style"),
    ("font", "relationship", "font"),
)


def style_text(value: Any) -> str:
    """Render a resolved value the way templates expect it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _checked(section: str, prop: str) -> tuple[str, str]:
    section_key = normalize_key(section)
    prop_key = normalize_key(prop)
    if section_key not in STYLE_SECTIONS:
        raise ValueError(f"unknown style section: {section!r}")
    if prop_key not in STYLE_PROPERTIES:
        raise ValueError(f"unknown style property: {prop!r}")
    return section_key, prop_key


def _lookup(definition: Optional[StyleDefinition], section: str, prop: str) -> Any:
    if definition is None:
        return None
    return getattr(definition.section(section), prop)


class StyleResolver:
    """Resolves style properties against one configuration.

    Every call walks the cascade again; callers that want caching do it
    themselves.
    """

    def __init__(self, config: DiagramConfig) -> None:
        self._styles = config.styles

    def resolve(self, entity_id: Optional[str], section: str, prop: str) -> Any:
        section, prop = _checked(section, prop)

        if entity_id is not None:
            value = _lookup(self._styles.entities.get(entity_id), section, prop)
            if value is not None:
                return value

        value = _lookup(self._styles.default, section, prop)
        if value is not None:
            return value

        return FALLBACK_STYLES.get((section, prop))

    def _flat(
        self, entity_id: Optional[str], keys: tuple[tuple[str, str, str], ...]
    ) -> dict[str, str]:
        out: dict[str, str] = {}
        for key, section, prop in keys:
            value = self.resolve(entity_id, section, prop)
            if value is not None:
                out[key] = style_text(value)
        return out

    def entity_styles(self, entity_id: str) -> dict[str, str]:
        """Flat map of resolved entity styles, e.g. `header_bg`, `body_text`.

        Keys whose cascade ends without a value are left out.
        """
        return self._flat(entity_id, _ENTITY_STYLE_KEYS)

    def relationship_styles(self, entity_id: Optional[str] = None) -> dict[str, str]:
        return self._flat(entity_id, _RELATIONSHIP_STYLE_KEYS)
