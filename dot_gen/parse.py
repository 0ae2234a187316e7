# dot_gen/parse.py
"""Turn a loosely-typed input document into a `Diagram`.

Optional keys take the documented defaults; a missing required key raises
`ParseError` carrying the path of the key, e.g. `/entities/2/fields/0/type`.
"""
from __future__ import annotations

from typing import Any, Optional

from .constants import (
    DEFAULT_DESCRIPTION,
    DEFAULT_RANKDIR,
    DEFAULT_RELATIONSHIP_TYPE,
    DEFAULT_SPECIAL_SECTION_STYLE,
    DEFAULT_TITLE,
    DEFAULT_VERSION,
)
from .errors import ParseError
from .model import Diagram, Entity, Field, Relationship, SpecialSection


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def as_bool(value: Any) -> bool:
    """Booleans count as themselves, numbers are true when non-zero,
    "true"/"false" strings are honoured, everything else is false."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _optional(node: dict[str, Any], key: str, default: str) -> str:
    value = node.get(key)
    return default if value is None else _text(value)


def _required(node: dict[str, Any], key: str, path: str) -> str:
    value = node.get(key)
    if value is None:
        raise ParseError(f"missing required key {key!r}", path=f"{path}/{key}")
    return _text(value)


def _list(node: dict[str, Any], key: str, path: str) -> list[Any]:
    value = node.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(
            f"{key!r} must be a list, got {type(value).__name__}", path=f"{path}/{key}"
        )
    return value


def _mapping(item: Any, path: str) -> dict[str, Any]:
    if not isinstance(item, dict):
        raise ParseError(f"expected a mapping, got {type(item).__name__}", path=path)
    return item


def _section(document: dict[str, Any], key: str) -> Optional[dict[str, Any]]:
    value = document.get(key)
    if value is None:
        return None
    return _mapping(value, f"/{key}")


def parse_field(node: Any, path: str) -> Field:
    node = _mapping(node, path)
    return Field(
        name=_required(node, "name", path),
        type=_required(node, "type", path),
        required=as_bool(node.get("is_required")),
        key=as_bool(node.get("is_key")),
        description=_optional(node, "description", ""),
    )


def parse_special_section(node: Any, path: str) -> SpecialSection:
    node = _mapping(node, path)
    return SpecialSection(
        name=_required(node, "name", path),
        type=_required(node, "type", path),
        style=_optional(node, "style", DEFAULT_SPECIAL_SECTION_STYLE),
        is_required=as_bool(node.get("is_required")),
    )


def parse_entity(node: Any, path: str) -> Entity:
    node = _mapping(node, path)
    fields = tuple(
        parse_field(item, f"{path}/fields/{i}")
        for i, item in enumerate(_list(node, "fields", path))
    )
    sections = tuple(
        parse_special_section(item, f"{path}/special_sections/{i}")
        for i, item in enumerate(_list(node, "special_sections", path))
    )
    constraints = tuple(
        _text(item) for item in _list(node, "constraints", path) if item is not None
    )
    return Entity(
        id=_required(node, "id", path),
        name=_required(node, "name", path),
        description=_optional(node, "description", ""),
        fields=fields,
        special_sections=sections,
        constraints=constraints,
    )


def parse_relationship(node: Any, path: str) -> Relationship:
    node = _mapping(node, path)
    return Relationship(
        id=_optional(node, "id", ""),
        from_entity=_required(node, "from_entity", path),
        to_entity=_required(node, "to_entity", path),
        label=_required(node, "label", path),
        type=_optional(node, "relationship_type", DEFAULT_RELATIONSHIP_TYPE),
        description=_optional(node, "description", ""),
    )


def _same_rank_groups(document: dict[str, Any]) -> tuple[tuple[str, ...], ...]:
    hints = _section(document, "layout_hints")
    if hints is None:
        return ()

    groups = hints.get("same_rank_groups")
    if not isinstance(groups, list):
        return ()

    # Non-array groups are skipped rather than rejected.
    return tuple(
        tuple(_text(member) for member in group if member is not None)
        for group in groups
        if isinstance(group, list)
    )


def parse_diagram(document: dict[str, Any]) -> Diagram:
    """Parse a whole input document. Pure: the document is not modified."""
    document = _mapping(document, "")

    metadata = _section(document, "metadata") or {}
    settings = _section(document, "diagram_settings") or {}

    entities = tuple(
        parse_entity(item, f"/entities/{i}")
        for i, item in enumerate(_list(document, "entities", ""))
    )
    relationships = tuple(
        parse_relationship(item, f"/relationships/{i}")
        for i, item in enumerate(_list(document, "relationships", ""))
    )

    return Diagram(
        title=_optional(metadata, "title", DEFAULT_TITLE),
        version=_optional(metadata, "version", DEFAULT_VERSION),
        description=_optional(metadata, "description", DEFAULT_DESCRIPTION),
        rankdir=_optional(settings, "rankdir", DEFAULT_RANKDIR),
        entities=entities,
        relationships=relationships,
        same_rank_groups=_same_rank_groups(document),
    )
