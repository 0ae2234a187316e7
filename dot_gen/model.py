# dot_gen/model.py
from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DEFAULT_DESCRIPTION,
    DEFAULT_RANKDIR,
    DEFAULT_RELATIONSHIP_TYPE,
    DEFAULT_SPECIAL_SECTION_STYLE,
    DEFAULT_TITLE,
    DEFAULT_VERSION,
)


@dataclass(frozen=True)
class Field:
    name: str
    type: str
    required: bool = False
    key: bool = False
    description: str = ""


@dataclass(frozen=True)
class SpecialSection:
    name: str
    type: str
    style: str = DEFAULT_SPECIAL_SECTION_STYLE
    is_required: bool = False


@dataclass(frozen=True)
class Entity:
    id: str
    name: str
    description: str = ""
    fields: tuple[Field, ...] = ()
    special_sections: tuple[SpecialSection, ...] = ()
    constraints: tuple[str, ...] = ()


@dataclass(frozen=True)
class Relationship:
    from_entity: str
    to_entity: str
    label: str
    id: str = ""
    type: str = DEFAULT_RELATIONSHIP_TYPE
    description: str = ""

    @property
    def display_id(self) -> str:
        """Identifier used in log lines; relationships may omit `id`."""
        return self.id or f"{self.from_entity}->{self.to_entity}"


@dataclass(frozen=True)
class Diagram:
    """Typed, immutable view of one input document."""

    title: str = DEFAULT_TITLE
    version: str = DEFAULT_VERSION
    description: str = DEFAULT_DESCRIPTION
    rankdir: str = DEFAULT_RANKDIR
    entities: tuple[Entity, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    same_rank_groups: tuple[tuple[str, ...], ...] = ()
