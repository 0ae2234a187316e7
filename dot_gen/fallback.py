# dot_gen/fallback.py
"""Template-free DOT generation.

These functions never touch the template engine and only do string work on
already-parsed values, so they complete for any well-formed `Diagram`. The
output is plainer than the templated one: entities are boxes with a text
label instead of HTML tables.
"""
from __future__ import annotations

from typing import Sequence

from .config import DiagramConfig
from .dot_fmt import dot_attrs, dot_comment, dot_id, dot_text, graph_name, rank_same
from .model import Diagram, Entity, Relationship

INDENT = "    "


def fallback_entity(entity: Entity) -> str:
    """One box node: the entity name, then `+ name: type` / `- name: type`."""
    label = dot_text(entity.name)
    if entity.fields:
        label += "\\n"
        for f in entity.fields:
            marker = "+ " if f.required else "- "
            label += f"{marker}{dot_text(f.name)}: {dot_text(f.type)}\\n"

    return (
        f"{INDENT}{dot_comment(entity.name)}\n"
        f'{INDENT}{dot_id(entity.id)} [label="{label}", shape=box];\n'
    )


def fallback_relationship(relationship: Relationship) -> str:
    return (
        f"{INDENT}{dot_id(relationship.from_entity)} -> {dot_id(relationship.to_entity)}"
        f' [label="{dot_text(relationship.label)}"];\n'
    )


def fallback_diagram(
    diagram: Diagram,
    config: DiagramConfig,
    entity_blocks: Sequence[str],
    relationship_blocks: Sequence[str],
) -> str:
    """Wrap already-rendered entity and relationship blocks into a digraph."""
    lines: list[str] = [dot_comment(diagram.title)]
    if diagram.version:
        lines.append(dot_comment(f"Version: {diagram.version}"))
    lines.append("")

    lines.append(f"digraph {graph_name(diagram.title)} {{")
    lines.append(f"{INDENT}rankdir={dot_id(diagram.rankdir)};")
    node_defaults = dot_attrs(config.settings.node_defaults)
    if node_defaults:
        lines.append(f"{INDENT}node {node_defaults};")
    lines.append("")

    out = "\n".join(lines) + "\n"
    out += "".join(entity_blocks)

    if relationship_blocks:
        out += f"\n{INDENT}// Relationships\n"
        out += "".join(relationship_blocks)

    if diagram.same_rank_groups:
        out += f"\n{INDENT}// Layout hints\n"
        for group in diagram.same_rank_groups:
            out += f"{INDENT}{rank_same(group)}\n"

    out += "}\n"
    return out


def fallback_document(diagram: Diagram, config: DiagramConfig) -> str:
    """Whole document through the fallback path only."""
    return fallback_diagram(
        diagram,
        config,
        [fallback_entity(e) for e in diagram.entities],
        [fallback_relationship(r) for r in diagram.relationships],
    )
