import re

from dot_gen.config import DEFAULT_CONFIG, merge_config
from dot_gen.fallback import (
    fallback_diagram,
    fallback_document,
    fallback_entity,
    fallback_relationship,
)
from dot_gen.model import Diagram, Entity, Field, Relationship
from dot_gen.parse import parse_diagram


def sample_diagram() -> Diagram:
    return Diagram(
        title="Shop Model",
        version="2.1",
        entities=(
            Entity(
                id="user",
                name="User",
                fields=(
                    Field(name="id", type="UUID", required=True, key=True),
                    Field(name="nickname", type="string"),
                ),
            ),
            Entity(id="profile", name="Profile"),
        ),
        relationships=(Relationship(from_entity="user", to_entity="profile", label="HAS_PROFILE"),),
        same_rank_groups=(("user", "profile"),),
    )


def test_entity_block():
    entity = sample_diagram().entities[0]

    assert fallback_entity(entity) == (
        "    // User\n"
        '    user [label="User\\n+ id: UUID\\n- nickname: string\\n", shape=box];\n'
    )


def test_entity_without_fields():
    assert fallback_entity(Entity(id="a", name="A")) == '    // A\n    a [label="A", shape=box];\n'


def test_relationship_block():
    rel = Relationship(from_entity="user", to_entity="profile", label="HAS_PROFILE")

    assert fallback_relationship(rel) == '    user -> profile [label="HAS_PROFILE"];\n'


def test_document_layout():
    out = fallback_document(sample_diagram(), DEFAULT_CONFIG)

    assert out.startswith("// Shop Model\n// Version: 2.1\n\ndigraph shop_model {\n")
    assert "    rankdir=TB;\n" in out
    assert '    node [fontname="Arial", shape="none"];\n' in out
    assert "    // Relationships\n" in out
    assert "    {rank=same; user; profile;}\n" in out
    assert out.endswith("}\n")
    assert out.index("user [label=") < out.index("profile [label=") < out.index("user -> profile")


def test_empty_node_defaults_are_omitted():
    config = merge_config(DEFAULT_CONFIG, {"settings": {"nodeDefaults": {}}})

    out = fallback_diagram(Diagram(), config, [], [])

    assert "node [" not in out
    assert "// Relationships" not in out
    assert "rank=same" not in out


def test_output_is_deterministic():
    diagram = sample_diagram()

    assert fallback_document(diagram, DEFAULT_CONFIG) == fallback_document(diagram, DEFAULT_CONFIG)


def test_awkward_text_still_yields_balanced_output():
    diagram = parse_diagram(
        {
            "metadata": {"title": 'Odd "Title" {x}'},
            "entities": [
                {
                    "id": "order-item",
                    "name": 'Order "Item"\nline',
                    "fields": [{"name": "a\\b", "type": "{json}", "is_required": True}],
                }
            ],
            "relationships": [
                {"from_entity": "order-item", "to_entity": "ghost", "label": 'has "many"'}
            ],
            "layout_hints": {"same_rank_groups": [["order-item", "ghost"]]},
        }
    )

    out = fallback_document(diagram, DEFAULT_CONFIG)

    # Braces inside quoted strings are data; strip them before counting.
    structural = re.sub(r'"(?:\\.|[^"\\])*"', '""', out)
    structural = re.sub(r"//[^\n]*", "", structural)
    assert structural.count("{") == structural.count("}")
    assert '"order-item" -> ghost [label="has \\"many\\""];' in out
    assert '{rank=same; "order-item"; ghost;}' in out
