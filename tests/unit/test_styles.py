import pytest

from dot_gen.config import DEFAULT_CONFIG, merge_config
from dot_gen.constants import FALLBACK_STYLES, STYLE_PROPERTIES, STYLE_SECTIONS
from dot_gen.styles import StyleResolver


def resolver_for(styles: dict) -> StyleResolver:
    return StyleResolver(merge_config(DEFAULT_CONFIG, {"styles": styles}))


def test_fallback_constants_when_nothing_is_configured():
    resolver = StyleResolver(DEFAULT_CONFIG)

    assert resolver.resolve("user", "header", "bgcolor") == "#333333"
    assert resolver.resolve("user", "header", "forecolor") == "white"
    assert resolver.resolve("user", "body", "bgcolor") == "#FFFFFF"
    assert resolver.resolve("user", "mandatory", "forecolor") == "#DC2626"
    assert resolver.resolve("user", "special_section", "forecolor") == "#DC2626"
    assert resolver.resolve("user", "constraint", "bgcolor") == "#F5F5F5"
    assert resolver.resolve(None, "relationship", "color") == "#666666"
    assert resolver.resolve(None, "relationship", "font_size") == 9
    assert resolver.resolve(None, "relationship", "style") == "solid"


def test_pairs_without_fallback_resolve_to_none():
    resolver = StyleResolver(DEFAULT_CONFIG)

    assert resolver.resolve("user", "body", "bold") is None
    assert resolver.resolve(None, "separator", "font") is None


def test_cascade_order_for_every_section_and_property():
    entity_value = "entity-value"
    default_value = "default-value"
    entity_only = resolver_for(
        {"entities": {"user": {s: {p: entity_value for p in ("bgcolor", "forecolor", "color", "font", "style")} for s in STYLE_SECTIONS}}}
    )
    both = resolver_for(
        {
            "default": {s: {"bgcolor": default_value} for s in STYLE_SECTIONS},
            "entities": {"user": {s: {"bgcolor": entity_value} for s in STYLE_SECTIONS}},
        }
    )
    default_only = resolver_for({"default": {s: {"bgcolor": default_value} for s in STYLE_SECTIONS}})

    for section in STYLE_SECTIONS:
        assert entity_only.resolve("user", section, "bgcolor") == entity_value
        assert both.resolve("user", section, "bgcolor") == entity_value
        assert both.resolve("other", section, "bgcolor") == default_value
        assert default_only.resolve("user", section, "bgcolor") == default_value
        for prop in STYLE_PROPERTIES:
            if prop == "bgcolor":
                continue
            assert default_only.resolve("user", section, prop) == FALLBACK_STYLES.get(
                (section, prop)
            )


def test_zero_and_false_are_present_values():
    resolver = resolver_for(
        {
            "default": {"header": {"fontSize": 0, "bold": True}},
            "entities": {"user": {"header": {"bold": False}, "body": {"bgcolor": ""}}},
        }
    )

    assert resolver.resolve("user", "header", "font_size") == 0
    assert resolver.resolve("user", "header", "bold") is False
    assert resolver.resolve("other", "header", "bold") is True
    assert resolver.resolve("user", "body", "bgcolor") == ""


def test_unknown_entity_skips_entity_step():
    resolver = resolver_for({"entities": {"user": {"header": {"bgcolor": "#2563EB"}}}})

    assert resolver.resolve("profile", "header", "bgcolor") == "#333333"
    assert resolver.resolve(None, "header", "bgcolor") == "#333333"


def test_camel_case_names_are_accepted():
    resolver = resolver_for({"default": {"specialSection": {"fontSize": 14}}})

    assert resolver.resolve("x", "specialSection", "fontSize") == 14
    assert resolver.resolve("x", "special_section", "font_size") == 14


@pytest.mark.parametrize("section, prop", [("footer", "bgcolor"), ("header", "shadow")])
def test_unknown_names_raise(section, prop):
    with pytest.raises(ValueError):
        StyleResolver(DEFAULT_CONFIG).resolve("user", section, prop)


def test_entity_styles_flat_map():
    resolver = resolver_for(
        {
            "default": {"header": {"bold": False}},
            "entities": {"user": {"header": {"bgcolor": "#2563EB", "fontSize": 14}}},
        }
    )

    styles = resolver.entity_styles("user")

    assert styles["header_bg"] == "#2563EB"
    assert styles["header_text"] == "white"
    assert styles["header_font_size"] == "14"
    assert styles["header_bold"] == "false"
    assert styles["body_bg"] == "#FFFFFF"
    assert styles["constraint_text"] == "#666666"
    assert "body_font" not in styles


def test_relationship_styles_use_default_definition():
    resolver = resolver_for({"default": {"relationship": {"color": "#000000", "style": "dashed"}}})

    assert resolver.relationship_styles() == {
        "color": "#000000",
        "font_size": "9",
        "style": "dashed",
    }


def test_resolver_does_not_mutate_configuration():
    config = merge_config(DEFAULT_CONFIG, {"styles": {"default": {"body": {"bgcolor": "#EEE"}}}})
    before = repr(config)

    resolver = StyleResolver(config)
    resolver.entity_styles("user")
    resolver.relationship_styles()

    assert repr(config) == before
