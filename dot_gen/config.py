# dot_gen/config.py
"""Typed diagram configuration and the override merge.

The override document mirrors this shape under a top-level `diagram` key:

    diagram:
      settings:
        rankdir: LR
      styles:
        default:
          header: {bgcolor: "#333333"}
        entities:
          user:
            header: {bgcolor: "#2563EB", forecolor: white}

Merging decodes each section present in the override into its typed shape
and replaces the base section wholesale. Nothing is merged key by key.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .constants import (
    DEFAULT_NODE_DEFAULTS,
    DEFAULT_RANKDIR,
    ENTITY_TEMPLATE_DEFAULT,
    MAIN_TEMPLATE_DEFAULT,
    RELATIONSHIP_TEMPLATE_DEFAULT,
    STYLE_SECTIONS,
)
from .errors import ConfigError
from .io import load_yaml_mapping

LOG = logging.getLogger(__name__)

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")

# Alternate spellings accepted for a few keys, after snake-casing.
_KEY_ALIASES: dict[str, str] = {
    "table_settings": "table",
    "main_template": "main",
    "entity_template": "entity",
    "relationship_template": "relationship",
    "font_name": "font",
    "fontname": "font",
    "fontsize": "font_size",
}


def normalize_key(key: str) -> str:
    """`nodeDefaults`, `node-defaults` and `node_defaults` all map to `node_defaults`."""
    snake = _CAMEL_RE.sub(r"_\1", str(key)).replace("-", "_").lower()
    return _KEY_ALIASES.get(snake, snake)


@dataclass(frozen=True)
class StyleSection:
    """Optional visual attributes. `None` means "not set, keep cascading"."""

    bgcolor: Optional[str] = None
    forecolor: Optional[str] = None
    color: Optional[str] = None
    font: Optional[str] = None
    font_size: Optional[int] = None
    bold: Optional[bool] = None
    style: Optional[str] = None


@dataclass(frozen=True)
class StyleDefinition:
    header: StyleSection = field(default_factory=StyleSection)
    body: StyleSection = field(default_factory=StyleSection)
    separator: StyleSection = field(default_factory=StyleSection)
    mandatory: StyleSection = field(default_factory=StyleSection)
    special_section: StyleSection = field(default_factory=StyleSection)
    constraint: StyleSection = field(default_factory=StyleSection)
    relationship: StyleSection = field(default_factory=StyleSection)

    def section(self, name: str) -> StyleSection:
        return getattr(self, name)


@dataclass(frozen=True)
class Styles:
    default: StyleDefinition = field(default_factory=StyleDefinition)
    entities: Mapping[str, StyleDefinition] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True)
class TableSettings:
    border: str = "2"
    cell_border: str = "1"
    cell_spacing: str = "0"
    cell_padding: str = "2"
    separator_height: str = "2"


@dataclass(frozen=True)
class Settings:
    rankdir: str = DEFAULT_RANKDIR
    node_defaults: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_NODE_DEFAULTS))
    )
    table: TableSettings = field(default_factory=TableSettings)


@dataclass(frozen=True)
class Templates:
    # None: only the templates shipped with the package are used.
    base_path: Optional[Path] = None
    main: str = MAIN_TEMPLATE_DEFAULT
    entity: str = ENTITY_TEMPLATE_DEFAULT
    relationship: str = RELATIONSHIP_TEMPLATE_DEFAULT


@dataclass(frozen=True)
class DiagramConfig:
    settings: Settings = field(default_factory=Settings)
    templates: Templates = field(default_factory=Templates)
    styles: Styles = field(default_factory=Styles)


DEFAULT_CONFIG = DiagramConfig()


# --------------------------------------------------------------------------
# Decoding
# --------------------------------------------------------------------------


def _as_mapping(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _normalized(value: Any, where: str, known: tuple[str, ...]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for raw_key, item in _as_mapping(value, where).items():
        key = normalize_key(raw_key)
        if key not in known:
            LOG.debug("ignoring unknown configuration key %s.%s", where, raw_key)
            continue
        out[key] = item
    return out


def _scalar_text(value: Any, where: str) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ConfigError(f"{where} must be a scalar, got {type(value).__name__}")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _decode_int(value: Any, where: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError(f"{where} must be an integer, got a boolean")
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise ConfigError(f"{where} must be an integer, got {value!r}") from e


def _decode_bool(value: Any, where: str) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "yes", "on", "1"):
        return True
    if text in ("false", "no", "off", "0"):
        return False
    raise ConfigError(f"{where} must be a boolean, got {value!r}")


def _field_names(cls: type) -> tuple[str, ...]:
    return tuple(f.name for f in fields(cls))


def decode_style_section(value: Any, where: str) -> StyleSection:
    data = _normalized(value, where, _field_names(StyleSection))
    kwargs: dict[str, Any] = {}
    for key, item in data.items():
        at = f"{where}.{key}"
        if key == "font_size":
            kwargs[key] = _decode_int(item, at)
        elif key == "bold":
            kwargs[key] = _decode_bool(item, at)
        else:
            kwargs[key] = _scalar_text(item, at)
    return StyleSection(**kwargs)


def decode_style_definition(value: Any, where: str) -> StyleDefinition:
    data = _normalized(value, where, STYLE_SECTIONS)
    return StyleDefinition(
        **{key: decode_style_section(item, f"{where}.{key}") for key, item in data.items()}
    )


def decode_styles(value: Any, where: str = "diagram.styles") -> Styles:
    data = _normalized(value, where, _field_names(Styles))
    kwargs: dict[str, Any] = {}
    if "default" in data:
        kwargs["default"] = decode_style_definition(data["default"], f"{where}.default")
    if "entities" in data:
        # Entity ids are map keys, not field names: keep them verbatim.
        entities = _as_mapping(data["entities"], f"{where}.entities")
        kwargs["entities"] = MappingProxyType(
            {
                str(entity_id): decode_style_definition(
                    definition, f"{where}.entities.{entity_id}"
                )
                for entity_id, definition in entities.items()
            }
        )
    return Styles(**kwargs)


def decode_table_settings(value: Any, where: str) -> TableSettings:
    data = _normalized(value, where, _field_names(TableSettings))
    kwargs = {key: _scalar_text(item, f"{where}.{key}") for key, item in data.items()}
    return TableSettings(**{key: text for key, text in kwargs.items() if text is not None})


def decode_settings(value: Any, where: str = "diagram.settings") -> Settings:
    data = _normalized(value, where, _field_names(Settings))
    kwargs: dict[str, Any] = {}
    if data.get("rankdir") is not None:
        kwargs["rankdir"] = _scalar_text(data["rankdir"], f"{where}.rankdir")
    if "node_defaults" in data:
        node_defaults = _as_mapping(data["node_defaults"], f"{where}.node_defaults")
        decoded = {
            str(k): _scalar_text(v, f"{where}.node_defaults.{k}") for k, v in node_defaults.items()
        }
        # A null entry removes the attribute.
        kwargs["node_defaults"] = MappingProxyType(
            {k: v for k, v in decoded.items() if v is not None}
        )
    if "table" in data:
        kwargs["table"] = decode_table_settings(data["table"], f"{where}.table")
    return Settings(**kwargs)


def decode_templates(value: Any, where: str = "diagram.templates") -> Templates:
    data = _normalized(value, where, _field_names(Templates))
    kwargs: dict[str, Any] = {}
    for key, item in data.items():
        text = _scalar_text(item, f"{where}.{key}")
        if text is None:
            continue
        kwargs[key] = Path(text) if key == "base_path" else text
    return Templates(**kwargs)


_SECTION_DECODERS = {
    "settings": decode_settings,
    "templates": decode_templates,
    "styles": decode_styles,
}


def merge_config(base: DiagramConfig, override: Mapping[str, Any]) -> DiagramConfig:
    """Return `base` with every section present in `override` replaced.

    `override` is the content of the `diagram` key of an override document.
    """
    data = _normalized(dict(override), "diagram", tuple(_SECTION_DECODERS))
    replaced = {
        key: _SECTION_DECODERS[key](item, f"diagram.{key}") for key, item in data.items()
    }
    if replaced:
        LOG.debug("override replaces configuration sections: %s", ", ".join(sorted(replaced)))
    return replace(base, **replaced)


def load_config(path: Optional[Path] = None) -> DiagramConfig:
    """Effective configuration: compiled-in defaults, or defaults merged with `path`."""
    if path is None:
        return DEFAULT_CONFIG

    path = Path(path)
    LOG.info("loading custom configuration from %s", path)
    document = load_yaml_mapping(path)
    if document and document.get("diagram") is None:
        LOG.warning(
            "%s has no top-level 'diagram' mapping (found: %s); using default configuration",
            path,
            ", ".join(sorted(str(k) for k in document)),
        )
    diagram =_as_mapping(document.get("diagram"), f"{path}: diagram")

    config = merge_config(DEFAULT_CONFIG, diagram)
    base_path = config.templates.base_path
    if base_path is not None and not base_path.is_absolute():
        # Template directories are relative to the file that names them.
        config = replace(
            config,
            templates=replace(config.templates, base_path=path.parent / base_path),
        )
    return config
