# dot_gen/io.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError, InputError

LOG = logging.getLogger(__name__)

YAML_SUFFIXES: frozenset[str] = frozenset({".yaml", ".yml"})


def _read_text(path: Path, error_cls: type[Exception]) -> str:
    if not path.exists():
        raise error_cls(f"File not found: {path}")
    if not path.is_file():
        raise error_cls(f"Not a regular file: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise error_cls(f"Cannot read {path}: {e}") from e


def _require_mapping(data: Any, path: Path, error_cls: type[Exception]) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise error_cls(
            f"Top-level document must be a mapping in {path}, got {type(data).__name__}"
        )
    return data


def load_document(path: Path) -> dict[str, Any]:
    """Load the input model document.

    JSON is the native syntax; a `.yaml`/`.yml` suffix switches to YAML, which
    is a superset and yields the same mapping shape.
    """
    path = Path(path)
    raw = _read_text(path, InputError)

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise InputError(f"Failed to parse YAML {path}: {e}") from e
    else:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InputError(f"Failed to parse JSON {path}: {e}") from e

    LOG.debug("loaded input document %s", path)
    return _require_mapping(data, path, InputError)


def load_yaml_mapping(path: Path) -> dict[str, Any]:
    """Load an override configuration file. An empty file is an empty mapping."""
    path = Path(path)
    raw = _read_text(path, ConfigError)

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML {path}: {e}") from e

    if data is None:
        return {}
    return _require_mapping(data, path, ConfigError)
