# dot_gen/samples.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .writer import write_text

SAMPLE_MODEL: dict[str, Any] = {
    "metadata": {
        "title": "Sample Data Model",
        "version": "1.0",
        "description": "Sample data model for testing",
    },
    "diagram_settings": {"rankdir": "TB"},
    "entities": [
        {
            "id": "user",
            "name": "User",
            "fields": [
                {"name": "id", "type": "UUID", "is_required": True, "is_key": True},
                {"name": "username", "type": "string", "is_required": True},
                {"name": "email", "type": "string", "is_required": True},
                {"name": "created_at", "type": "timestamp", "is_required": False},
            ],
            "special_sections": [
                {"name": "Auditable fields", "type": "object", "style": "bold_red"}
            ],
            "description": "System user entity",
        },
        {
            "id": "profile",
            "name": "User Profile",
            "fields": [
                {"name": "id", "type": "UUID", "is_required": True, "is_key": True},
                {"name": "user_id", "type": "UUID", "is_required": True},
                {"name": "first_name", "type": "string", "is_required": False},
                {"name": "last_name", "type": "string", "is_required": False},
                {"name": "bio", "type": "string", "is_required": False},
            ],
            "constraints": ["FOREIGN KEY (user_id) REFERENCES user(id)"],
            "description": "Extended user profile information",
        },
    ],
    "relationships": [
        {
            "from_entity": "user",
            "to_entity": "profile",
            "label": "HAS_PROFILE",
            "relationship_type": "one_to_one",
        }
    ],
}

SAMPLE_CONFIG = """\
# Custom diagram configuration
diagram:
  settings:
    rankdir: LR

  styles:
    entities:
      user:
        header:
          bgcolor: "#2563EB"
          forecolor: white
        body:
          bgcolor: "#EFF6FF"

      profile:
        header:
          bgcolor: "#059669"
          forecolor: white
        body:
          bgcolor: "#ECFDF5"
"""


def create_sample_files(prefix: str) -> tuple[Path, Path]:
    """Write `<prefix>_sample.json` and `<prefix>_config.yaml`."""
    json_path = Path(f"{prefix}_sample.json")
    config_path = Path(f"{prefix}_config.yaml")

    write_text(json_path, json.dumps(SAMPLE_MODEL, indent=2) + "\n")
    write_text(config_path, SAMPLE_CONFIG)
    return json_path, config_path
