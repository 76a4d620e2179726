from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
import yaml

from sumgen.errors import ErrorKind, GenerationError
from sumgen.model import TypeDescriptor


def load_declaration(path: Path) -> TypeDescriptor:
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(path.read_text())
    else:
        payload = orjson.loads(path.read_bytes())
    if not isinstance(payload, dict):
        raise GenerationError(
            ErrorKind.MALFORMED_DECLARATION,
            f"{path} must contain a mapping, got {type(payload).__name__}",
        )
    return TypeDescriptor.from_mapping(payload)


def sample_declaration() -> dict[str, Any]:
    return {
        "name": "Color",
        "case_style": "snake_case",
        "variants": [
            {"name": "Red"},
            {"name": "DarkBlue", "attributes": {"serialize": ["navy", "dark_blue"]}},
            {"name": "Green", "fields": 1, "attributes": {"default": True}},
            {
                "name": "Rgb",
                "fields": ["r", "g", "b"],
                "attributes": {"to_string": "rgb({r}, {g}, {b})"},
            },
            {"name": "Hsl", "fields": ["h", "s", "l"], "attributes": {"to_string": "hue {h}"}},
            {"name": "Legacy", "fields": 2, "attributes": {"disabled": True}},
        ],
    }
