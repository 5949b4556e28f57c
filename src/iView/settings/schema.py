"""Schema helpers for the application settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DEFAULT_ZOOM_STEP, MIN_ZOOM_STEP, THUMBNAIL_SIZE

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "iView/settings.schema.json",
    "type": "object",
    "required": ["schema", "view", "thumbnails"],
    "properties": {
        "schema": {"const": "iView/settings@1"},
        "default_image_dir": {"type": ["string", "null"]},
        "cache_dir": {"type": ["string", "null"]},
        "view": {
            "type": "object",
            "properties": {
                "zoom_step": {"type": "number", "minimum": MIN_ZOOM_STEP},
                "pan_speed": {
                    "type": "string",
                    "enum": ["slow", "normal", "fast"],
                },
                "interpolation": {
                    "type": "string",
                    "enum": ["fast", "balanced", "best"],
                },
                "wrap_navigation": {"type": "boolean"},
            },
            "additionalProperties": True,
        },
        "thumbnails": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean"},
                "size": {"type": "integer", "minimum": 16, "maximum": 2048},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "iView/settings@1",
    "default_image_dir": None,
    "cache_dir": None,
    "view": {
        "zoom_step": DEFAULT_ZOOM_STEP,
        "pan_speed": "normal",
        "interpolation": "balanced",
        "wrap_navigation": True,
    },
    "thumbnails": {
        "enabled": True,
        "size": THUMBNAIL_SIZE,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)

_NESTED_SECTIONS = ("view", "thumbnails")
_PATH_KEYS = ("default_image_dir", "cache_dir")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _NESTED_SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            if key in _PATH_KEYS:
                if value in {None, ""}:
                    merged[key] = None
                    continue
                try:
                    merged[key] = os.fspath(value)
                except TypeError:
                    continue
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
