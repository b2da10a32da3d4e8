from __future__ import annotations

import re
from typing import Any

from .schema import ARRAY, OBJECT

_SLUG_SEPARATORS = re.compile(r"[\s_./]+")
_SLUG_INVALID = re.compile(r"[^a-z0-9-]")
_SLUG_DASHES = re.compile(r"-{2,}")


def normalize_slug(value: str) -> str:
    slug = _SLUG_SEPARATORS.sub("-", value.strip().lower())
    slug = _SLUG_INVALID.sub("", slug)
    slug = _SLUG_DASHES.sub("-", slug)
    return slug.strip("-")


def coerce_string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def coerce_lists(payload: dict[str, Any], schema: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``payload`` where every ARRAY property of ``schema``
    is a list of strings. Nested OBJECT properties are handled recursively."""
    normalized = dict(payload)
    for name, prop in schema.get("properties", {}).items():
        if prop.get("type") == ARRAY:
            normalized[name] = coerce_string_list(normalized.get(name))
        elif prop.get("type") == OBJECT and isinstance(normalized.get(name), dict):
            normalized[name] = coerce_lists(normalized[name], prop)
    return normalized


def missing_required_fields(
    payload: dict[str, Any], schema: dict[str, Any], prefix: str = ""
) -> list[str]:
    missing: list[str] = []
    properties = schema.get("properties", {})
    for name in schema.get("required", []):
        prop = properties.get(name, {})
        if prop.get("type") == ARRAY:
            continue
        value = payload.get(name)
        if value is None:
            missing.append(f"{prefix}{name}")
        elif prop.get("type") == OBJECT:
            if not isinstance(value, dict):
                missing.append(f"{prefix}{name}")
            else:
                missing.extend(missing_required_fields(value, prop, f"{prefix}{name}."))
    return missing
