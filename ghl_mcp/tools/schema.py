"""
JSON Schema builders for tool input schemas.

Input schemas are advisory: they are published to agents but not
enforced locally, required-field checks are left to the HighLevel API.
"""

from __future__ import annotations

from typing import Any


def obj(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    """Top-level ``type: object`` schema."""
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def string(
    description: str, *, enum: list[str] | None = None, default: Any = None
) -> dict[str, Any]:
    prop: dict[str, Any] = {"type": "string", "description": description}
    if enum:
        prop["enum"] = enum
    if default is not None:
        prop["default"] = default
    return prop


def number(
    description: str,
    *,
    default: Any = None,
    minimum: int | None = None,
    maximum: int | None = None,
) -> dict[str, Any]:
    prop: dict[str, Any] = {"type": "number", "description": description}
    if minimum is not None:
        prop["minimum"] = minimum
    if maximum is not None:
        prop["maximum"] = maximum
    if default is not None:
        prop["default"] = default
    return prop


def boolean(description: str, *, default: bool | None = None) -> dict[str, Any]:
    prop: dict[str, Any] = {"type": "boolean", "description": description}
    if default is not None:
        prop["default"] = default
    return prop


def string_list(description: str) -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def array(description: str, items: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"type": "array", "items": items or {"type": "object"}, "description": description}


def mapping(description: str, properties: dict[str, Any] | None = None) -> dict[str, Any]:
    prop: dict[str, Any] = {"type": "object", "description": description}
    if properties:
        prop["properties"] = properties
    return prop


# Shared properties
CONTACT_ID = string("Contact ID")
TASK_ID = string("Task ID")
NOTE_ID = string("Note ID")
LOCATION_ID = string("Location ID (uses the configured location when omitted)")
