"""
Signature Kernel — Operation Validation

Validates operation payloads before they reach the reducer.
Validation is structural (well-formed?) not semantic (will it apply?).
The reducer handles semantic checks (does the block exist? is it a layout?).
"""

from __future__ import annotations

from typing import Any

from signature_builder.kernel.operations import parse_target
from signature_builder.kernel.types import (
    BLOCK_KINDS,
    MAX_COLUMNS,
    MIN_COLUMNS,
    OPERATION_TYPES,
    STRUCTURAL_FIELDS,
    STYLE_SCOPES,
)

# Value types accepted in block.update attrs
_ATTR_TYPES: dict[str, type | tuple[type, ...]] = {
    "content": str,
    "link_target": str,
    "image_source": str,
    "spacer_height": int,
    "column_count": int,
    "content_style": dict,
    "container_style": dict,
}

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_operation(type: str, payload: dict[str, Any]) -> list[str]:
    """
    Validate an operation's type and payload structure.
    Returns a list of error strings. Empty list = valid.

    It does NOT check whether referenced blocks exist.
    That's the reducer's job.
    """
    errors: list[str] = []

    if type not in OPERATION_TYPES:
        errors.append(f"Unknown operation type: {type}")
        return errors

    if not isinstance(payload, dict):
        errors.append("Payload must be a non-null object")
        return errors

    validator = _VALIDATORS.get(type)
    if validator:
        errors.extend(validator(payload))

    return errors


# ---------------------------------------------------------------------------
# Per-operation validators
# ---------------------------------------------------------------------------


def _require_id(p: dict, op: str, key: str = "id") -> list[str]:
    if key not in p:
        return [f"{op} requires '{key}'"]
    if not isinstance(p[key], str) or not p[key]:
        return [f"{op}: '{key}' must be a non-empty string"]
    return []


def _validate_insert(p: dict) -> list[str]:
    errors: list[str] = []
    kind = p.get("kind")
    if kind is None:
        errors.append("block.insert requires 'kind'")
    elif kind not in BLOCK_KINDS:
        errors.append(f"Unknown block kind: {kind}")

    if parse_target(p.get("target")) is None:
        errors.append("block.insert: 'target' must be 'root' or {layout, column}")

    if "id" in p:
        errors.extend(_require_id(p, "block.insert"))

    return errors


def _validate_update(p: dict) -> list[str]:
    errors = _require_id(p, "block.update")

    attrs = p.get("attrs")
    if not isinstance(attrs, dict):
        errors.append("block.update requires 'attrs' object")
        return errors

    for key, value in attrs.items():
        if key in STRUCTURAL_FIELDS:
            errors.append(f"block.update cannot set '{key}'")
            continue
        expected = _ATTR_TYPES.get(key)
        if expected is None:
            errors.append(f"Unknown block attribute: {key}")
        elif not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            errors.append(f"'{key}' has the wrong type")

    if "spacer_height" in attrs and isinstance(attrs["spacer_height"], int) and attrs["spacer_height"] < 0:
        errors.append("'spacer_height' must be >= 0")
    if "column_count" in attrs:
        errors.extend(_check_count(attrs["column_count"]))

    return errors


def _validate_remove(p: dict) -> list[str]:
    return _require_id(p, "block.remove")


def _validate_style_set(p: dict) -> list[str]:
    errors = _require_id(p, "style.set")
    if p.get("scope") not in STYLE_SCOPES:
        errors.append("style.set: 'scope' must be 'content' or 'container'")
    styles = p.get("styles")
    if not isinstance(styles, dict):
        errors.append("style.set requires 'styles' object")
    else:
        for key, value in styles.items():
            if not isinstance(key, str) or not key:
                errors.append("Style names must be non-empty strings")
            elif value is not None and not isinstance(value, (str, int, float)):
                errors.append(f"Style '{key}' must be a string, a number or null")
    return errors


def _validate_resize(p: dict) -> list[str]:
    errors = _require_id(p, "layout.resize")
    if "count" not in p:
        errors.append("layout.resize requires 'count'")
    else:
        errors.extend(_check_count(p["count"]))
    return errors


def _check_count(count: Any) -> list[str]:
    if not isinstance(count, int) or isinstance(count, bool):
        return ["column count must be an integer"]
    if not MIN_COLUMNS <= count <= MAX_COLUMNS:
        return [f"column count must be between {MIN_COLUMNS} and {MAX_COLUMNS}"]
    return []


_VALIDATORS = {
    "block.insert": _validate_insert,
    "block.update": _validate_update,
    "block.remove": _validate_remove,
    "style.set": _validate_style_set,
    "layout.resize": _validate_resize,
}
