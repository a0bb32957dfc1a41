"""
Signature Kernel — Operation Construction

Factory functions for creating well-formed operations.
Used by the editor session to wrap UI events before feeding them to the reducer,
and by tests to build operations concisely.
"""

from __future__ import annotations

import json
from typing import Any

from signature_builder.kernel.types import BLOCK_KINDS, ROOT, ColumnTarget, Operation

# Older palette names for two of the kinds
_LEGACY_KINDS: dict[str, str] = {
    "text": "paragraph",
    "columns": "layout",
}


def target_payload(target: str | ColumnTarget) -> str | dict[str, Any]:
    """ColumnTarget → {"layout": id, "column": index}; ROOT stays "root"."""
    if isinstance(target, ColumnTarget):
        return {"layout": target.layout_id, "column": target.column_index}
    return target


def parse_target(raw: Any) -> str | ColumnTarget | None:
    """Inverse of target_payload. Returns None when raw is not a target."""
    if raw is None or raw == ROOT:
        return ROOT
    if isinstance(raw, dict) and isinstance(raw.get("layout"), str) and isinstance(raw.get("column"), int):
        return ColumnTarget(layout_id=raw["layout"], column_index=raw["column"])
    return None


def insert_op(kind: str, target: str | ColumnTarget = ROOT, *, block_id: str | None = None) -> Operation:
    payload: dict[str, Any] = {"kind": kind, "target": target_payload(target)}
    if block_id is not None:
        payload["id"] = block_id
    return Operation(type="block.insert", payload=payload)


def update_op(block_id: str, **attrs: Any) -> Operation:
    return Operation(type="block.update", payload={"id": block_id, "attrs": attrs})


def remove_op(block_id: str) -> Operation:
    return Operation(type="block.remove", payload={"id": block_id})


def style_op(block_id: str, scope: str, **styles: Any) -> Operation:
    return Operation(type="style.set", payload={"id": block_id, "scope": scope, "styles": styles})


def resize_op(layout_id: str, count: int) -> Operation:
    return Operation(type="layout.resize", payload={"id": layout_id, "count": count})


def parse_palette_payload(raw: str | dict[str, Any]) -> str:
    """
    Turn a palette drag payload into a block kind.

    Accepts JSON text or a dict, `{"kind": ...}` or the older `{"type": ...}`,
    and the older kind names. Raises ValueError on anything else.
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Palette payload is not JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError("Palette payload must be an object")

    kind = raw.get("kind", raw.get("type"))
    if not isinstance(kind, str):
        raise ValueError("Palette payload has no kind")

    kind = _LEGACY_KINDS.get(kind, kind)
    if kind not in BLOCK_KINDS:
        raise ValueError(f"Unknown block kind: {kind!r}")
    return kind
