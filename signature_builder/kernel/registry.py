"""
Signature Kernel — Component Registry

Lookup table: block kind → default attributes and styles.
The palette carries only a kind; everything else a new block needs comes from here.

Every call builds brand-new dicts and lists. Two blocks must never share a
style dict, or editing one silently edits the other.
"""

from __future__ import annotations

import copy
import uuid
from typing import Any

from signature_builder.kernel.types import BLOCK_CLASSES, Block

COMPONENT_DEFAULTS: dict[str, dict[str, Any]] = {
    "heading": {
        "content": "Main Heading",
        "content_style": {"fontSize": "28px", "fontWeight": "bold", "color": "#1e293b", "textAlign": "left"},
        "container_style": {"padding": "10px 20px"},
    },
    "paragraph": {
        "content": "This is a paragraph. Edit it to add your own content and style it.",
        "content_style": {"fontSize": "16px", "color": "#475569", "lineHeight": "1.5"},
        "container_style": {"padding": "10px 20px"},
    },
    "button": {
        "content": "Call to Action",
        "link_target": "#",
        "content_style": {
            "backgroundColor": "#4f46e5",
            "color": "#ffffff",
            "padding": "12px 24px",
            "borderRadius": "8px",
            "textDecoration": "none",
        },
        "container_style": {"padding": "10px 20px", "textAlign": "left"},
    },
    "image": {
        "image_source": "https://via.placeholder.com/600x100",
        "content_style": {"maxWidth": "100%", "height": "auto", "display": "block"},
        "container_style": {"padding": "0px"},
    },
    "spacer": {
        "spacer_height": 20,
        "content_style": {},
        "container_style": {},
    },
    "layout": {
        "column_count": 2,
        "content_style": {},
        "container_style": {"padding": "10px"},
    },
}


def new_block_id() -> str:
    """Mint a fresh, never-reused block id."""
    return f"el_{uuid.uuid4().hex}"


def defaults_for(kind: str, block_id: str | None = None) -> Block:
    """
    Build a new block of `kind` from registry defaults.

    Raises ValueError for a kind the registry does not know.
    """
    block_cls = BLOCK_CLASSES.get(kind)
    if block_cls is None or kind not in COMPONENT_DEFAULTS:
        raise ValueError(f"Unknown block kind: {kind!r}")

    attrs = copy.deepcopy(COMPONENT_DEFAULTS[kind])
    return block_cls(id=block_id or new_block_id(), **attrs)
