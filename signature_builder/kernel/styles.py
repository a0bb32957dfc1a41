"""
Signature Kernel — Style Model

Every block carries two style dicts (content, container) keyed by camelCase
CSS property names. This module merges partial overrides onto them and turns
them into inline `style="..."` strings at serialization time.

Key order is preserved everywhere: it decides the bytes of the rendered
markup, so two renders of the same tree must walk the dict the same way.
"""

from __future__ import annotations

import re
from html import escape as _html_escape
from typing import Any

_UPPER_RE = re.compile(r"([A-Z])")


def to_kebab_case(name: str) -> str:
    """backgroundColor → background-color"""
    return _UPPER_RE.sub(r"-\1", name).lower()


def inline_style(styles: dict[str, Any]) -> str:
    """
    Serialize a style dict as `prop:value;` pairs in insertion order.
    Values are attribute-escaped. Empty or None values are skipped.
    """
    parts: list[str] = []
    for key, value in styles.items():
        if value is None or value == "":
            continue
        parts.append(f"{to_kebab_case(key)}:{_html_escape(str(value), quote=True)};")
    return "".join(parts)


def merge_styles(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """
    Return a new dict: base with overrides applied.

    Existing keys keep their position, new keys are appended,
    a None override removes the key. Neither input is modified.
    """
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


def style_value(styles: dict[str, Any], key: str, default: str = "") -> str:
    value = styles.get(key)
    if value is None or value == "":
        return default
    return str(value)
