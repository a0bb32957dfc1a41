"""
Signature Kernel — Reducer

Pure function: (tree, operation) → ReduceResult
No side effects. No IO. Deterministic apart from minted block ids.

The reducer turns validated operations into mutation-engine calls and checks
the semantics the validator cannot see (does the block exist, is it a
layout, does the column exist). It never throws: a rejected operation comes
back with applied=False and the input tree untouched.
"""

from __future__ import annotations

from signature_builder.kernel.operations import parse_target
from signature_builder.kernel.registry import defaults_for
from signature_builder.kernel.styles import merge_styles
from signature_builder.kernel.tree import (
    Tree,
    collect_ids,
    delete_by_id,
    find_by_id,
    insert,
    resize_layout,
    update_by_id,
)
from signature_builder.kernel.types import (
    BLOCK_KINDS,
    ColumnTarget,
    Layout,
    Operation,
    ReduceResult,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_tree() -> Tree:
    """The initial tree of a new template: no blocks."""
    return []


def reduce(tree: Tree, op: Operation) -> ReduceResult:
    """
    Apply one operation to the current tree.
    Returns new tree + applied flag + error.

    The input tree is never modified.
    """
    handler = _HANDLERS.get(op.type)
    if handler is None:
        return ReduceResult(tree=tree, applied=False, error=f"UNKNOWN_OPERATION: {op.type}")
    return handler(tree, op)


def replay(ops: list[Operation]) -> Tree:
    """
    Rebuild a tree from scratch by reducing over all operations.
    Rejected operations are skipped.
    """
    tree = empty_tree()
    for op in ops:
        result = reduce(tree, op)
        if result.applied:
            tree = result.tree
    return tree


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject(tree: Tree, code: str, msg: str) -> ReduceResult:
    return ReduceResult(tree=tree, applied=False, error=f"{code}: {msg}")


def _ok(tree: Tree, block_id: str | None = None) -> ReduceResult:
    return ReduceResult(tree=tree, applied=True, block_id=block_id)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_insert(tree: Tree, op: Operation) -> ReduceResult:
    p = op.payload
    kind = p.get("kind")
    if kind not in BLOCK_KINDS:
        return _reject(tree, "UNKNOWN_KIND", str(kind))

    target = parse_target(p.get("target"))
    if target is None:
        return _reject(tree, "BAD_TARGET", repr(p.get("target")))

    block = defaults_for(kind, p.get("id"))
    if block.id in collect_ids(tree):
        return _reject(tree, "DUPLICATE_ID", block.id)

    if isinstance(target, ColumnTarget):
        parent = find_by_id(tree, target.layout_id)
        if parent is None:
            return _reject(tree, "BLOCK_NOT_FOUND", f"Layout '{target.layout_id}' not found")
        if not isinstance(parent, Layout):
            return _reject(tree, "NOT_A_LAYOUT", target.layout_id)
        if not 0 <= target.column_index < parent.column_count:
            return _reject(
                tree,
                "COLUMN_OUT_OF_RANGE",
                f"'{target.layout_id}' has {parent.column_count} columns, got index {target.column_index}",
            )

    return _ok(insert(tree, block, target), block.id)


def _handle_update(tree: Tree, op: Operation) -> ReduceResult:
    p = op.payload
    block_id = p.get("id", "")
    block = find_by_id(tree, block_id)
    if block is None:
        return _reject(tree, "BLOCK_NOT_FOUND", block_id)

    attrs = p.get("attrs", {})
    if "column_count" in attrs and not isinstance(block, Layout):
        return _reject(tree, "NOT_A_LAYOUT", block_id)

    return _ok(update_by_id(tree, block_id, attrs), block_id)


def _handle_remove(tree: Tree, op: Operation) -> ReduceResult:
    block_id = op.payload.get("id", "")
    if find_by_id(tree, block_id) is None:
        return _reject(tree, "BLOCK_NOT_FOUND", block_id)
    return _ok(delete_by_id(tree, block_id), block_id)


def _handle_style_set(tree: Tree, op: Operation) -> ReduceResult:
    p = op.payload
    block_id = p.get("id", "")
    block = find_by_id(tree, block_id)
    if block is None:
        return _reject(tree, "BLOCK_NOT_FOUND", block_id)

    attr = "content_style" if p.get("scope") == "content" else "container_style"
    merged = merge_styles(getattr(block, attr), p.get("styles", {}))
    return _ok(update_by_id(tree, block_id, {attr: merged}), block_id)


def _handle_resize(tree: Tree, op: Operation) -> ReduceResult:
    p = op.payload
    layout_id = p.get("id", "")
    block = find_by_id(tree, layout_id)
    if block is None:
        return _reject(tree, "BLOCK_NOT_FOUND", layout_id)
    if not isinstance(block, Layout):
        return _reject(tree, "NOT_A_LAYOUT", layout_id)
    return _ok(resize_layout(tree, layout_id, p.get("count", 0)), layout_id)


_HANDLERS = {
    "block.insert": _handle_insert,
    "block.update": _handle_update,
    "block.remove": _handle_remove,
    "style.set": _handle_style_set,
    "layout.resize": _handle_resize,
}
