"""
Signature Kernel — Mutation Engine

Recursive operations over the document tree:
insert, find_by_id, update_by_id, delete_by_id, resize_columns.

Pure with respect to inputs: the tree passed in is never modified.
Every change rebuilds the sequences on the path from the root to the changed
node (new list instances, new Layout instances); everything off that path
keeps its original reference, so observers can detect changes by identity.

Not-found ids, unknown layouts and out-of-range columns are not errors.
They come from interactive drop/edit events racing with other edits; the
operation is a no-op and the very same tree object comes back.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import replace
from itertools import chain
from typing import Any

from signature_builder.kernel.types import (
    MIN_COLUMNS,
    ROOT,
    Block,
    ColumnTarget,
    Layout,
    updatable_fields,
)

Tree = list[Block]

# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def walk(blocks: list[Block]) -> Iterator[Block]:
    """Pre-order walk: each block, then each of its columns in order."""
    for block in blocks:
        yield block
        if isinstance(block, Layout):
            for column in block.columns:
                yield from walk(column)


def collect_ids(blocks: Block | list[Block]) -> list[str]:
    """All ids in a block (itself included) or a sequence, in walk order."""
    if isinstance(blocks, Block):
        blocks = [blocks]
    return [b.id for b in walk(blocks)]


def count_blocks(blocks: list[Block]) -> int:
    return sum(1 for _ in walk(blocks))


def find_by_id(tree: Tree, block_id: str) -> Block | None:
    """Depth-first search through the root sequence and every column."""
    for block in walk(tree):
        if block.id == block_id:
            return block
    return None


# ---------------------------------------------------------------------------
# Path rewriting
# ---------------------------------------------------------------------------

# fn(node) → replacement node, None to drop it, or node itself for "no change"
_Rewrite = Callable[[Block], "Block | None"]


def _rewrite(seq: list[Block], block_id: str, fn: _Rewrite) -> list[Block] | None:
    """
    Return a new sequence where block_id has been rewritten by fn,
    or None when the block was not found or fn left it unchanged.
    """
    for i, node in enumerate(seq):
        if node.id == block_id:
            new = fn(node)
            if new is node:
                return None
            if new is None:
                return [*seq[:i], *seq[i + 1 :]]
            return [*seq[:i], new, *seq[i + 1 :]]

        if isinstance(node, Layout):
            for c, column in enumerate(node.columns):
                new_column = _rewrite(column, block_id, fn)
                if new_column is not None:
                    columns = [*node.columns[:c], new_column, *node.columns[c + 1 :]]
                    return [*seq[:i], replace(node, columns=columns), *seq[i + 1 :]]
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def insert(tree: Tree, block: Block, target: str | ColumnTarget = ROOT) -> Tree:
    """
    Append block to the end of the addressed sequence (root or one column).
    No-op when the target does not resolve or the block reuses an existing id.
    """
    existing = set(collect_ids(tree))
    if any(bid in existing for bid in collect_ids(block)):
        return tree

    if target == ROOT:
        return [*tree, block]

    if not isinstance(target, ColumnTarget):
        return tree

    def add_to_column(node: Block) -> Block:
        if not isinstance(node, Layout):
            return node
        if not 0 <= target.column_index < node.column_count:
            return node
        columns = list(node.columns)
        columns[target.column_index] = [*columns[target.column_index], block]
        return replace(node, columns=columns)

    new_tree = _rewrite(tree, target.layout_id, add_to_column)
    return tree if new_tree is None else new_tree


def update_by_id(tree: Tree, block_id: str, partial: dict[str, Any]) -> Tree:
    """
    Replace the block with a shallow merge of its attributes and `partial`.

    `id` and `columns` are not updatable, unknown keys are ignored.
    A `column_count` key on a layout goes through resize_columns so the
    column list never disagrees with the count.
    """

    def merge(node: Block) -> Block:
        allowed = updatable_fields(node)
        attrs = {k: (dict(v) if isinstance(v, dict) else v) for k, v in partial.items() if k in allowed}
        count = attrs.pop("column_count", None)
        if not attrs and count is None:
            return node

        new = replace(node, **attrs) if attrs else node
        if count is not None and isinstance(new, Layout):
            new = resize_columns(new, count)
        return new

    new_tree = _rewrite(tree, block_id, merge)
    return tree if new_tree is None else new_tree


def delete_by_id(tree: Tree, block_id: str) -> Tree:
    """Remove the block wherever it lives. A layout takes its columns with it."""
    new_tree = _rewrite(tree, block_id, lambda node: None)
    return tree if new_tree is None else new_tree


def resize_columns(layout: Layout, new_count: int) -> Layout:
    """
    Change a layout's column count.

    Growing appends empty columns. Shrinking moves every block of the removed
    columns, in order, to the end of the last surviving column. Nothing is
    ever deleted. column_count and columns change together in one new Layout.
    A count that is not an int is ignored like one below 1.
    """
    current = layout.column_count
    if not isinstance(new_count, int) or isinstance(new_count, bool):
        return layout
    if new_count < MIN_COLUMNS or new_count == current:
        return layout

    if new_count > current:
        columns = [*layout.columns, *([] for _ in range(new_count - current))]
    else:
        last = [*layout.columns[new_count - 1], *chain.from_iterable(layout.columns[new_count:])]
        columns = [*layout.columns[: new_count - 1], last]

    return replace(layout, column_count=new_count, columns=columns)


def resize_layout(tree: Tree, layout_id: str, new_count: int) -> Tree:
    """resize_columns for a layout addressed by id anywhere in the tree."""

    def resize(node: Block) -> Block:
        if not isinstance(node, Layout):
            return node
        return resize_columns(node, new_count)

    new_tree = _rewrite(tree, layout_id, resize)
    return tree if new_tree is None else new_tree
