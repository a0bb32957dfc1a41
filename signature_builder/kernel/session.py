"""
Signature Kernel — Editing Session

One session owns one document tree and one selection.
UI event handlers call into it; it validates, reduces, and keeps the result.

Selection is a single block id, matched exactly at every nesting level:
selecting a block inside a layout column selects that block only.
"""

from __future__ import annotations

import logging
from typing import Any

from signature_builder.kernel.operations import (
    insert_op,
    remove_op,
    resize_op,
    style_op,
    update_op,
)
from signature_builder.kernel.primitives import validate_operation
from signature_builder.kernel.reducer import empty_tree, reduce
from signature_builder.kernel.renderer import render
from signature_builder.kernel.tree import Tree, find_by_id
from signature_builder.kernel.types import (
    ROOT,
    Block,
    ColumnTarget,
    Operation,
    ReduceResult,
    RenderOptions,
)

logger = logging.getLogger(__name__)


class Selection:
    """Which block the properties panel is editing, if any."""

    __slots__ = ("selected_id",)

    def __init__(self) -> None:
        self.selected_id: str | None = None

    def select(self, block_id: str) -> None:
        self.selected_id = block_id

    def clear(self) -> None:
        self.selected_id = None

    def is_selected(self, block_id: str) -> bool:
        return self.selected_id is not None and self.selected_id == block_id

    def __repr__(self) -> str:  # pragma: no cover
        return f"Selection(selected_id={self.selected_id!r})"


class EditorSession:
    """
    The in-memory editing state of one signature template.

    name and template_id describe the persisted record this session was
    loaded from (or will be saved as); the tree itself is the single
    source of truth for the canvas.
    """

    def __init__(
        self,
        tree: Tree | None = None,
        *,
        name: str = "",
        template_id: str | None = None,
        restored: bool = True,
    ) -> None:
        self._tree: Tree = tree if tree is not None else empty_tree()
        self.selection = Selection()
        self.name = name
        self.template_id = template_id
        # False when the stored record had HTML only and the canvas started empty
        self.restored = restored

    @property
    def tree(self) -> Tree:
        return self._tree

    @property
    def selected_block(self) -> Block | None:
        if self.selection.selected_id is None:
            return None
        return find_by_id(self._tree, self.selection.selected_id)

    # -- operations --

    def apply(self, op: Operation) -> ReduceResult:
        """
        Validate → reduce → keep the new tree.
        Rejections are logged and returned, never raised.
        """
        errors = validate_operation(op.type, op.payload)
        if errors:
            logger.debug("Rejected %s: %s", op.type, "; ".join(errors))
            return ReduceResult(tree=self._tree, applied=False, error="INVALID: " + "; ".join(errors))

        result = reduce(self._tree, op)
        if result.applied:
            self._tree = result.tree
        else:
            logger.debug("Rejected %s: %s", op.type, result.error)
        return result

    def drop(self, kind: str, target: str | ColumnTarget = ROOT) -> Block | None:
        """
        Palette placement. Inserts a block with registry defaults and selects it.
        Returns the new block, or None when the drop did not apply.
        """
        result = self.apply(insert_op(kind, target))
        if not result.applied or result.block_id is None:
            return None
        self.selection.select(result.block_id)
        return find_by_id(self._tree, result.block_id)

    def update(self, block_id: str, **attrs: Any) -> ReduceResult:
        return self.apply(update_op(block_id, **attrs))

    def set_style(self, block_id: str, scope: str, **styles: Any) -> ReduceResult:
        return self.apply(style_op(block_id, scope, **styles))

    def resize(self, layout_id: str, count: int) -> ReduceResult:
        return self.apply(resize_op(layout_id, count))

    def remove(self, block_id: str) -> ReduceResult:
        result = self.apply(remove_op(block_id))
        # The selected block may have gone with a removed layout
        if result.applied and self.selected_block is None:
            self.selection.clear()
        return result

    # -- wholesale --

    def replace_tree(self, tree: Tree) -> None:
        """Swap the whole tree (e.g. loading another template). Clears the selection."""
        self._tree = tree
        self.selection.clear()

    def render(self, options: RenderOptions | None = None) -> str:
        return render(self._tree, options)
