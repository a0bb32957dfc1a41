"""
Signature Kernel — Shared Types

Data classes used across registry, tree, reducer, renderer, and assembly.
These are the contracts that bind the kernel together.

Blocks are a tagged union: one dataclass per kind, the kind itself is a
class-level tag. Kind-specific attributes live only on their own class, so a
spacer can never carry an image source.

Tree shape:
- a tree is an ordered list of top-level blocks
- a Layout block owns `column_count` ordered lists of blocks (its columns)
- no parent pointers; containment is the only structure
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

# ---------------------------------------------------------------------------
# Block kinds
# ---------------------------------------------------------------------------

BLOCK_KINDS: tuple[str, ...] = (
    "heading",
    "paragraph",
    "button",
    "image",
    "spacer",
    "layout",
)

TEXT_KINDS: set[str] = {"heading", "paragraph", "button"}

STYLE_SCOPES: set[str] = {"content", "container"}

MIN_COLUMNS = 1
MAX_COLUMNS = 4

# Insert target for the top-level sequence
ROOT = "root"


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


@dataclass
class Block:
    """
    A single node in the document tree.

    content_style:   the block's own element (colour, size, alignment...)
    container_style: the cell that wraps the block (spacing, alignment)
    """

    kind: ClassVar[str] = ""

    id: str
    content_style: dict[str, Any] = field(default_factory=dict)
    container_style: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.id, "kind": self.kind}
        for f in fields(self):
            if f.name == "id":
                continue
            value = getattr(self, f.name)
            if f.name == "columns":
                value = [[b.to_dict() for b in column] for column in value]
            elif isinstance(value, dict):
                value = dict(value)
            d[f.name] = value
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Block:
        kind = d.get("kind")
        block_cls = BLOCK_CLASSES.get(kind)  # type: ignore[arg-type]
        if block_cls is None:
            raise ValueError(f"Unknown block kind: {kind!r}")
        if "id" not in d:
            raise ValueError(f"Block of kind {kind!r} has no id")

        kwargs: dict[str, Any] = {}
        for f in fields(block_cls):
            if f.name not in d:
                continue
            value = d[f.name]
            if f.name == "columns":
                value = [[Block.from_dict(b) for b in column] for column in value]
            elif isinstance(value, dict):
                value = dict(value)
            kwargs[f.name] = value
        return block_cls(**kwargs)


@dataclass
class Heading(Block):
    kind: ClassVar[str] = "heading"

    content: str = ""


@dataclass
class Paragraph(Block):
    kind: ClassVar[str] = "paragraph"

    content: str = ""


@dataclass
class Button(Block):
    kind: ClassVar[str] = "button"

    content: str = ""  # label
    link_target: str = "#"


@dataclass
class Image(Block):
    kind: ClassVar[str] = "image"

    image_source: str = ""
    link_target: str = ""  # empty = not clickable


@dataclass
class Spacer(Block):
    kind: ClassVar[str] = "spacer"

    spacer_height: int = 20  # px


@dataclass
class Layout(Block):
    """
    The container block. Owns one ordered block sequence per column.
    len(columns) == column_count, always.
    """

    kind: ClassVar[str] = "layout"

    column_count: int = 2
    columns: list[list[Block]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.column_count < MIN_COLUMNS:
            raise ValueError(f"Layout '{self.id}' needs at least {MIN_COLUMNS} column, got {self.column_count}")
        if not self.columns:
            self.columns = [[] for _ in range(self.column_count)]
        if len(self.columns) != self.column_count:
            raise ValueError(
                f"Layout '{self.id}' has column_count={self.column_count} but {len(self.columns)} columns"
            )


BLOCK_CLASSES: dict[str, type[Block]] = {
    "heading": Heading,
    "paragraph": Paragraph,
    "button": Button,
    "image": Image,
    "spacer": Spacer,
    "layout": Layout,
}

# Attributes owned by the mutation engine, never by a shallow update
STRUCTURAL_FIELDS: set[str] = {"id", "columns"}


def updatable_fields(block: Block) -> set[str]:
    """Attribute names a shallow update may touch on this block."""
    return {f.name for f in fields(block)} - STRUCTURAL_FIELDS


def tree_to_dict(tree: list[Block]) -> list[dict[str, Any]]:
    return [b.to_dict() for b in tree]


def tree_from_dict(data: list[dict[str, Any]]) -> list[Block]:
    if not isinstance(data, list):
        raise ValueError("Tree must be a list of blocks")
    return [Block.from_dict(d) for d in data]


# ---------------------------------------------------------------------------
# Targets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ColumnTarget:
    """Addresses one column of one layout block."""

    layout_id: str
    column_index: int


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

OPERATION_TYPES: set[str] = {
    "block.insert",
    "block.update",
    "block.remove",
    "style.set",
    "layout.resize",
}


@dataclass
class Operation:
    """
    One editor action. The reducer reads only `type` and `payload`.
    """

    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Operation:
        return cls(type=d["type"], payload=d["payload"])


@dataclass
class ReduceResult:
    """
    Result of applying one operation to a tree.
    The reducer never throws; it always returns one of these.
    """

    tree: list[Block]
    applied: bool
    error: str | None = None
    block_id: str | None = None  # id of the block the operation touched or created


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@dataclass
class RenderOptions:
    """Options controlling the serializer's outer document."""

    max_width: int = 600
    body_background: str = "#f1f5f9"
    canvas_background: str = "#ffffff"
    fragment: bool = False  # outer table only, no <html> shell
