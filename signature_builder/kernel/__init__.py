"""
Signature Kernel — the pure engine.

Components:
  registry    — block kind → default attributes
  tree        — find / insert / update / delete / resize over the block tree
  primitives  — validation layer for the editor operations
  reducer     — (tree, operation) → tree  (pure, never throws)
  renderer    — tree → email-safe nested-table HTML
  session     — one editing session: tree + selection
  assembly    — coordinates session + renderer + IO (template storage)
"""

from signature_builder.kernel.assembly import (
    MemoryStorage,
    PersistenceError,
    TemplateAssembly,
    TemplateNameRequired,
    TemplateNotFound,
    TemplateParseError,
    TemplateStorage,
)
from signature_builder.kernel.primitives import validate_operation
from signature_builder.kernel.reducer import empty_tree, reduce, replay
from signature_builder.kernel.renderer import render
from signature_builder.kernel.session import EditorSession, Selection
from signature_builder.kernel.tree import (
    delete_by_id,
    find_by_id,
    insert,
    resize_columns,
    update_by_id,
)

__all__ = [
    "validate_operation",
    "reduce",
    "replay",
    "empty_tree",
    "render",
    "find_by_id",
    "insert",
    "update_by_id",
    "delete_by_id",
    "resize_columns",
    "EditorSession",
    "Selection",
    "TemplateAssembly",
    "TemplateStorage",
    "MemoryStorage",
    "TemplateNameRequired",
    "TemplateNotFound",
    "TemplateParseError",
    "PersistenceError",
]
