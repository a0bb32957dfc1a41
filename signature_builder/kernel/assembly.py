"""
Signature Kernel — Assembly Layer

Sits between the pure functions (reducer, renderer) and the outside world
(the template store). Coordinates the lifecycle of a signature template.

Operations: new, load, save, delete, list

This is where IO happens. The tree, reducer and renderer are pure.
A save writes {id, name, htmlContent, tree}; the last write wins.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from pydantic import ValidationError

from signature_builder.config import settings
from signature_builder.kernel.models import SignatureTemplate
from signature_builder.kernel.renderer import render
from signature_builder.kernel.session import EditorSession
from signature_builder.kernel.types import RenderOptions, tree_from_dict, tree_to_dict

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TemplateNameRequired(Exception):
    """Save attempted with an empty name. Raised before any storage call."""

    pass


class TemplateNotFound(Exception):
    """Template does not exist in storage."""

    pass


class TemplateParseError(Exception):
    """Record exists but its fields or stored tree are malformed."""

    pass


class PersistenceError(Exception):
    """The store failed to write the template. The session is unchanged."""

    pass


# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------


class TemplateStorage:
    """
    Abstract key-value storage interface.
    Implement with Postgres for production, or in-memory for tests.
    """

    async def create(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        """Insert a record (it carries its own 'id'). Raises if the id exists. Returns the stored record."""
        raise NotImplementedError

    async def update(self, collection: str, record_id: str, partial: dict[str, Any]) -> None:
        """Merge partial fields into an existing record."""
        raise NotImplementedError

    async def read(self, collection: str, record_id: str) -> dict[str, Any] | None:
        """Fetch a record. Returns None if not found."""
        raise NotImplementedError

    async def delete(self, collection: str, record_id: str) -> None:
        raise NotImplementedError

    async def list(self, collection: str) -> list[dict[str, Any]]:
        """All records of a collection, oldest first."""
        raise NotImplementedError


class MemoryStorage(TemplateStorage):
    """In-memory storage for testing."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}

    async def create(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        records = self.collections.setdefault(collection, {})
        if record["id"] in records:
            raise ValueError(f"Record {record['id']!r} already exists in {collection!r}")
        records[record["id"]] = dict(record)
        return dict(record)

    async def update(self, collection: str, record_id: str, partial: dict[str, Any]) -> None:
        records = self.collections.setdefault(collection, {})
        records[record_id] = {**records.get(record_id, {"id": record_id}), **partial}

    async def read(self, collection: str, record_id: str) -> dict[str, Any] | None:
        record = self.collections.get(collection, {}).get(record_id)
        return dict(record) if record is not None else None

    async def delete(self, collection: str, record_id: str) -> None:
        self.collections.get(collection, {}).pop(record_id, None)

    async def list(self, collection: str) -> list[dict[str, Any]]:
        return [dict(r) for r in self.collections.get(collection, {}).values()]


# ---------------------------------------------------------------------------
# Assembly class
# ---------------------------------------------------------------------------


class TemplateAssembly:
    """
    Manages the lifecycle of signature templates.
    Coordinates session + renderer + storage.
    """

    def __init__(self, storage: TemplateStorage, collection: str | None = None):
        self._storage = storage
        self._collection = collection or settings.TEMPLATES_COLLECTION

    def render_options(self) -> RenderOptions:
        return RenderOptions(
            max_width=settings.SIGNATURE_MAX_WIDTH,
            body_background=settings.SIGNATURE_BODY_BACKGROUND,
        )

    # -- new --

    def new(self, name: str = "New Template") -> EditorSession:
        """
        Start an empty canvas.
        Does NOT save. The first save() creates the record.
        """
        return EditorSession(name=name)

    # -- load --

    async def load(self, template_id: str) -> EditorSession:
        """
        Read a template and re-open its tree for editing.
        Records without a stored tree open as an empty canvas with their name.
        """
        record = await self._storage.read(self._collection, template_id)
        if record is None:
            raise TemplateNotFound(template_id)

        try:
            template = SignatureTemplate.model_validate(record)
        except ValidationError as e:
            raise TemplateParseError(f"Failed to parse template {template_id}: {e}") from e

        if template.tree is None:
            logger.info("Template %s has no stored tree, opening an empty canvas", template_id)
            return EditorSession(name=template.name, template_id=template.id, restored=False)

        try:
            tree = tree_from_dict(template.tree)
        except (ValueError, TypeError, KeyError) as e:
            raise TemplateParseError(f"Failed to parse tree of template {template_id}: {e}") from e

        return EditorSession(tree, name=template.name, template_id=template.id)

    # -- save --

    async def save(self, session: EditorSession) -> SignatureTemplate:
        """
        Render the session's tree and write it back.

        Creates the record on first save, updates it afterwards.
        Raises TemplateNameRequired before touching storage, PersistenceError
        when the store fails twice. The session is only updated on success.
        """
        name = session.name.strip()
        if not name:
            raise TemplateNameRequired("Template name is required")

        template = SignatureTemplate(
            id=session.template_id or f"template_{uuid.uuid4().hex}",
            name=name,
            html_content=render(session.tree, self.render_options()),
            tree=tree_to_dict(session.tree),
        )
        record = template.to_record()

        try:
            await self._write(session.template_id, record)
        except Exception:
            # Retry once
            logger.warning("Saving template %s failed, retrying once", template.id, exc_info=True)
            try:
                await self._write(session.template_id, record)
            except Exception as e:
                raise PersistenceError(f"Failed to save template {template.id}") from e

        session.template_id = template.id
        session.name = name
        session.restored = True
        return template

    async def _write(self, existing_id: str | None, record: dict[str, Any]) -> None:
        if existing_id is None:
            await self._storage.create(self._collection, record)
        else:
            partial = {k: v for k, v in record.items() if k != "id"}
            await self._storage.update(self._collection, existing_id, partial)

    # -- delete / list --

    async def delete(self, template_id: str) -> None:
        await self._storage.delete(self._collection, template_id)

    async def list_templates(self) -> list[SignatureTemplate]:
        """All templates of the collection; malformed records are skipped."""
        templates: list[SignatureTemplate] = []
        for record in await self._storage.list(self._collection):
            try:
                templates.append(SignatureTemplate.model_validate(record))
            except ValidationError:
                logger.warning("Skipping malformed template record %r", record.get("id"))
        return templates
