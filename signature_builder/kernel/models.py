"""Signature template record: the persisted unit."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SignatureTemplate(BaseModel):
    """
    One row of the signature templates collection.

    html_content is exactly what the renderer produced at save time.
    tree is the structured document the editor re-opens; records written
    before trees were stored have None here.
    """

    model_config = {"populate_by_name": True, "extra": "ignore"}

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    html_content: str = Field(default="", alias="htmlContent")
    tree: list[dict[str, Any]] | None = None

    def to_record(self) -> dict[str, Any]:
        """Dict in the storage's field naming (htmlContent)."""
        return self.model_dump(by_alias=True)
