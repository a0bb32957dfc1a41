"""
Signature Assembly -- Legacy and Malformed Record Tests

Records written before trees were stored carry only id, name and htmlContent.
They open as an empty canvas that keeps the name, flagged restored=False.
Records whose fields or tree cannot be parsed raise TemplateParseError.
"""

import logging

import pytest

from signature_builder.config import settings
from signature_builder.kernel.assembly import TemplateParseError

COLLECTION = settings.TEMPLATES_COLLECTION


class TestHtmlOnlyRecord:
    @pytest.mark.asyncio
    async def test_opens_empty_canvas(self, assembly, storage):
        await storage.create(
            COLLECTION,
            {"id": "legacy_1", "name": "Old signature", "htmlContent": "<table>...</table>"},
        )
        session = await assembly.load("legacy_1")
        assert session.tree == []
        assert session.name == "Old signature"
        assert session.template_id == "legacy_1"
        assert session.restored is False

    @pytest.mark.asyncio
    async def test_logs_info(self, assembly, storage, caplog):
        await storage.create(COLLECTION, {"id": "legacy_2", "name": "Old", "htmlContent": ""})
        with caplog.at_level(logging.INFO, logger="signature_builder.kernel.assembly"):
            await assembly.load("legacy_2")
        assert "no stored tree" in caplog.text

    @pytest.mark.asyncio
    async def test_resave_overwrites_html(self, assembly, storage):
        await storage.create(COLLECTION, {"id": "legacy_3", "name": "Old", "htmlContent": "<p>old</p>"})
        session = await assembly.load("legacy_3")
        session.drop("heading")
        await assembly.save(session)

        record = await storage.read(COLLECTION, "legacy_3")
        assert "<p>old</p>" not in record["htmlContent"]
        assert record["tree"][0]["kind"] == "heading"
        assert session.restored is True


class TestMalformedRecord:
    @pytest.mark.asyncio
    async def test_missing_name(self, assembly, storage):
        await storage.create(COLLECTION, {"id": "bad_1", "htmlContent": ""})
        with pytest.raises(TemplateParseError):
            await assembly.load("bad_1")

    @pytest.mark.asyncio
    async def test_unknown_block_kind(self, assembly, storage):
        await storage.create(
            COLLECTION,
            {"id": "bad_2", "name": "Bad", "htmlContent": "", "tree": [{"id": "x", "kind": "video"}]},
        )
        with pytest.raises(TemplateParseError):
            await assembly.load("bad_2")

    @pytest.mark.asyncio
    async def test_layout_count_mismatch(self, assembly, storage):
        tree = [{"id": "L", "kind": "layout", "column_count": 3, "columns": [[], []]}]
        await storage.create(COLLECTION, {"id": "bad_3", "name": "Bad", "htmlContent": "", "tree": tree})
        with pytest.raises(TemplateParseError):
            await assembly.load("bad_3")

    @pytest.mark.asyncio
    async def test_list_skips_malformed(self, assembly, storage):
        await storage.create(COLLECTION, {"id": "ok", "name": "Fine", "htmlContent": ""})
        await storage.create(COLLECTION, {"id": "bad", "htmlContent": ""})
        templates = await assembly.list_templates()
        assert [t.id for t in templates] == ["ok"]
