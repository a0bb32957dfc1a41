"""
Tests for PostgresStorage adapter.

Requires a running Postgres instance with the kernel_records table
(alembic upgrade head).
"""

import os
import uuid

import asyncpg
import pytest

from signature_builder.kernel.assembly import TemplateAssembly
from signature_builder.kernel.postgres_storage import PostgresStorage


@pytest.fixture
async def db_pool():
    """Create a connection pool for tests."""
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set")

    pool = await asyncpg.create_pool(database_url)
    yield pool
    await pool.close()


@pytest.fixture
async def storage(db_pool):
    """Create a PostgresStorage instance."""
    return PostgresStorage(db_pool)


@pytest.fixture
def collection():
    """A throwaway collection per test."""
    return f"test_{uuid.uuid4().hex}"


class TestPostgresStorage:
    """Test PostgresStorage CRUD operations."""

    @pytest.mark.asyncio
    async def test_create_and_read(self, storage, collection):
        record = {"id": "t1", "name": "Sales", "htmlContent": "<table></table>", "tree": []}
        await storage.create(collection, record)
        assert await storage.read(collection, "t1") == record

    @pytest.mark.asyncio
    async def test_read_nonexistent(self, storage, collection):
        assert await storage.read(collection, "missing") is None

    @pytest.mark.asyncio
    async def test_update_merges(self, storage, collection):
        await storage.create(collection, {"id": "t1", "name": "Sales", "htmlContent": "v1"})
        await storage.update(collection, "t1", {"htmlContent": "v2"})
        record = await storage.read(collection, "t1")
        assert record["name"] == "Sales"
        assert record["htmlContent"] == "v2"

    @pytest.mark.asyncio
    async def test_delete(self, storage, collection):
        await storage.create(collection, {"id": "t1", "name": "Sales"})
        await storage.delete(collection, "t1")
        assert await storage.read(collection, "t1") is None

    @pytest.mark.asyncio
    async def test_list_scoped_to_collection(self, storage, collection):
        other = f"{collection}_other"
        await storage.create(collection, {"id": "a", "name": "A"})
        await storage.create(collection, {"id": "b", "name": "B"})
        await storage.create(other, {"id": "c", "name": "C"})

        records = await storage.list(collection)
        assert [r["id"] for r in records] == ["a", "b"]

        for c, i in ((collection, "a"), (collection, "b"), (other, "c")):
            await storage.delete(c, i)


class TestAssemblyWithPostgres:
    """Test the assembly round trip against Postgres."""

    @pytest.mark.asyncio
    async def test_save_and_load(self, storage, collection):
        assembly = TemplateAssembly(storage, collection=collection)
        session = assembly.new("Postgres round trip")
        session.drop("heading")
        session.drop("layout")

        template = await assembly.save(session)
        loaded = await assembly.load(template.id)

        assert loaded.name == "Postgres round trip"
        assert [b.kind for b in loaded.tree] == ["heading", "layout"]

        await assembly.delete(template.id)
