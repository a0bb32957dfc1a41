"""
PostgresStorage adapter for the signature kernel assembly layer.

Implements the TemplateStorage protocol using Postgres as the backend.
Records are stored as JSONB documents in the kernel_records table,
keyed by (collection, id).
"""

from __future__ import annotations

import json
from typing import Any

import asyncpg

from signature_builder.config import settings
from signature_builder.kernel.assembly import TemplateStorage


class PostgresStorage(TemplateStorage):
    """
    Postgres-based storage for template records.

    One table serves every collection:
    - kernel_records: (collection, id) → data JSONB
    """

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    @classmethod
    async def from_settings(cls) -> PostgresStorage:
        """Open a pool against settings.DATABASE_URL."""
        if not settings.DATABASE_URL:
            raise RuntimeError("DATABASE_URL is not set")
        pool = await asyncpg.create_pool(settings.DATABASE_URL)
        return cls(pool)

    async def create(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        """Insert a new record. Fails if the id already exists in the collection."""
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO kernel_records (collection, id, data, created_at, updated_at)
                VALUES ($1, $2, $3::jsonb, now(), now())
                """,
                collection,
                record["id"],
                json.dumps(record),
            )
        return dict(record)

    async def update(self, collection: str, record_id: str, partial: dict[str, Any]) -> None:
        """Merge partial fields into the stored document (upsert)."""
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO kernel_records (collection, id, data, created_at, updated_at)
                VALUES ($1, $2, $3::jsonb, now(), now())
                ON CONFLICT (collection, id)
                DO UPDATE SET data = kernel_records.data || EXCLUDED.data, updated_at = now()
                """,
                collection,
                record_id,
                json.dumps({"id": record_id, **partial}),
            )

    async def read(self, collection: str, record_id: str) -> dict[str, Any] | None:
        """Fetch a record. Returns None if not found."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT data FROM kernel_records WHERE collection = $1 AND id = $2",
                collection,
                record_id,
            )
            return json.loads(row["data"]) if row else None

    async def delete(self, collection: str, record_id: str) -> None:
        async with self.pool.acquire() as conn:
            await conn.execute(
                "DELETE FROM kernel_records WHERE collection = $1 AND id = $2",
                collection,
                record_id,
            )

    async def list(self, collection: str) -> list[dict[str, Any]]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT data FROM kernel_records WHERE collection = $1 ORDER BY created_at, id",
                collection,
            )
            return [json.loads(row["data"]) for row in rows]

    async def close(self) -> None:
        """Close the connection pool."""
        await self.pool.close()
