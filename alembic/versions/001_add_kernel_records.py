"""add kernel_records table for template storage

Revision ID: 001
Revises:
Create Date: 2026-10-18 09:12:00.000000
"""
from typing import Sequence, Union

from alembic import op


revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # One JSONB document per (collection, id)
    op.execute("""
        CREATE TABLE kernel_records (
            collection TEXT NOT NULL,
            id TEXT NOT NULL,
            data JSONB NOT NULL,
            created_at TIMESTAMPTZ DEFAULT now(),
            updated_at TIMESTAMPTZ DEFAULT now(),
            PRIMARY KEY (collection, id)
        );
    """)

    # Listing a collection is ordered by creation time
    op.execute("""
        CREATE INDEX idx_kernel_records_created ON kernel_records(collection, created_at);
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS kernel_records CASCADE;")
