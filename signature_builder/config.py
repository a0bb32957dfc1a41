"""
Signature builder configuration — all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
The pure kernel needs none of these; only the storage and save boundary read them.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Database (PostgresStorage)
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")

    # Storage
    TEMPLATES_COLLECTION: str = os.environ.get("TEMPLATES_COLLECTION", "signatureTemplates")

    # Rendering
    SIGNATURE_MAX_WIDTH: int = int(os.environ.get("SIGNATURE_MAX_WIDTH", "600"))
    SIGNATURE_BODY_BACKGROUND: str = os.environ.get("SIGNATURE_BODY_BACKGROUND", "#f1f5f9")

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")


# Singleton instance
settings = Settings()
