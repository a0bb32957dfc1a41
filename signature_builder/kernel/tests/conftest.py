"""
Signature kernel test configuration.

Kernel tests use MemoryStorage and function-scoped event loops.
PostgresStorage tests that need DATABASE_URL are skipped automatically when not set.
"""

import pytest

from signature_builder.kernel.assembly import MemoryStorage, TemplateAssembly


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def assembly(storage):
    return TemplateAssembly(storage)
