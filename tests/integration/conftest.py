import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio

from errorkit.config.settings import Settings
from errorkit.database.connection import close_pool, get_connection, open_pool

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "errorkit_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest_asyncio.fixture
async def integration_pool(test_settings: Settings) -> AsyncGenerator[None, None]:
    try:
        await open_pool(test_settings)
        async with get_connection() as conn:
            await conn.execute(SCHEMA_PATH.read_text())
            await conn.commit()
    except Exception as e:
        await close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        await close_pool()


@pytest_asyncio.fixture
async def integration_cleanup(integration_pool: None) -> AsyncGenerator[list[int], None]:
    cleanup: list[int] = []
    yield cleanup
    if not cleanup:
        return
    async with get_connection() as conn:
        await conn.execute("DELETE FROM exception_logs WHERE id = ANY(%s)", (cleanup,))
        await conn.commit()
