from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from errorkit.config.settings import Settings
from errorkit.database.connection import close_pool, open_pool
from errorkit.errors.service import ErrorService, build_error_service
from errorkit.logging.logger import Log


@asynccontextmanager
async def error_service_lifespan(
    settings: Settings | None = None,
) -> AsyncGenerator[ErrorService, None]:
    """Composition root: configure logging -> open pool -> yield the service."""
    settings = settings or Settings()
    Log.configure(settings.log_level)
    uses_database = settings.audit_sink.lower() == "database"
    if uses_database:
        await open_pool(settings)

    try:
        service = build_error_service(settings)
        Log.info(f"Error service ready (audit sink: {settings.audit_sink})")
        yield service
    finally:
        if uses_database:
            await close_pool()
