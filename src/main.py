"""
Production FastAPI Application

Run with: granian --interface asgi src.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.command.seed_tables_use_case import SeedTablesUseCase


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Reservation Service] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Reservation Service] Dependency injection wired')

    await create_db_and_tables()
    Logger.base.info('🗄️  [Reservation Service] Database tables ready')

    if settings.SEED_TABLES_ON_STARTUP:
        use_case = SeedTablesUseCase(
            table_query_repo=container.table_query_repo(),
            table_command_repo=container.table_command_repo(),
        )
        await use_case.seed()

    Logger.base.info(
        f'✅ [Reservation Service] Ready (policy={settings.TABLE_SELECTION_POLICY}, '
        f'max_attempts={settings.RESERVATION_COMMIT_MAX_ATTEMPTS})'
    )

    yield

    Logger.base.info('🛑 [Reservation Service] Shutting down...')

    await dispose_engine()
    Logger.base.info('🗄️  [Reservation Service] Database engine disposed')

    container.unwire()
    cleanup()

    Logger.base.info('👋 [Reservation Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
