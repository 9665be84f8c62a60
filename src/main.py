"""
Production FastAPI Application

Run with: uvicorn src.main:app --host 0.0.0.0 --port 8000
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import SERVICE_NAME, create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Reservation Service] Starting up...')

    tracing = TracingConfig(service_name=SERVICE_NAME)
    tracing.setup()
    Logger.base.info('📊 [Reservation Service] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Reservation Service] Dependency injection wired')

    if settings.STORE_BACKEND == 'postgres':
        database = container.database()
        tracing.instrument_sqlalchemy(engine=database.engine)
        await database.create_tables()
        Logger.base.info('🗄️  [Reservation Service] Database engine ready + instrumented')
    else:
        Logger.base.warning('🧪 [Reservation Service] In-memory store, data is not persisted')

    Logger.base.info('✅ [Reservation Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Reservation Service] Shutting down...')

    if settings.STORE_BACKEND == 'postgres':
        await container.database().dispose()
        Logger.base.info('🗄️  [Reservation Service] Database engine disposed')

    tracing.shutdown()
    container.unwire()
    container.reset_singletons()

    Logger.base.info('👋 [Reservation Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
