"""
FastAPI application assembly.

`create_app` is shared by `src.main` (uvicorn) and the test client; the caller
supplies the lifespan that wires the container and opens the store.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.dining.driving_adapter.http_controller.reservation_controller import (
    router as reservation_router,
)
from src.service.dining.driving_adapter.http_controller.restaurant_controller import (
    router as restaurant_router,
)
from src.service.dining.driving_adapter.http_controller.user_controller import (
    router as user_router,
)


SERVICE_NAME = 'restaurant-reservation'

# Routes carry their full paths (see route_constant), so no prefixes here
ROUTERS: list[tuple[APIRouter, str]] = [
    (user_router, 'user'),
    (restaurant_router, 'restaurant'),
    (reservation_router, 'reservation'),
]


def create_app(*, lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]]) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description='Restaurant discovery and table reservation',
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Instrument before routes are mounted so every route gets a server span
    TracingConfig(service_name=SERVICE_NAME).instrument_fastapi(app=app)

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,  # type: ignore
            allow_origins=settings.BACKEND_CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=['GET', 'POST', 'PUT', 'DELETE'],
            allow_headers=['Authorization', 'Content-Type'],
        )

    register_exception_handlers(app)

    for router, tag in ROUTERS:
        app.include_router(router, tags=[tag])

    _register_operational_endpoints(app)
    return app


def _register_operational_endpoints(app: FastAPI) -> None:
    @app.get('/health', include_in_schema=False)
    async def health_check() -> dict[str, str]:
        """Liveness probe; does not touch the store."""
        return {
            'status': 'healthy',
            'service': settings.PROJECT_NAME,
            'store': settings.STORE_BACKEND,
        }

    @app.get('/metrics', include_in_schema=False)
    async def get_metrics() -> PlainTextResponse:
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
