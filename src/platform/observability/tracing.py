"""
OpenTelemetry tracing configuration.

Spans come from FastAPI and SQLAlchemy auto-instrumentation plus the manual
spans opened in the authorization gate and the booking use case. Export goes
to an OTLP collector when OTEL_EXPORTER_OTLP_ENDPOINT is set; without an
endpoint the provider still records spans but ships them nowhere.

The global tracer provider can only be installed once per process, while the
app lifespan may run many times (one TestClient per test), so the provider is
created on first `setup()` and reused afterwards.
"""

import os
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import (
    DEPLOYMENT_ENVIRONMENT,
    SERVICE_NAME,
    SERVICE_VERSION,
    Resource,
)
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

from src.platform.config.core_setting import settings


UNTRACED_URLS = 'health,metrics'

_process_provider: TracerProvider | None = None


class TracingConfig:
    """
    Usage:
        tracing = TracingConfig(service_name='restaurant-reservation')
        tracing.setup()
        tracing.instrument_sqlalchemy(engine=database.engine)
    """

    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: str | None = None,
        enable_console: bool = False,
    ) -> None:
        self.service_name = service_name
        self.otlp_endpoint = otlp_endpoint or os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT')
        self.enable_console = (
            enable_console or os.getenv('OTEL_CONSOLE_EXPORT', 'false').lower() == 'true'
        )

        self._provider: TracerProvider | None = None

    def _build_provider(self) -> TracerProvider:
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: settings.VERSION,
                DEPLOYMENT_ENVIRONMENT: os.getenv('DEPLOY_ENV', 'local_dev'),
            }
        )

        # ALWAYS_ON: volume control belongs to tail sampling in the collector
        provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)

        if self.otlp_endpoint:
            provider.add_span_processor(
                BatchSpanProcessor(OTLPSpanExporter(endpoint=self.otlp_endpoint))
            )
        if self.enable_console:
            provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

        return provider

    def setup(self) -> None:
        global _process_provider
        if _process_provider is None:
            _process_provider = self._build_provider()
            trace.set_tracer_provider(_process_provider)
        self._provider = _process_provider

    def instrument_fastapi(self, *, app: Any, excluded_urls: str = UNTRACED_URLS) -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded_urls)

    def instrument_sqlalchemy(self, *, engine: Any) -> None:
        instrumentor = SQLAlchemyInstrumentor()
        if instrumentor.is_instrumented_by_opentelemetry:
            return
        # AsyncEngine wraps a sync engine; the instrumentor hooks the sync one
        instrumentor.instrument(engine=getattr(engine, 'sync_engine', engine))

    def shutdown(self) -> None:
        # The provider outlives the lifespan (it is shut down at interpreter exit); flush only
        if self._provider:
            self._provider.force_flush()
