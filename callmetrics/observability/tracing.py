# callmetrics/observability/tracing.py
"""
Minimal OpenTelemetry tracing bootstrap.
- Library code only talks to the API tracer (a no-op until a provider is set).
- init_tracing installs an SDK TracerProvider with a Console exporter.
- Idempotent: safe to call multiple times.
"""
from __future__ import annotations

import typing as _t

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

_OTEL_INITIALIZED = False


def get_tracer() -> trace.Tracer:
    return trace.get_tracer("callmetrics")


def init_tracing(config_module: _t.Any | None = None) -> bool:
    """Initialize the OpenTelemetry tracer provider (idempotent).

    Returns True when a provider was installed by this call.
    Does nothing unless TRACING_ENABLED is set on the config.
    """
    global _OTEL_INITIALIZED

    if _OTEL_INITIALIZED:
        return False
    if not getattr(config_module, "TRACING_ENABLED", False):
        return False

    # Resource: service.name is important for trace grouping
    service_name = getattr(config_module, "SERVICE_NAME", None) or "callmetrics"

    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)

    _OTEL_INITIALIZED = True
    return True
