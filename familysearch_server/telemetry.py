"""OpenTelemetry setup for tracing outbound FamilySearch API calls.

Environment Variables:
    FAMILYSEARCH_TRACING_ENABLED: Set to 'true' to enable tracing (default: false)
    FAMILYSEARCH_OTLP_ENDPOINT: OTLP/HTTP collector URL (default: http://localhost:6006)
    FAMILYSEARCH_SERVICE_NAME: Service name shown in the tracing UI (default: familysearch-server)
"""

import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def is_tracing_enabled() -> bool:
    """Check if tracing is enabled via environment variable."""
    return os.getenv("FAMILYSEARCH_TRACING_ENABLED", "false").lower() == "true"


def get_otlp_endpoint() -> str:
    """Get the OTLP collector endpoint."""
    return os.getenv("FAMILYSEARCH_OTLP_ENDPOINT", "http://localhost:6006")


def get_service_name() -> str:
    return os.getenv("FAMILYSEARCH_SERVICE_NAME", "familysearch-server")


_tracer_provider: TracerProvider | None = None


def initialize_tracing() -> TracerProvider | None:
    """Initialize OpenTelemetry tracing.

    Installs a global TracerProvider exporting spans over OTLP/HTTP.
    Calling it again returns the existing provider.

    Returns:
        TracerProvider if tracing is enabled, None otherwise.
    """
    global _tracer_provider

    if not is_tracing_enabled():
        return None

    if _tracer_provider is not None:
        return _tracer_provider

    exporter = OTLPSpanExporter(endpoint=f"{get_otlp_endpoint()}/v1/traces")

    _tracer_provider = TracerProvider(resource=Resource.create({SERVICE_NAME: get_service_name()}))
    _tracer_provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(_tracer_provider)

    return _tracer_provider


def get_tracer(name: str = "familysearch-server") -> trace.Tracer:
    """Get a tracer instance for manual instrumentation.

    Returns a no-op tracer when tracing is disabled.
    """
    return trace.get_tracer(name)
