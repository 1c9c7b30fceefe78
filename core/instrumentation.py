"""
OpenTelemetry instrumentation setup.

Spans are always created through the OpenTelemetry API. Export is
configured only when an OTLP endpoint is set; otherwise the API's
default no-op provider is left in place.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode  # noqa: F401

logger = logging.getLogger(__name__)

_configured = False


def setup_opentelemetry() -> bool:
    """
    Configure OpenTelemetry tracing.

    Sets up:
    - A tracer provider tagged with service name, version and environment
    - OTLP gRPC span export
    - Django request auto-instrumentation

    Returns:
        True if tracing export was configured, False if skipped
    """
    global _configured  # pylint: disable=global-statement
    if _configured:
        return True

    otlp_endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not otlp_endpoint:
        logger.info("OTEL_EXPORTER_OTLP_ENDPOINT not set, tracing export disabled")
        return False

    resource = Resource.create(
        {
            "service.name": os.environ.get("OTEL_SERVICE_NAME", "admin-license-service"),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("ENVIRONMENT", "development"),
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(
                endpoint=otlp_endpoint,
                insecure=os.environ.get("OTEL_EXPORTER_OTLP_INSECURE", "true").lower() == "true",
            )
        )
    )
    trace.set_tracer_provider(trace_provider)
    DjangoInstrumentor().instrument()

    _configured = True
    logger.info("OpenTelemetry instrumentation configured", extra={"endpoint": otlp_endpoint})
    return True


def get_tracer(name: str) -> trace.Tracer:
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)
