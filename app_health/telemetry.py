"""
OpenTelemetry configuration and log correlation.

Sets up the tracer provider and OTLP exporter for the host application,
and a logging format that stamps every record with the active trace and
span IDs so probe failures can be matched to their request traces.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_NAMESPACE, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

if TYPE_CHECKING:
    from app_health.config import Config

logger = logging.getLogger(__name__)

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[trace_id=%(otelTraceID)s span_id=%(otelSpanID)s] - %(message)s"
)
EMPTY_TRACE_ID = "0" * 32
EMPTY_SPAN_ID = "0" * 16


class TraceIdLogFilter(logging.Filter):
    """Adds `otelTraceID` and `otelSpanID` attributes to log records.

    Records emitted outside a recording span get all-zero IDs, so the
    format string never fails on a missing attribute.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            record.otelTraceID = format(span_context.trace_id, "032x")
            record.otelSpanID = format(span_context.span_id, "016x")
        else:
            record.otelTraceID = EMPTY_TRACE_ID
            record.otelSpanID = EMPTY_SPAN_ID
        return True


def configure_logging(level: int = logging.INFO) -> None:
    """Configure the root logger with the trace-correlated format.

    Args:
        level: Root log level (default: INFO).
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)

    log_filter = TraceIdLogFilter()
    for handler in logging.root.handlers:
        if not any(isinstance(f, TraceIdLogFilter) for f in handler.filters):
            handler.addFilter(log_filter)


def configure_opentelemetry(config: Config) -> trace.Tracer:
    """Configure the global tracer provider, exporting over OTLP gRPC unless disabled.

    Args:
        config: Application configuration with OTel settings.

    Returns:
        Tracer for creating spans in this package.
    """
    resource = Resource.create(
        {
            SERVICE_NAME: config.service_name,
            SERVICE_NAMESPACE: config.service_namespace,
            "deployment.environment": config.environment,
            "service.version": config.app_version,
        }
    )
    provider = TracerProvider(resource=resource)

    if config.traces_exporter == "none":
        logger.info("Trace export disabled (OTEL_TRACES_EXPORTER=none)")
    else:
        logger.info(f"Exporting traces to OTLP endpoint {config.otel_endpoint}")
        exporter = OTLPSpanExporter(endpoint=config.otel_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    return trace.get_tracer(__name__)
