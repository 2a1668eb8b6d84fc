"""
cep_weather.observability.tracing

Distributed tracing (OpenTelemetry) for both services.

Responsibilities:
- Build one TracerProvider per process (always-on sampling, batched OTLP/gRPC export).
- Extract inbound / inject outbound trace context (W3C trace context + baggage).
- Open SERVER / CLIENT spans that always end, whatever the exit path.
- Drain pending spans within a bounded timeout at shutdown.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from contextlib import contextmanager

from opentelemetry import context as otel_context
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ALWAYS_ON
from opentelemetry.trace import Span, SpanKind, Tracer
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from cep_weather.observability.logging import get_logger
from cep_weather.settings import Settings

log = get_logger(__name__)

ERROR_RESPONSE_EVENT = "error_response"
HTTP_STATUS_CODE = "http.status_code"


class Tracing:
    """
    Process-wide tracing handle.

    Held on `app.state.tracing` and passed explicitly to clients/services; the
    OpenTelemetry global provider and propagator are never touched.
    """

    def __init__(self, *, provider: TracerProvider, instrumentation_name: str) -> None:
        self._provider = provider
        self._tracer: Tracer = provider.get_tracer(instrumentation_name)
        # TraceContext first: it seeds an empty Context when the carrier has no traceparent.
        self._propagator = CompositePropagator(
            [TraceContextTextMapPropagator(), W3CBaggagePropagator()]
        )

    @property
    def provider(self) -> TracerProvider:
        return self._provider

    def inject(self, headers: MutableMapping[str, str]) -> None:
        # Writes traceparent/tracestate/baggage for the *current* span context.
        self._propagator.inject(headers)

    @contextmanager
    def server_span(self, name: str, headers: Mapping[str, str]) -> Iterator[Span]:
        # Parent comes only from inbound headers, never from whatever is current in-process.
        # Attaching (not just `context=`) keeps inbound baggage visible to later inject().
        token = otel_context.attach(self._propagator.extract(headers))
        try:
            with self._tracer.start_as_current_span(name, kind=SpanKind.SERVER) as span:
                yield span
        finally:
            otel_context.detach(token)

    @contextmanager
    def client_span(self, name: str) -> Iterator[Span]:
        with self._tracer.start_as_current_span(name, kind=SpanKind.CLIENT) as span:
            yield span

    def shutdown(self, timeout_s: float) -> None:
        # Bounded drain of the batch queue, then release exporter resources.
        flushed = self._provider.force_flush(timeout_millis=int(timeout_s * 1000))
        if not flushed:
            log.warning("tracer_flush_timeout", timeout_s=timeout_s)
        self._provider.shutdown()


def record_error_response(span: Span, status_code: int) -> None:
    span.add_event(ERROR_RESPONSE_EVENT, attributes={HTTP_STATUS_CODE: status_code})


def init_tracing(settings: Settings) -> Tracing:
    """
    Startup-time tracer construction. Failures here are fatal to the process.
    """

    resource = Resource.create({SERVICE_NAME: settings.service_name})
    provider = TracerProvider(sampler=ALWAYS_ON, resource=resource)
    if settings.otel_exporter_enabled:
        exporter = OTLPSpanExporter(endpoint=settings.otel_collector_url, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
    else:
        log.info("otel_exporter_disabled")
    log.info(
        "tracing_initialized",
        collector=settings.otel_collector_url,
        exporter_enabled=settings.otel_exporter_enabled,
    )
    return Tracing(provider=provider, instrumentation_name=settings.service_name)


# --- Module Notes -----------------------------------------------------------
# `start_as_current_span` records exceptions, sets ERROR status and ends the span
# when the `with` block exits, which covers early returns inside handlers too.
