"""Tracing for mcpc.

Every module takes its tracer from :func:`get_tracer`. Until
:func:`configure_telemetry` installs an SDK provider the OpenTelemetry API
hands out no-op spans, so the ``otel`` extra is only needed when tracing is
switched on (``--trace`` or ``telemetry.enabled`` in the settings file).

Console spans go to stderr. Stdout carries command output only, so
``mcpc --trace tools list ./provider --json`` still prints parseable JSON.
"""

from __future__ import annotations

import sys
from typing import IO, TYPE_CHECKING, Any

from opentelemetry import trace

if TYPE_CHECKING:
    from mcpc.config import TelemetrySettings

# Span attribute keys
ATTR_PROVIDER_PATH = "mcpc.provider.path"
ATTR_RPC_METHOD = "mcpc.rpc.method"
ATTR_RPC_ID = "mcpc.rpc.id"
ATTR_TOOL_NAME = "mcpc.tool.name"

SERVICE_NAME = "mcpc"

_SDK_HINT = "Install it with: pip install 'mcpc[otel]'"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer for *name*; its spans are no-ops until tracing is configured."""
    return trace.get_tracer(name or SERVICE_NAME)


def configure_telemetry(settings: TelemetrySettings, *, out: IO[str] | None = None) -> Any:
    """Install a global SDK tracer provider built from *settings*.

    Finished spans are printed to *out* (``sys.stderr`` by default) when
    ``settings.console`` is set, and shipped over OTLP/gRPC when
    ``settings.otlp_endpoint`` is set.

    Returns the installed ``TracerProvider``.

    Raises:
        ImportError: the SDK, or the OTLP exporter when an endpoint is
            configured, is not installed. Nothing is installed in that case.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = f"Tracing requires opentelemetry-sdk. {_SDK_HINT}"
        raise ImportError(msg) from exc

    processors = []
    if settings.console:
        processors.append(_console_processor(out if out is not None else sys.stderr))
    if settings.otlp_endpoint:
        processors.append(_otlp_processor(settings.otlp_endpoint))

    provider = TracerProvider(resource=Resource.create({"service.name": SERVICE_NAME}))
    for processor in processors:
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    return provider


def _console_processor(out: IO[str]) -> Any:
    # Simple (synchronous) export so spans are written before the CLI exits.
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    return SimpleSpanProcessor(ConsoleSpanExporter(out=out))


def _otlp_processor(endpoint: str) -> Any:
    from opentelemetry.sdk.trace.export import BatchSpanProcessor  # pyright: ignore[reportMissingImports]

    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = f"Exporting to {endpoint} requires opentelemetry-exporter-otlp. {_SDK_HINT}"
        raise ImportError(msg) from exc

    return BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint))
