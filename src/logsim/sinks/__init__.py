"""Event sinks and the OpenTelemetry exporters behind them."""

from .base import MemorySink, SafeSink, Sink
from .console_exporter import create_console_exporter
from .file_exporter import FileLogExporter, record_to_wire
from .otel_sink import OtelLogSink
from .otlp_exporter import create_otlp_log_exporter

__all__ = [
    "Sink",
    "SafeSink",
    "MemorySink",
    "OtelLogSink",
    "FileLogExporter",
    "record_to_wire",
    "create_console_exporter",
    "create_otlp_log_exporter",
]
