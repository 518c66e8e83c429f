"""
Write LogEvents through the OpenTelemetry logs SDK.

Events go to a dedicated stdlib logger whose LoggingHandler feeds a
LoggerProvider. Each exporter gets its own BatchLogRecordProcessor, so emit()
only enqueues and exporting happens on the processor's worker thread.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import (
    BatchLogRecordProcessor,
    LogRecordExporter,
    SimpleLogRecordProcessor,
)
from opentelemetry.sdk.resources import Resource

from .. import __version__
from ..events import LogEvent, flatten_attributes

EVENT_LOGGER_NAME = "logsim.events"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# LogRecord attribute names; extra= may not reuse them.
_RESERVED_RECORD_KEYS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def _epoch_ns(ts: datetime) -> int:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    delta = ts - _EPOCH
    return (delta.days * 86400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1000


def record_extra(event: LogEvent) -> dict[str, object]:
    """Flattened attributes for logging's extra=, with the category under "type"."""
    extra: dict[str, object] = {}
    for key, value in flatten_attributes(event.attributes).items():
        if key in ("type", "level", "timestamp", "message"):
            continue
        if key in _RESERVED_RECORD_KEYS:
            key = f"attr.{key}"
        extra[key] = value
    extra["type"] = event.category
    return extra


class OtelLogSink:
    """Sink backed by an OpenTelemetry LoggerProvider."""

    def __init__(
        self,
        exporters: Sequence[LogRecordExporter],
        service_name: str = "logsim",
        batch: bool = True,
        logger_name: str = EVENT_LOGGER_NAME,
    ):
        resource = Resource.create(
            {"service.name": service_name, "service.version": __version__}
        )
        self.provider = LoggerProvider(resource=resource)
        for exporter in exporters:
            processor = (
                BatchLogRecordProcessor(exporter) if batch else SimpleLogRecordProcessor(exporter)
            )
            self.provider.add_log_record_processor(processor)

        self._handler = LoggingHandler(level=logging.DEBUG, logger_provider=self.provider)
        self.logger = logging.getLogger(logger_name)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        self.logger.addHandler(self._handler)

    def emit(self, event: LogEvent) -> None:
        record = self.logger.makeRecord(
            self.logger.name,
            event.level.logging_level,
            fn="",
            lno=0,
            msg=event.message,
            args=(),
            exc_info=None,
            extra=record_extra(event),
        )
        ns = _epoch_ns(event.timestamp)
        record.created = ns / 1e9
        if hasattr(record, "created_ns"):
            record.created_ns = ns
        self.logger.handle(record)

    def close(self) -> None:
        """Flush pending records and shut the provider down."""
        self.logger.removeHandler(self._handler)
        self.provider.shutdown()
