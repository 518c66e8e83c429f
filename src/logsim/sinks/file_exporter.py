"""
File-based log exporter for offline analysis and pipeline replay.

Writes exported log records to a JSON Lines file in the wire shape
``{level, timestamp, message, type, service, ...attributes}`` so the file
can be fed straight into a log shipper.
"""

import json
import threading
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from opentelemetry.sdk._logs.export import LogExportResult, LogRecordExporter

from ..events import Level, format_timestamp

# Attributes added by the logging bridge rather than by scenarios.
_BRIDGE_PREFIXES = ("code.", "exception.", "thread.")


def _level_from_record(record: Any) -> str:
    number = getattr(record, "severity_number", None)
    value = getattr(number, "value", number)
    if isinstance(value, int):
        if value >= 17:
            return Level.ERROR.value
        if value >= 13:
            return Level.WARN.value
        return Level.INFO.value
    text = str(getattr(record, "severity_text", "") or "").upper()
    if text in ("ERROR", "CRITICAL", "FATAL"):
        return Level.ERROR.value
    if text in ("WARN", "WARNING"):
        return Level.WARN.value
    return Level.INFO.value


def _timestamp_from_record(record: Any) -> str:
    ns = getattr(record, "timestamp", None) or getattr(record, "observed_timestamp", None)
    if not ns:
        return format_timestamp(datetime.now(timezone.utc))
    return format_timestamp(datetime.fromtimestamp(ns / 1e9, tz=timezone.utc))


def record_to_wire(item: Any) -> dict[str, Any]:
    """Convert an exported log record (or its LogData wrapper) to the wire shape."""
    record = getattr(item, "log_record", item)
    resource = getattr(item, "resource", None) or getattr(record, "resource", None)
    attrs = dict(getattr(record, "attributes", None) or {})

    out: dict[str, Any] = {
        "level": _level_from_record(record),
        "timestamp": _timestamp_from_record(record),
        "message": str(record.body) if getattr(record, "body", None) is not None else "",
        "type": attrs.pop("type", "unknown"),
    }
    if resource is not None and getattr(resource, "attributes", None):
        service = resource.attributes.get("service.name")
        if service:
            out["service"] = service
    for key, value in attrs.items():
        if key.startswith(_BRIDGE_PREFIXES) or key in out:
            continue
        out[key] = list(value) if isinstance(value, tuple) else value
    return out


class FileLogExporter(LogRecordExporter):
    """Export logs to a JSON Lines file."""

    def __init__(self, output_path: str | Path, append: bool = True):
        """Initialize file exporter."""
        self.output_path = Path(output_path)
        self.append = append
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

        if not append and self.output_path.exists():
            self.output_path.unlink()

    def export(self, batch: Sequence) -> LogExportResult:  # type: ignore[override]
        """Export logs to file."""
        try:
            lines = [json.dumps(record_to_wire(item), default=str) for item in batch]
            with self._lock, open(self.output_path, "a", encoding="utf-8") as f:
                for line in lines:
                    f.write(line + "\n")
            return LogExportResult.SUCCESS
        except (OSError, TypeError, ValueError):
            return LogExportResult.FAILURE

    def shutdown(self) -> None:
        """Shutdown exporter."""
        pass

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Force flush."""
        return True
