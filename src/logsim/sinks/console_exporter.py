"""
Console exporter printing one JSON line per event to stdout.

Matches the JSON file wire shape so console output can be scraped by a
container log driver.
"""

import json
import os
import sys
from typing import IO

from opentelemetry.sdk._logs.export import ConsoleLogRecordExporter

from .file_exporter import record_to_wire


def format_json_line(record) -> str:
    return json.dumps(record_to_wire(record), default=str) + os.linesep


def create_console_exporter(out: IO[str] | None = None) -> ConsoleLogRecordExporter:
    """Create a console log exporter writing wire-shape JSON lines."""
    return ConsoleLogRecordExporter(out=out or sys.stdout, formatter=format_json_line)
