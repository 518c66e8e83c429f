"""
OTLP log exporter for shipping events to a remote collector.

Supports both HTTP and gRPC protocols.
"""

from typing import Any


def create_otlp_log_exporter(
    endpoint: str = "http://localhost:4318",
    protocol: str = "http",
    headers: dict[str, str] | None = None,
    **kwargs: Any,
):
    """
    Create an OTLP log exporter.

    Args:
        endpoint: OTLP endpoint URL
        protocol: "http" or "grpc"
        headers: Optional headers to include
        **kwargs: Additional exporter configuration

    Returns:
        Configured log record exporter
    """
    if protocol == "grpc":
        from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter

        return OTLPLogExporter(
            endpoint=endpoint.replace("http://", "").replace("https://", ""),
            headers=headers,
            **kwargs,
        )
    if protocol != "http":
        raise ValueError(f"Unknown OTLP protocol: {protocol}")

    from opentelemetry.exporter.otlp.proto.http._log_exporter import (  # type: ignore[assignment]
        OTLPLogExporter,
    )

    logs_endpoint = endpoint.rstrip("/")
    if not logs_endpoint.endswith("/v1/logs"):
        logs_endpoint = f"{logs_endpoint}/v1/logs"
    return OTLPLogExporter(
        endpoint=logs_endpoint,
        headers=headers,
        **kwargs,
    )
