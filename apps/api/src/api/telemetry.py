from __future__ import annotations

from devkit.observability import configure_logging, configure_otel, configure_probe_access_log_filter


def configure_telemetry(service_name: str) -> None:
    configure_logging()
    configure_otel(service_name)
    configure_probe_access_log_filter()
