from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass
from typing import Protocol

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

_trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="")


def set_trace_id(trace_id: str) -> None:
    _trace_id_ctx.set(trace_id)


def get_trace_id() -> str:
    return _trace_id_ctx.get()


@dataclass(frozen=True)
class ApiRequestMetric:
    method: str
    path: str
    status_code: int
    duration_ms: float
    trace_id: str


class ApiMetricCollector(Protocol):
    def observe(self, metric: ApiRequestMetric) -> None: ...


class PrometheusApiMetricsCollector(ApiMetricCollector):
    # outbound calls can take up to the 10s timeout, so buckets reach past it
    _LATENCY_BUCKETS_MS = (10, 50, 100, 250, 500, 1000, 2500, 5000, 10000, 15000)

    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._request_counter = Counter(
            "pharmacy_api_http_requests_total",
            "Total pharmacy API HTTP requests",
            labelnames=("method", "path", "status_code"),
            registry=self._registry,
        )
        self._latency_histogram = Histogram(
            "pharmacy_api_http_request_duration_ms",
            "Pharmacy API HTTP request latency in milliseconds",
            labelnames=("method", "path"),
            buckets=self._LATENCY_BUCKETS_MS,
            registry=self._registry,
        )

    def observe(self, metric: ApiRequestMetric) -> None:
        self._request_counter.labels(metric.method, metric.path, str(metric.status_code)).inc()
        self._latency_histogram.labels(metric.method, metric.path).observe(metric.duration_ms)

    def render(self) -> str:
        return generate_latest(self._registry).decode("utf-8")


class CompositeApiMetricsCollector(ApiMetricCollector):
    def __init__(self, collectors: list[ApiMetricCollector]) -> None:
        self._collectors = collectors

    def observe(self, metric: ApiRequestMetric) -> None:
        for collector in self._collectors:
            collector.observe(metric)
