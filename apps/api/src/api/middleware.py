from __future__ import annotations

import logging
from time import perf_counter
from uuid import uuid4

from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from api.observability import ApiMetricCollector, ApiRequestMetric, set_trace_id

logger = logging.getLogger(__name__)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, collector: ApiMetricCollector, tracer_name: str = "pharmacy-payments-api") -> None:
        super().__init__(app)
        self._collector = collector
        self._tracer = trace.get_tracer(tracer_name)

    def _record(self, request: Request, status_code: int, started: float, trace_id: str) -> None:
        metric = ApiRequestMetric(
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=(perf_counter() - started) * 1000.0,
            trace_id=trace_id,
        )
        self._collector.observe(metric)
        logger.info(
            "http_request",
            extra={
                "method": metric.method,
                "path": metric.path,
                "status_code": metric.status_code,
                "duration_ms": round(metric.duration_ms, 2),
                "trace_id": trace_id,
            },
        )

    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get("x-trace-id") or str(uuid4())
        set_trace_id(trace_id)
        started = perf_counter()
        with self._tracer.start_as_current_span("http.request") as span:
            span.set_attribute("http.method", request.method)
            span.set_attribute("http.route", request.url.path)
            span.set_attribute("trace.id", trace_id)
            try:
                response = await call_next(request)
            except Exception:
                span.set_attribute("http.status_code", 500)
                self._record(request, 500, started, trace_id)
                raise
            span.set_attribute("http.status_code", response.status_code)

        response.headers["x-trace-id"] = trace_id
        self._record(request, response.status_code, started, trace_id)
        return response
