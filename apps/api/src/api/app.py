from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from api.errors import ApiError
from api.middleware import ObservabilityMiddleware
from api.observability import (
    ApiMetricCollector,
    CompositeApiMetricsCollector,
    PrometheusApiMetricsCollector,
)
from api.response import error_response, status_response
from api.routers.branches import router as branches_router
from api.routers.payments import router as payments_router
from api.telemetry import configure_telemetry

logger = logging.getLogger(__name__)


def create_app(extra_collectors: list[ApiMetricCollector] | None = None) -> FastAPI:
    app = FastAPI(title="Pharmacy Branch & Payments API", version="0.1.0")
    configure_telemetry(service_name="pharmacy-payments-api")
    app.state.prom_metrics = PrometheusApiMetricsCollector()
    app.state.composite_metrics = CompositeApiMetricsCollector(
        [app.state.prom_metrics, *(extra_collectors or [])]
    )
    app.add_middleware(ObservabilityMiddleware, collector=app.state.composite_metrics)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.include_router(branches_router)
    app.include_router(payments_router)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "Pharmacy branch and payments server is running."

    @app.get("/healthz")
    async def healthz() -> dict:
        return status_response("ok")

    @app.get("/readyz")
    async def readyz() -> dict:
        return status_response("ready")

    @app.get("/metrics")
    async def metrics() -> Response:
        payload = app.state.prom_metrics.render()
        return Response(content=payload, media_type="text/plain; version=0.0.4")

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "api_error",
            extra={"path": request.url.path, "code": exc.code, "status_code": exc.status_code},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        message = "; ".join(err["msg"] for err in exc.errors())
        return JSONResponse(
            status_code=400,
            content=error_response("VALIDATION_ERROR", message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", extra={"path": request.url.path}, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=error_response("INTERNAL_ERROR", "Internal server error"),
        )

    return app


app = create_app()
