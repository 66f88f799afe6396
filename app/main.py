from __future__ import annotations

from fastapi import FastAPI

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.brainstorm.router import router as brainstorm_router
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import get_settings

setup_logging()


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Brainstorm Canvas Assistant API",
        description=(
            "LLM helpers for a collaborative whiteboard.\n\n"
            "Design principles:\n"
            "- The whiteboard owns its shapes; each request carries a read-only canvas snapshot.\n"
            "- Every operation makes exactly one chat-completion call and returns the parsed "
            "JSON reply without schema validation.\n"
            "- Logging and metrics use route templates and metadata only; canvas text and "
            "LLM output are never logged."
        ),
        debug=settings.is_development,
        openapi_tags=[
            {
                "name": "health",
                "description": (
                    "Basic uptime and readiness checks for load balancers and monitoring."
                ),
            },
            {
                "name": "brainstorm",
                "description": (
                    "Split plans into dimensions, group frame notes by dimensions, and "
                    "summarize frames against a title."
                ),
            },
            {
                "name": "metrics",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "This endpoint intentionally does not call the LLM provider so it can be used "
            "safely for basic uptime checks."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(brainstorm_router)
    return app


app = create_app()
