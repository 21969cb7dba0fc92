"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from history_gateway.api.dependencies import get_request_id
from history_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from history_gateway.api.v1 import socioeconomic, complaints, intake, assist
from history_gateway.domain.exceptions import AIServiceError, IntakeNotFoundError, InvalidFieldError
from history_gateway.infrastructure.observability.logging import setup_logging
from history_gateway.config import settings

setup_logging(settings.log_level)

# Domain error -> HTTP status; the message is already safe to show
ERROR_STATUS = {
    IntakeNotFoundError: 404,
    InvalidFieldError: 422,
    AIServiceError: 502,
}


def _domain_error_handler(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        if status_code >= 500:
            logging.warning(
                f"{type(exc).__name__}: {exc}",
                extra={"request_id": get_request_id(request), "path": request.url.path},
            )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


def create_app() -> FastAPI:
    """Build the app: middleware, domain error handlers, health/metrics and v1 routers"""
    app = FastAPI(
        title="Patient History Gateway",
        description="Guided clinical intake with socio-economic scoring and AI-assisted summaries",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added runs first, so every response (errors included) carries a request id
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    for exc_class, status_code in ERROR_STATUS.items():
        app.add_exception_handler(exc_class, _domain_error_handler(status_code))

    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": settings.service_name,
            "ai_configured": bool(settings.gemini_api_key),
        }

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(socioeconomic.router, prefix="/v1", tags=["socioeconomic"])
    app.include_router(complaints.router, prefix="/v1", tags=["complaints"])
    app.include_router(intake.router, prefix="/v1", tags=["intake"])
    app.include_router(assist.router, prefix="/v1", tags=["assist"])

    return app


app = create_app()
