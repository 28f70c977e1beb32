"""
Meal AI Service FastAPI Application
Main entry point: logging, middleware, exception handlers and app factory
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
from typing import Optional

from api.routes import health, meals
from adapters.gemini_adapter import AIGateway, GeminiGateway, MODEL_NAME
from app.config import Settings, load_settings
from app.exceptions import ServiceError

from api.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    BodySizeLimitMiddleware,
    InternalSecretMiddleware,
    validation_exception_handler,
    http_exception_handler,
    service_exception_handler,
    general_exception_handler,
)

_logger = logging.getLogger("mealai.main")


def configure_logging(settings: Settings) -> None:
    """Setup logging with configured level and format"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    _logger.info(
        "AI Service running on port %d (%s mode, model %s)",
        settings.port,
        settings.environment.value,
        MODEL_NAME,
    )
    if settings.require_internal_secret:
        _logger.info("Internal secret check enabled")
    if settings.json_extraction_fallback:
        _logger.info("JSON extraction fallback enabled")

    try:
        yield
    finally:
        _logger.info("Shutting down AI Service")


def create_app(
    settings: Optional[Settings] = None, gateway: Optional[AIGateway] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: process settings; loaded from the environment when omitted
            (the process exits if GEMINI_API_KEY is missing)
        gateway: AI backend; a GeminiGateway built from ``settings`` by default
    """
    if settings is None:
        settings = load_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url="/openapi.json" if not settings.is_production() else None,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
    )
    app.state.settings = settings
    app.state.gateway = gateway or GeminiGateway(settings)

    # Middleware added last runs first
    if settings.require_internal_secret:
        app.add_middleware(InternalSecretMiddleware, secret=settings.internal_secret)
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Register exception handlers
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ServiceError, service_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(health.router)
    app.include_router(meals.router)

    return app


if __name__ == "__main__":
    settings = load_settings()
    configure_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
