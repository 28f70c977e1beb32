"""
Consolidated middleware and exception handlers for the Meal AI Service
"""

import secrets
import time
import logging
from typing import Iterable
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from app.exceptions import ServiceError

logger = logging.getLogger("mealai.middleware")

INTERNAL_SECRET_HEADER = "x-internal-secret"
LIVENESS_PATHS = ("/", "/health-check")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


def error_body(message: str) -> dict:
    return {"error": message}


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        # Generate unique request ID
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else None,
            },
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                "%s %s %d %.4fs",
                request.method,
                request.url.path,
                response.status_code,
                process_time,
                extra={
                    "request_id": request_id,
                    "status_code": response.status_code,
                    "process_time": f"{process_time:.4f}s",
                },
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response

        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                    "error": str(exc),
                    "process_time": f"{process_time:.4f}s",
                },
                exc_info=True,
            )
            raise


# ============================================================================
# Security Headers Middleware
# ============================================================================


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add conservative security headers to every response"""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


# ============================================================================
# Body Size Limit Middleware
# ============================================================================


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject request bodies larger than ``max_body_bytes`` with 413"""

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    def _too_large(self, request: Request, size: int) -> JSONResponse:
        logger.warning(
            f"Request body too large on {request.url.path}: "
            f"{size} > {self.max_body_bytes} bytes"
        )
        return JSONResponse(
            status_code=413,
            content=error_body("Request body too large"),
        )

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length is not None:
            try:
                size = int(content_length)
            except ValueError:
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content=error_body("Invalid Content-Length header"),
                )
            if size > self.max_body_bytes:
                return self._too_large(request, size)
        elif request.method in ("POST", "PUT", "PATCH"):
            # No declared length (chunked upload): measure the body itself
            body = await request.body()
            if len(body) > self.max_body_bytes:
                return self._too_large(request, len(body))

        return await call_next(request)


# ============================================================================
# Internal Secret Middleware
# ============================================================================


class InternalSecretMiddleware(BaseHTTPMiddleware):
    """
    Shared-secret check between internal services.

    Accepts the secret in ``X-Internal-Secret`` or as an
    ``Authorization: Bearer`` token. Liveness paths are never guarded.
    """

    def __init__(self, app: ASGIApp, secret: str, exempt_paths: Iterable[str] = LIVENESS_PATHS):
        super().__init__(app)
        self.secret = secret
        self.exempt_paths = frozenset(exempt_paths)

    def _presented_secret(self, request: Request):
        header = request.headers.get(INTERNAL_SECRET_HEADER)
        if header:
            return header
        authorization = request.headers.get("authorization", "")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            return token.strip()
        return None

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        presented = self._presented_secret(request)
        if presented is None or not secrets.compare_digest(
            presented.encode("utf-8"), self.secret.encode("utf-8")
        ):
            logger.warning(f"Rejected request without valid internal secret on {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content=error_body("Unauthorized"),
            )

        return await call_next(request)


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies"""
    locations = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
    logger.warning(f"Validation error on {request.url}: {locations}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Invalid request body"),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def service_exception_handler(request: Request, exc: ServiceError):
    """Handle errors raised by the service layer"""
    if exc.http_status < 500:
        logger.warning(f"Service error on {request.url}: {exc}")
    else:
        # Root cause has already been logged with its traceback by the service
        logger.error(f"Service failure on {request.url}: {exc}")

    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
    )
