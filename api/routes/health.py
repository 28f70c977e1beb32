"""Health check and liveness routes"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from api.dependencies import get_settings
from api.responses import HealthResponse
from app.config import Settings

router = APIRouter(tags=["Health"])

LIVENESS_MESSAGE = "AI Service Running"


@router.get("/", response_class=PlainTextResponse)
def liveness():
    """Plaintext liveness probe; never touches the AI backend."""
    return LIVENESS_MESSAGE


@router.get("/health-check", response_model=HealthResponse)
def health_check(settings: Settings = Depends(get_settings)):
    """Basic health check endpoint"""
    return HealthResponse(
        status="ok", service=settings.app_name, version=settings.app_version
    )
