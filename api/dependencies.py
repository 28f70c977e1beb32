"""
API dependencies for dependency injection
"""

from fastapi import Depends, Request

from app.config import Settings
from adapters.gemini_adapter import AIGateway
from services.meal_analysis_service import MealAnalysisService


def get_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_gateway(request: Request) -> AIGateway:
    """AI backend gateway shared by all requests (read-only)."""
    return request.app.state.gateway


def get_meal_analysis_service(
    gateway: AIGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
) -> MealAnalysisService:
    """
    Per-request analysis service.

    Usage:
        @router.post("/example")
        async def example(service: MealAnalysisService = Depends(get_meal_analysis_service)):
            ...
    """
    return MealAnalysisService(gateway, settings)
