"""
Meal routes - Nutrition estimates from a description and/or photo.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from api.dependencies import get_meal_analysis_service
from domain.schemas.meal_schemas import ErrorResponse, MealQuery, NutritionEstimate
from services.meal_analysis_service import MealAnalysisService

router = APIRouter(tags=["Meals"])


@router.post(
    "/analyze-meal",
    response_model=NutritionEstimate,
    responses={
        400: {"model": ErrorResponse, "description": "No description or image"},
        500: {"model": ErrorResponse, "description": "AI analysis failed"},
    },
)
async def analyze_meal(
    query: Optional[MealQuery] = Body(None),
    service: MealAnalysisService = Depends(get_meal_analysis_service),
) -> NutritionEstimate:
    """
    Estimate calories and macros for a meal.

    Body:
        description: free-text meal description (optional)
        imageBase64: base64-encoded JPEG photo (optional)

    At least one of the two is required. The estimate is returned flat,
    without a response envelope.
    """
    return await service.analyze(query or MealQuery())
