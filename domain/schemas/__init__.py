"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.meal_schemas import (
    MealQuery,
    InlineImage,
    MealPrompt,
    NutritionEstimate,
    ErrorResponse,
)

__all__ = [
    "MealQuery",
    "InlineImage",
    "MealPrompt",
    "NutritionEstimate",
    "ErrorResponse",
]
