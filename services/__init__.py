"""Services package - Business logic layer"""

from services.meal_analysis_service import MealAnalysisService

# Note: prompt_builder and response_normalizer contain functions, not classes

__all__ = [
    "MealAnalysisService",
]
