"""
Meal analysis service - orchestrates prompt building, the AI backend call and
reply normalization for a single request.
"""

from app.config import Settings
from app.exceptions import AIAnalysisError, ServiceValidationError
from adapters.gemini_adapter import AIGateway
from core.base.base_service import BaseService
from domain.schemas.meal_schemas import MealQuery, NutritionEstimate
from services.prompt_builder import build_prompt
from services.response_normalizer import normalize_reply

MISSING_INPUT_MESSAGE = "Description or image required"


class MealAnalysisService(BaseService):
    """Request-scoped orchestration; holds no state between calls."""

    def __init__(self, gateway: AIGateway, settings: Settings):
        super().__init__("mealai.services.meal_analysis")
        self.gateway = gateway
        self.allow_extraction = settings.json_extraction_fallback

    async def analyze(self, query: MealQuery) -> NutritionEstimate:
        """
        Estimate the nutrition of a meal.

        Raises:
            ServiceValidationError: neither description nor image supplied
            AIAnalysisError: prompt building, backend call or reply parsing failed
        """
        if not query.has_input():
            raise ServiceValidationError(MISSING_INPUT_MESSAGE)

        self.log_info(
            "Analyzing meal",
            has_description=bool(query.description),
            has_image=bool(query.image_base64),
        )

        try:
            prompt = build_prompt(query)
            reply = await self.gateway.generate(prompt)
            estimate = normalize_reply(
                reply, query.description, allow_extraction=self.allow_extraction
            )
        except AIAnalysisError as exc:
            self.log_error("AI Service Error", exc_info=True, reason=exc.reason)
            raise
        except Exception as exc:
            self.log_error("AI Service Error", exc_info=True, reason=repr(exc))
            raise AIAnalysisError(repr(exc)) from exc

        self.log_info("Meal analyzed", description=estimate.description)
        return estimate
