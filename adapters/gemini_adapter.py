"""Gemini adapter: sends meal prompts to the generative AI backend.
"""

from typing import Optional, Protocol
import logging

import anyio
from google import genai
from google.genai import types as genai_types

from app.config import Settings
from app.exceptions import AIAnalysisError
from domain.schemas.meal_schemas import MealPrompt

logger = logging.getLogger("mealai.gemini")

MODEL_NAME = "gemini-2.5-flash"
RESPONSE_MIME_TYPE = "application/json"


class AIGateway(Protocol):
    """Anything that turns a MealPrompt into the backend's raw reply text."""

    async def generate(self, prompt: MealPrompt) -> str: ...


def build_contents(prompt: MealPrompt) -> list[genai_types.Content]:
    """Single user turn: the text part, then the inline image part if any."""
    parts = [genai_types.Part.from_text(text=prompt.text)]
    if prompt.image is not None:
        parts.append(
            genai_types.Part.from_bytes(
                data=prompt.image.data, mime_type=prompt.image.mime_type
            )
        )
    return [genai_types.Content(role="user", parts=parts)]


class GeminiGateway:
    """
    Thin wrapper around the async google-genai client.

    Returns the model's reply text untouched; every failure (transport,
    auth, timeout, empty reply) is raised as AIAnalysisError.
    """

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None):
        self.model = MODEL_NAME
        self.timeout_sec = settings.ai_timeout_sec
        self._client = client or genai.Client(api_key=settings.gemini_api_key)

    async def generate(self, prompt: MealPrompt) -> str:
        config = genai_types.GenerateContentConfig(response_mime_type=RESPONSE_MIME_TYPE)

        try:
            with anyio.fail_after(self.timeout_sec):
                response = await self._client.aio.models.generate_content(
                    model=self.model,
                    contents=build_contents(prompt),
                    config=config,
                )
            text = response.text
        except TimeoutError as exc:
            raise AIAnalysisError(
                f"Backend call timed out after {self.timeout_sec}s"
            ) from exc
        except Exception as exc:
            raise AIAnalysisError(f"Backend call failed: {exc}") from exc

        if not text or not text.strip():
            raise AIAnalysisError("Empty AI response")

        logger.debug("Gemini reply received (%d chars)", len(text))
        return text
