"""Schemas for meal analysis requests, backend prompts and nutrition estimates"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class MealQuery(BaseModel):
    """Meal to analyze: a free-text description, a photo, or both"""

    description: Optional[str] = Field(None, description="Free-text meal description")
    image_base64: Optional[str] = Field(
        None,
        alias="imageBase64",
        description="Base64-encoded meal photo (JPEG)",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def has_input(self) -> bool:
        """True when at least one of description or image is non-empty."""
        return bool(self.description) or bool(self.image_base64)


class InlineImage(BaseModel):
    """Binary image part sent inline alongside the prompt text"""

    mime_type: str = Field("image/jpeg", description="Image MIME type")
    data: bytes = Field(..., description="Raw image bytes")


class MealPrompt(BaseModel):
    """Instruction payload for the AI backend"""

    text: str
    image: Optional[InlineImage] = None


class NutritionEstimate(BaseModel):
    """Normalized nutrition estimate returned to the caller"""

    calories: Number = Field(0, description="Estimated energy (kcal)")
    protein: Number = Field(0, description="Protein (g)")
    carbs: Number = Field(0, description="Carbohydrates (g)")
    fats: Number = Field(0, description="Fats (g)")
    description: str = Field(..., description="Short descriptive meal name")


class ErrorResponse(BaseModel):
    """Flat error body returned for every failed request"""

    error: str = Field(..., description="Error message")
