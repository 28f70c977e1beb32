"""
Prompt construction for meal analysis.
Turns a MealQuery into the text + inline image payload sent to the AI backend.
"""

import base64
import binascii
import re

from domain.schemas.meal_schemas import InlineImage, MealPrompt, MealQuery

DESCRIPTION_PLACEHOLDER = "N/A"
IMAGE_MIME_TYPE = "image/jpeg"

PROMPT_TEMPLATE = """
Analyze this meal and provide nutritional information.
Meal description: "{description}".
Return STRICT JSON ONLY, with exactly these fields:
{{
  "calories": number,
  "protein": number,
  "carbs": number,
  "fats": number,
  "description": "short descriptive meal name"
}}
If unsure, estimate realistically.
"""

_DATA_URL_PREFIX = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,", re.IGNORECASE)


def image_mime_type(image_base64: str) -> str:
    """MIME type named by a data-URL prefix, JPEG when there is none."""
    match = _DATA_URL_PREFIX.match(image_base64.strip())
    if match:
        return match.group("mime").lower()
    return IMAGE_MIME_TYPE


def decode_image(image_base64: str) -> bytes:
    """Decode a base64 image string, tolerating a data-URL prefix and whitespace.

    Raises:
        ValueError: if the string is not valid base64
    """
    payload = _DATA_URL_PREFIX.sub("", image_base64.strip())
    payload = "".join(payload.split())
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Image is not valid base64: {exc}") from exc


def build_prompt(query: MealQuery) -> MealPrompt:
    """
    Build the backend prompt for a meal query.

    The description is embedded verbatim; a placeholder stands in when it is
    missing. The image, if any, becomes a separate inline part, JPEG unless
    a data-URL prefix names another image type.
    """
    text = PROMPT_TEMPLATE.format(description=query.description or DESCRIPTION_PLACEHOLDER)

    image = None
    if query.image_base64:
        image = InlineImage(
            mime_type=image_mime_type(query.image_base64),
            data=decode_image(query.image_base64),
        )

    return MealPrompt(text=text, image=image)
