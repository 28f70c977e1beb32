"""
Normalization of backend replies into NutritionEstimate records.

Each numeric field is coerced on its own: a missing or unusable value becomes
0 without affecting the others. Only an unparseable reply is an error.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Dict, Optional, Union

from domain.schemas.meal_schemas import NutritionEstimate

NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fats")
UNKNOWN_MEAL = "Unknown Meal"

_JSON_OBJECT_SPAN = re.compile(r"\{[\s\S]*\}")


def _finite_or_zero(number: Union[int, float]) -> Union[int, float]:
    try:
        return number if math.isfinite(number) else 0
    except OverflowError:
        # int too large to represent as a float
        return 0


def coerce_number(value: Any) -> Union[int, float]:
    """Return ``value`` as a finite number, or 0 when it cannot be one."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return _finite_or_zero(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return _finite_or_zero(int(text))
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return 0
        return _finite_or_zero(number)
    return 0


def parse_reply(text: str, allow_extraction: bool = False) -> Dict[str, Any]:
    """
    Parse the backend reply as a JSON object.

    Args:
        text: raw reply text
        allow_extraction: when direct parsing fails, fall back to the first
            ``{...}`` span found in the text

    Raises:
        ValueError: if no JSON object can be parsed from the reply
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        if not allow_extraction:
            raise
        match = _JSON_OBJECT_SPAN.search(text)
        if not match:
            raise ValueError("AI response not valid JSON")
        parsed = json.loads(match.group(0))

    if not isinstance(parsed, dict):
        raise ValueError(f"AI response is a JSON {type(parsed).__name__}, expected an object")
    return parsed


def pick_description(parsed: Dict[str, Any], fallback: Optional[str]) -> str:
    value = parsed.get("description")
    if isinstance(value, str) and value.strip():
        return value.strip()
    if fallback:
        return fallback
    return UNKNOWN_MEAL


def normalize_reply(
    text: str, description: Optional[str] = None, allow_extraction: bool = False
) -> NutritionEstimate:
    """Parse a backend reply and coerce it into a complete NutritionEstimate."""
    parsed = parse_reply(text, allow_extraction=allow_extraction)
    values = {field: coerce_number(parsed.get(field)) for field in NUTRIENT_FIELDS}
    return NutritionEstimate(**values, description=pick_description(parsed, description))
