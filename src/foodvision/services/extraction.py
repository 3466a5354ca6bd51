"""Extraction of nutrition estimates from free-form model output."""

import json
import math

from foodvision.domain.nutrition import (
    DEFAULT_CONFIDENCE,
    DEFAULT_DISH_NAME,
    NutritionRecord,
)
from foodvision.errors import MalformedResponse

ExtractionResult = NutritionRecord | MalformedResponse


def extract_nutrition(raw_text: str) -> ExtractionResult:
    """Parse the first JSON object in ``raw_text`` into a nutrition record.

    Models often wrap the object in prose or code fences, so the text is
    scanned for the first balanced ``{...}`` span. Recognized fields that are
    missing or cannot be coerced fall back to their defaults; only a missing
    or undecodable object is an error. The error is returned, not raised.
    """
    candidate = _first_json_object(raw_text)
    if candidate is None:
        return MalformedResponse("Invalid AI response format")
    try:
        payload = json.loads(candidate)
    except ValueError:
        return MalformedResponse("Invalid AI response format")
    if not isinstance(payload, dict):
        return MalformedResponse("Invalid AI response format")

    calories_raw = payload.get("estimated_calories")
    if calories_raw is None:
        calories_raw = payload.get("calories")
    calories = _to_non_negative(calories_raw)

    return NutritionRecord(
        dish_name=_to_dish_name(payload.get("dish_name")),
        confidence=_to_confidence(payload.get("confidence")),
        calories=_round_half_up(calories),
        protein_g=_to_non_negative(payload.get("protein_g")),
        carbs_g=_to_non_negative(payload.get("carbs_g")),
        fat_g=_to_non_negative(payload.get("fat_g")),
    )


def _first_json_object(text: str) -> str | None:
    """Return the first balanced object span, ignoring braces inside strings."""
    in_str = False
    escaped = False
    depth = 0
    start_idx: int | None = None

    for i, ch in enumerate(text):
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue

        if ch == '"':
            # Quotes only matter once an object has opened.
            if depth > 0:
                in_str = True
            continue

        if ch == "{":
            if depth == 0:
                start_idx = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0 and start_idx is not None:
                return text[start_idx : i + 1]
    return None


def _to_dish_name(value: object) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_DISH_NAME


def _to_confidence(value: object) -> float:
    number = _to_float(value)
    if number is None or not 0.0 <= number <= 1.0:
        return DEFAULT_CONFIDENCE
    return number


def _to_non_negative(value: object) -> float:
    number = _to_float(value)
    if number is None or number < 0:
        return 0.0
    return number


def _to_float(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
