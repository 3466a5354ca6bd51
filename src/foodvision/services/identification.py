"""Dish identification through an upstream vision model."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from foodvision.domain.nutrition import NutritionRecord
from foodvision.errors import (
    EmptyResponse,
    FoodVisionError,
    MalformedResponse,
    QuotaExhausted,
    RateLimited,
    UpstreamError,
    ValidationError,
)
from foodvision.services.extraction import extract_nutrition

SYSTEM_PROMPT = (
    "You are a food identification expert. Analyze food images and return "
    "ONLY a JSON object with: dish_name (string), confidence (0-1), "
    "estimated_calories (number), protein_g (number), carbs_g (number), "
    "fat_g (number). Be accurate and concise."
)
USER_PROMPT = (
    "Identify this dish and estimate its nutritional content. "
    "Return ONLY valid JSON."
)

HTTP_PAYMENT_REQUIRED = 402
HTTP_TOO_MANY_REQUESTS = 429
_QUOTA_ERROR_CODES = {"insufficient_quota", "quota_exceeded"}

_logger = logging.getLogger(__name__)


class UpstreamFailure(Exception):  # noqa: N818
    """Raised by model clients when the upstream call does not succeed."""

    def __init__(
        self, message: str, status_code: int | None = None, code: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class DishModelClient(Protocol):
    """Interface for a vision-capable chat model."""

    async def complete(
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        image_data_url: str,
    ) -> str | None:
        """Return the model's raw text answer, raising UpstreamFailure on error."""


@dataclass
class DishIdentificationService:
    """Turns a meal photo into a validated nutrition record."""

    client: DishModelClient
    model: str
    max_image_bytes: int = 10 * 1024 * 1024

    def validate_image(self, image: bytes, media_type: str | None) -> str:
        """Check the payload and return its effective media type."""
        if not image:
            raise ValidationError("Image data is required")
        if len(image) > self.max_image_bytes:
            raise ValidationError("Image is too large")
        resolved = media_type or detect_media_type(image)
        if not resolved.lower().startswith("image/"):
            raise ValidationError("Please select a valid image file")
        return resolved.lower()

    async def identify(
        self, image: bytes, media_type: str | None = None
    ) -> NutritionRecord:
        """Identify the dish in ``image`` and estimate its nutrition."""
        resolved_type = self.validate_image(image, media_type)
        try:
            raw = await self.client.complete(
                model=self.model,
                system_prompt=SYSTEM_PROMPT,
                prompt=USER_PROMPT,
                image_data_url=to_data_url(image, resolved_type),
            )
        except UpstreamFailure as exc:
            error = classify_upstream_failure(exc)
            _logger.warning(
                "Dish identification failed: %s",
                error.kind,
                extra={"status_code": exc.status_code, "code": exc.code},
            )
            raise error from exc

        if raw is None or not raw.strip():
            _logger.warning("Dish identification returned no content")
            raise EmptyResponse("No response from AI")

        result = extract_nutrition(raw)
        if isinstance(result, MalformedResponse):
            _logger.warning("Unparseable identification response: %.200s", raw)
            raise result
        _logger.info(
            "Identified dish: %s (confidence=%.2f)",
            result.dish_name,
            result.confidence,
        )
        return result


def classify_upstream_failure(failure: UpstreamFailure) -> FoodVisionError:
    """Map an upstream failure to the caller-facing error kind."""
    if failure.status_code == HTTP_PAYMENT_REQUIRED or (
        failure.status_code == HTTP_TOO_MANY_REQUESTS
        and failure.code in _QUOTA_ERROR_CODES
    ):
        return QuotaExhausted(
            "AI service credits exhausted. Please add credits to continue."
        )
    if failure.status_code == HTTP_TOO_MANY_REQUESTS:
        return RateLimited("AI service rate limit exceeded. Please try again later.")
    return UpstreamError("Failed to identify dish")


def to_data_url(image: bytes, media_type: str) -> str:
    """Encode image bytes as a base64 data URL."""
    encoded = base64.b64encode(image).decode("utf-8")
    return f"data:{media_type};base64,{encoded}"


def detect_media_type(image: bytes) -> str:
    """Infer a basic image media type from file signatures."""
    if image.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image[:4] == b"RIFF" and image[8:12] == b"WEBP":
        return "image/webp"
    if image[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
