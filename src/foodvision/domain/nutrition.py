"""Nutrition estimate returned by dish identification."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DISH_NAME = "Unknown Dish"
DEFAULT_CONFIDENCE = 0.85


class NutritionRecord(BaseModel):
    """Fully populated nutrition estimate for one photographed dish."""

    model_config = ConfigDict(frozen=True)

    dish_name: str = Field(default=DEFAULT_DISH_NAME, min_length=1)
    confidence: float = Field(default=DEFAULT_CONFIDENCE, ge=0.0, le=1.0)
    calories: int = Field(default=0, ge=0)
    protein_g: float = Field(default=0.0, ge=0.0)
    carbs_g: float = Field(default=0.0, ge=0.0)
    fat_g: float = Field(default=0.0, ge=0.0)
