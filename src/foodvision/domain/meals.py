"""Domain models for logged meals."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class MealEntry:
    """A stored meal with its nutrition estimate and photo."""

    id: UUID
    user_id: UUID
    dish_name: str
    confidence: float
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    image_url: str
    created_at: datetime


@dataclass(frozen=True)
class DailyTotal:
    """Calories logged by one user within one calendar day."""

    day: date
    calories: int
