"""Supabase repository for meal rows."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from foodvision.domain.meals import MealEntry
from foodvision.domain.nutrition import NutritionRecord
from foodvision.services.ledger import MealRepository

_COLUMNS = (
    "id, user_id, dish_name, calories, protein, carbs, fat, confidence, "
    "image_url, created_at"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for the meals table."""

    client: Client

    def create_meal(
        self, user_id: UUID, record: NutritionRecord, image_url: str
    ) -> MealEntry:
        """Insert a meal row and return it."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(user_id),
                    "dish_name": record.dish_name,
                    "calories": record.calories,
                    "protein": record.protein_g,
                    "carbs": record.carbs_g,
                    "fat": record.fat_g,
                    "confidence": record.confidence,
                    "image_url": image_url,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_row(response.data[0])

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        """Return meals created in the time range."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("created_at", start.isoformat())
            .lt("created_at", end.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_all_meals(self, user_id: UUID) -> list[MealEntry]:
        """Return every meal for a user, newest first."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_meal(self, meal_id: UUID) -> MealEntry | None:
        """Return a meal by id."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal row."""
        self.client.table("meals").delete().eq("id", str(meal_id)).execute()


def _parse_row(row: dict[str, object]) -> MealEntry:
    return MealEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        dish_name=str(row.get("dish_name") or ""),
        confidence=float(row.get("confidence") or 0.0),
        calories=int(row.get("calories") or 0),
        protein_g=float(row.get("protein") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        fat_g=float(row.get("fat") or 0.0),
        image_url=str(row.get("image_url") or ""),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
