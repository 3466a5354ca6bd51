"""Pydantic models for API payloads."""

import base64
import binascii
import re
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field

from foodvision.errors import ValidationError

_DATA_URL = re.compile(
    r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL
)


class ImagePayload(BaseModel):
    """A meal photo sent as a base64 data URL or bare base64."""

    image_base64: str = Field(
        validation_alias=AliasChoices("image_base64", "imageBase64")
    )
    file_name: str | None = Field(
        default=None, validation_alias=AliasChoices("file_name", "fileName")
    )

    def decode(self) -> tuple[bytes, str | None]:
        """Return the image bytes and the declared media type, if any."""
        raw = self.image_base64.strip()
        media_type: str | None = None
        match = _DATA_URL.match(raw)
        if match:
            media_type = match.group("media_type").lower()
            raw = match.group("data")
        elif raw.startswith("data:"):
            raise ValidationError("Image data URL must be base64 encoded")
        try:
            image = base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError("Image data is not valid base64") from exc
        return image, media_type


class ProfileUpdate(BaseModel):
    """Editable profile fields; omitted fields stay unchanged."""

    name: str | None = None
    age: int | None = Field(default=None, ge=0)
    gender: str | None = None
    weight: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, ge=0)
    daily_calorie_goal: int | None = Field(default=None, gt=0)


class MealChangeRecord(BaseModel):
    """Subset of a meals row carried by database webhooks."""

    user_id: UUID | None = None


class MealChangeEvent(BaseModel):
    """Database webhook payload for the meals table."""

    type: str
    table: str
    record: MealChangeRecord | None = None
    old_record: MealChangeRecord | None = None

    def user_id(self) -> UUID | None:
        """Return the owner of the changed row."""
        for row in (self.record, self.old_record):
            if row and row.user_id:
                return row.user_id
        return None
