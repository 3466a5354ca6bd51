"""Meal ingestion: upload, identify, record and refresh the streak."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import PurePosixPath
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from foodvision.domain.meals import MealEntry
from foodvision.services.identification import DishIdentificationService
from foodvision.services.ledger import MealLedgerService
from foodvision.services.streaks import StreakService

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
    "image/heic": "heic",
}

_logger = logging.getLogger(__name__)


class ImageStore(Protocol):
    """Interface for the meal photo object store."""

    def upload(self, path: str, image: bytes, media_type: str) -> str:
        """Store the image and return a stable public URL.

        Raises StorageError on failure.
        """


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class IngestionCoordinator:
    """Sequences one meal photo through the whole pipeline."""

    identification: DishIdentificationService
    image_store: ImageStore
    ledger: MealLedgerService
    streaks: StreakService
    max_concurrent_uploads: int = 4
    clock: Callable[[], datetime] = _utc_now
    _upload_slots: asyncio.Semaphore = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._upload_slots = asyncio.Semaphore(self.max_concurrent_uploads)

    async def ingest(  # noqa: PLR0913
        self,
        user_id: UUID,
        image: bytes,
        media_type: str | None = None,
        file_name: str | None = None,
        timezone_name: str = "UTC",
    ) -> MealEntry:
        """Store, identify and record a meal photo for the user.

        Errors from any step propagate unchanged. A failure after the upload
        leaves the stored image in place. Upload slots bound concurrent
        uploads only and are released before identification starts.
        """
        resolved_type = self.identification.validate_image(image, media_type)
        now = self.clock()
        path = storage_path(user_id, now, resolved_type, file_name)
        async with self._upload_slots:
            image_url = await asyncio.to_thread(
                self.image_store.upload, path, image, resolved_type
            )
        _logger.info("Meal image stored", extra={"path": path})

        record = await self.identification.identify(image, resolved_type)

        entry = await asyncio.to_thread(self.ledger.append, user_id, record, image_url)
        today = now.astimezone(ZoneInfo(timezone_name)).date()
        await asyncio.to_thread(self.streaks.refresh, user_id, today, timezone_name)
        return entry


def storage_path(
    user_id: UUID, now: datetime, media_type: str, file_name: str | None = None
) -> str:
    """Build the object key ``<user_id>/<epoch millis>.<ext>``."""
    suffix = PurePosixPath(file_name).suffix.lstrip(".").lower() if file_name else ""
    extension = suffix or _EXTENSIONS.get(media_type, "jpg")
    return f"{user_id}/{int(now.timestamp() * 1000)}.{extension}"
