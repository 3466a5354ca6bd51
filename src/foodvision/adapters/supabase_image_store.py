"""Supabase Storage bucket for meal photos."""

from dataclasses import dataclass

from supabase import Client

from foodvision.errors import StorageError
from foodvision.services.ingestion import ImageStore


@dataclass
class SupabaseImageStore(ImageStore):
    """Stores meal photos in a public Supabase Storage bucket."""

    client: Client
    bucket: str = "meal-images"

    def upload(self, path: str, image: bytes, media_type: str) -> str:
        """Upload the image and return its public URL."""
        bucket = self.client.storage.from_(self.bucket)
        try:
            bucket.upload(path, image, {"content-type": media_type})
        except Exception as exc:
            raise StorageError("Failed to upload image") from exc
        return bucket.get_public_url(path)
