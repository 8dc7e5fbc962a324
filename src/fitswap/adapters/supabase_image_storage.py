"""Supabase Storage hosting for recipe images."""

from dataclasses import dataclass

from supabase import Client

from fitswap.services.images import ImageStorage


@dataclass
class SupabaseImageStorage(ImageStorage):
    """Upload images to a public Supabase Storage bucket."""

    client: Client
    bucket: str

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Upload bytes and return their public URL."""
        self.client.storage.from_(self.bucket).upload(
            path,
            content,
            {"content-type": content_type, "upsert": "true"},
        )
        url = self.client.storage.from_(self.bucket).get_public_url(path)
        if not url:
            raise RuntimeError("Failed to resolve public image URL")
        return url
