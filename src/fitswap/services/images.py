"""Recipe illustration generation."""

import logging
from dataclasses import dataclass
from typing import Protocol

from fitswap.domain.recipe import new_id

_logger = logging.getLogger(__name__)

_PROMPT_STYLE = (
    "professional food styling, soft diffused light, 50mm lens, "
    "minimalist composition, restaurant quality, background off-white"
)


class ImageGenerationClient(Protocol):
    """Interface for text-to-image generation."""

    async def generate(
        self, *, prompt: str, model: str, size: str, quality: str
    ) -> str | None:
        """Generate an image and return its temporary URL."""


class ImageDownloader(Protocol):
    """Interface for fetching generated images."""

    async def download(self, url: str) -> bytes:
        """Return the bytes behind a URL."""


class ImageStorage(Protocol):
    """Interface for permanent image hosting."""

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store bytes at a path and return a public URL."""


@dataclass
class RecipeImageService:
    """Generate recipe images and optionally re-host them."""

    client: ImageGenerationClient
    model: str
    size: str
    quality: str
    downloader: ImageDownloader | None = None
    storage: ImageStorage | None = None

    def build_prompt(self, title: str | None = None) -> str:
        """Return the generation prompt for a recipe title."""
        if title:
            return f"Beautiful appetizing food photography of {title}, {_PROMPT_STYLE}"
        return (
            f"Beautiful appetizing food photography, {_PROMPT_STYLE}, "
            "focus on healthy nutritious food"
        )

    async def illustrate(self, title: str | None = None) -> str | None:
        """Return an image URL for the title, or None if generation fails."""
        try:
            url = await self.client.generate(
                prompt=self.build_prompt(title),
                model=self.model,
                size=self.size,
                quality=self.quality,
            )
        except Exception:
            _logger.exception("Image generation failed for %r", title)
            return None
        if not url or self.downloader is None or self.storage is None:
            return url

        try:
            content = await self.downloader.download(url)
            return self.storage.upload(
                f"recipes/{new_id('img')}.png", content, "image/png"
            )
        except Exception:
            _logger.exception("Image re-hosting failed, keeping generated URL")
            return url
