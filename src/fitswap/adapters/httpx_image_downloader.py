"""HTTPX download of generated images."""

from dataclasses import dataclass

import httpx

from fitswap.services.images import ImageDownloader


@dataclass
class HttpxImageDownloader(ImageDownloader):
    """HTTPX-backed image downloader."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls) -> "HttpxImageDownloader":
        """Create a downloader with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(follow_redirects=True))

    async def download(self, url: str) -> bytes:
        """Fetch the image bytes behind a URL."""
        response = await self.http_client.get(url, timeout=30)
        response.raise_for_status()
        if not response.content:
            raise RuntimeError("Downloaded image is empty")
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
