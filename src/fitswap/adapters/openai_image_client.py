"""OpenAI Images API client."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from fitswap.services.images import ImageGenerationClient


@dataclass
class OpenAIImageClient(ImageGenerationClient):
    """Image generation backed by the OpenAI Images API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIImageClient":
        """Create an OpenAI image client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(
        self, *, prompt: str, model: str, size: str, quality: str
    ) -> str | None:
        """Generate one image and return its URL."""
        response = await self.client.images.generate(
            model=model,
            prompt=prompt,
            n=1,
            size=size,
            quality=quality,
        )
        if not response.data:
            raise RuntimeError("OpenAI returned no image")
        return response.data[0].url

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP session."""
        await self.client.close()
