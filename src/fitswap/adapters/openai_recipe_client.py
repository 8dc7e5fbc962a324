"""OpenAI Responses API client for recipe extraction and generation."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from fitswap.services.ai_parser import RecipeExtractionClient
from fitswap.services.seeding import RecipeTextClient


@dataclass
class OpenAIRecipeClient(RecipeExtractionClient, RecipeTextClient):
    """Recipe client backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIRecipeClient":
        """Create an OpenAI recipe client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        text: str | None = None,
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Call the Responses API with a strict recipe schema."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if text is not None:
            content.append({"type": "input_text", "text": text})
        if image_data_url is not None:
            content.append({"type": "input_image", "image_url": image_data_url})

        request_payload: dict[str, object] = {
            "model": model,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "recipe_extract",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def generate_text(self, *, model: str, prompt: str) -> str:
        """Return free text generated for a prompt."""
        response = await self.client.responses.create(
            model=model,
            input=[{"role": "user", "content": prompt}],
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP session."""
        await self.client.close()
