"""Recipe extraction backed by an LLM with structured outputs."""

import base64
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from fitswap.domain.extraction import ExtractedRecipe
from fitswap.domain.recipe import CookingStep, Ingredient, ParsedRecipe, new_id
from fitswap.errors import RecipeExtractionError, UnsupportedInputError
from fitswap.services.parser import (
    DEFAULT_COOK_TIME,
    DEFAULT_PREP_TIME,
    DEFAULT_SERVINGS,
    DEFAULT_TITLE,
    ensure_complete,
)

_logger = logging.getLogger(__name__)


def _nullable(schema: dict[str, object]) -> dict[str, object]:
    return {"anyOf": [schema, {"type": "null"}]}


RECIPE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "title": _nullable({"type": "string"}),
        "description": _nullable({"type": "string"}),
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "amount": _nullable({"type": "number", "minimum": 0}),
                    "unit": _nullable({"type": "string"}),
                    "category": _nullable({"type": "string"}),
                },
                "required": ["name", "amount", "unit", "category"],
                "additionalProperties": False,
            },
        },
        "steps": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "order": _nullable({"type": "integer", "minimum": 1}),
                    "instruction": {"type": "string"},
                    "duration": _nullable({"type": "integer", "minimum": 0}),
                    "temperature": _nullable({"type": "integer"}),
                },
                "required": ["order", "instruction", "duration", "temperature"],
                "additionalProperties": False,
            },
        },
        "servings": _nullable({"type": "integer", "minimum": 1}),
        "prep_time": _nullable({"type": "integer", "minimum": 0}),
        "cook_time": _nullable({"type": "integer", "minimum": 0}),
    },
    "required": [
        "title",
        "description",
        "ingredients",
        "steps",
        "servings",
        "prep_time",
        "cook_time",
    ],
    "additionalProperties": False,
}

TEXT_PROMPT = (
    "Você é um extrator de receitas. Extraia título, descrição, ingredientes "
    "(nome, quantidade, unidade), passos (ordem, instrução, duração em segundos), "
    "porções e tempos de preparo e cozimento em minutos do texto a seguir."
)
IMAGE_PROMPT = (
    "Extraia a receita desta imagem: título, ingredientes com quantidade e "
    "unidade, passos com duração em segundos, porções e tempos em minutos."
)


class RecipeExtractionClient(Protocol):
    """Interface for LLM recipe extraction."""

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
        """Return structured recipe data."""


@dataclass
class AIRecipeParser:
    """Parse recipe text or photos through an extraction client."""

    client: RecipeExtractionClient
    model: str
    reasoning_effort: str | None
    store: bool
    id_factory: Callable[[str], str] = new_id

    async def parse_text(self, text: str) -> ParsedRecipe:
        """Extract a recipe from free-form text."""
        if not text or not text.strip():
            raise UnsupportedInputError("Recipe text is empty")
        if "\x00" in text:
            raise UnsupportedInputError("Recipe text contains binary data")
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=TEXT_PROMPT,
            schema=RECIPE_SCHEMA,
            text=text,
        )
        return self._to_recipe(raw, source="Texto colado")

    async def parse_image(self, image_bytes: bytes) -> ParsedRecipe:
        """Extract a recipe from a photo."""
        if not image_bytes:
            raise UnsupportedInputError("Image is empty")
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=IMAGE_PROMPT,
            schema=RECIPE_SCHEMA,
            image_data_url=to_data_url(image_bytes),
        )
        return self._to_recipe(raw, source="Imagem")

    def _to_recipe(self, raw: dict[str, object], source: str) -> ParsedRecipe:
        try:
            extracted = ExtractedRecipe.model_validate(raw)
        except ValidationError as exc:
            _logger.warning("Extraction output failed validation: %s", exc)
            raise RecipeExtractionError("Invalid recipe extraction output") from exc

        ingredients = tuple(
            Ingredient(
                id=self.id_factory("ing"),
                name=item.name,
                amount=item.amount if item.amount else 1,
                unit=item.unit or "un",
                category=item.category,
            )
            for item in extracted.ingredients
        )
        steps = tuple(
            CookingStep(
                id=self.id_factory("step"),
                order=index,
                instruction=item.instruction,
                duration=item.duration or None,
                temperature=item.temperature,
                timer_required=bool(item.duration),
            )
            for index, item in enumerate(
                sorted(
                    extracted.steps,
                    key=lambda step: step.order if step.order is not None else 0,
                ),
                start=1,
            )
        )
        prep_time = (
            extracted.prep_time if extracted.prep_time is not None else DEFAULT_PREP_TIME
        )
        cook_time = (
            extracted.cook_time if extracted.cook_time is not None else DEFAULT_COOK_TIME
        )
        recipe = ParsedRecipe(
            id=self.id_factory("recipe"),
            title=extracted.title or DEFAULT_TITLE,
            description=extracted.description or None,
            ingredients=ingredients,
            steps=steps,
            servings=extracted.servings or DEFAULT_SERVINGS,
            prep_time=prep_time,
            cook_time=cook_time,
            total_time=prep_time + cook_time,
            source=source,
        )
        return ensure_complete(recipe, self.id_factory)


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
