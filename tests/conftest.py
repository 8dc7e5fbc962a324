"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from fitswap.config import Settings
from fitswap.containers import AppContainer
from fitswap.domain.recipe import CookingStep, Goal, Ingredient, ParsedRecipe, Recipe
from fitswap.services.ai_parser import AIRecipeParser, RecipeExtractionClient
from fitswap.services.cache import InMemoryCache
from fitswap.services.composer import VariantComposer
from fitswap.services.fitswap import FitSwapService
from fitswap.services.images import (
    ImageDownloader,
    ImageGenerationClient,
    ImageStorage,
    RecipeImageService,
)
from fitswap.services.recipes import InMemoryRecipeRepository, RecipeService
from fitswap.services.seeding import BaseRecipeSeeder, RecipeTextClient

FRANGO_TEXT = """Frango grelhado

Ingredientes:
- 200 g frango
- 100 g arroz

Modo de preparo:
1. Grelhe o frango por 10 minutos
2. Sirva com arroz
"""

EXTRACTED_RECIPE: dict[str, object] = {
    "title": "Bolo de cenoura",
    "description": "Bolo fofinho",
    "ingredients": [
        {"name": "farinha de trigo", "amount": 200, "unit": "g", "category": None},
        {"name": "açúcar", "amount": 150, "unit": "g", "category": None},
        {"name": "ovos", "amount": 3, "unit": None, "category": None},
    ],
    "steps": [
        {
            "order": 2,
            "instruction": "Asse por 40 minutos",
            "duration": 2400,
            "temperature": 180,
        },
        {
            "order": 1,
            "instruction": "Bata tudo no liquidificador",
            "duration": None,
            "temperature": None,
        },
    ],
    "servings": 8,
    "prep_time": 20,
    "cook_time": None,
}


@dataclass
class FakeRecipeExtractionClient(RecipeExtractionClient):
    """Extraction client returning a canned payload."""

    result: dict[str, object] = field(default_factory=lambda: dict(EXTRACTED_RECIPE))
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

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
        self.calls.append({"text": text, "image_data_url": image_data_url})
        if self.error is not None:
            raise self.error
        return self.result


@dataclass
class FakeTextClient(RecipeTextClient):
    """Text client returning the same recipe text for every prompt."""

    text: str = FRANGO_TEXT
    fail_on: set[str] = field(default_factory=set)
    prompts: list[str] = field(default_factory=list)

    async def generate_text(self, *, model: str, prompt: str) -> str:
        self.prompts.append(prompt)
        if any(title in prompt for title in self.fail_on):
            raise RuntimeError("generation failed")
        return self.text


@dataclass
class FakeImageClient(ImageGenerationClient):
    """Image client recording prompts."""

    url: str | None = "https://images.example/generated.png"
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self, *, prompt: str, model: str, size: str, quality: str
    ) -> str | None:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.url


@dataclass
class FakeImageDownloader(ImageDownloader):
    content: bytes = b"\x89PNG\r\n\x1a\nimage"
    error: Exception | None = None

    async def download(self, url: str) -> bytes:
        if self.error is not None:
            raise self.error
        return self.content


@dataclass
class FakeImageStorage(ImageStorage):
    uploads: dict[str, bytes] = field(default_factory=dict)

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        self.uploads[path] = content
        return f"https://storage.example/{path}"


@dataclass
class FailingRecipeRepository(InMemoryRecipeRepository):
    """Repository whose reads always fail."""

    def list_for_goal(self, goal: Goal) -> list[Recipe]:
        raise RuntimeError("database unavailable")

    def get(self, recipe_id: str, goal: Goal) -> Recipe | None:
        raise RuntimeError("database unavailable")


def sequential_ids() -> Callable[[str], str]:
    """Return an id factory producing predictable ids."""
    counter = {"value": 0}

    def factory(prefix: str) -> str:
        counter["value"] += 1
        return f"{prefix}_{counter['value']}"

    return factory


def make_recipe(
    recipe_id: str,
    created_at: datetime,
    title: str = "Receita",
) -> Recipe:
    """Build a minimal stored recipe."""
    original = ParsedRecipe(
        id=f"parsed_{recipe_id}",
        title=title,
        ingredients=(Ingredient(id="ing_1", name="frango", amount=200, unit="g"),),
        steps=(CookingStep(id="step_1", order=1, instruction="Grelhe"),),
    )
    return Recipe(id=recipe_id, original=original, variants=(), created_at=created_at)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key=None,
        supabase_url=None,
        supabase_service_key=None,
        seed_delay_seconds=0,
    )


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def extraction_client() -> FakeRecipeExtractionClient:
    return FakeRecipeExtractionClient()


@pytest.fixture
def image_client() -> FakeImageClient:
    return FakeImageClient()


@pytest.fixture
def container(
    settings: Settings,
    recipe_repository: InMemoryRecipeRepository,
    extraction_client: FakeRecipeExtractionClient,
    image_client: FakeImageClient,
) -> AppContainer:
    ai_parser = AIRecipeParser(
        client=extraction_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    fitswap_service = FitSwapService(
        composer=VariantComposer(),
        ai_parser=ai_parser,
        cache=InMemoryCache(),
        repository=recipe_repository,
    )
    image_service = RecipeImageService(
        client=image_client,
        model=settings.openai_image_model,
        size=settings.image_size,
        quality=settings.image_quality,
    )
    seeder = BaseRecipeSeeder(
        text_client=FakeTextClient(),
        fitswap_service=fitswap_service,
        repository=recipe_repository,
        model=settings.openai_model,
        image_service=image_service,
        delay_seconds=0,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        fitswap_service=fitswap_service,
        recipe_service=RecipeService(recipe_repository),
        close_resources=close_resources,
        image_service=image_service,
        seeder=seeder,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
