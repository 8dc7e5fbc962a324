"""Tests for base recipe seeding."""

import asyncio

from fitswap.domain.recipe import Goal
from fitswap.services import seeding
from fitswap.services.composer import VariantComposer
from fitswap.services.fitswap import FitSwapService
from fitswap.services.images import RecipeImageService
from fitswap.services.recipes import InMemoryRecipeRepository
from fitswap.services.seeding import (
    CATEGORIES,
    RECIPE_IDEAS,
    BaseRecipeSeeder,
    recipe_prompt,
)
from tests.conftest import FakeImageClient, FakeTextClient


def _seeder(
    text_client: FakeTextClient,
    repository: InMemoryRecipeRepository,
    image_service: RecipeImageService | None = None,
    delay_seconds: float = 0,
) -> BaseRecipeSeeder:
    return BaseRecipeSeeder(
        text_client=text_client,
        fitswap_service=FitSwapService(composer=VariantComposer()),
        repository=repository,
        model="gpt-5.2",
        image_service=image_service,
        delay_seconds=delay_seconds,
    )


def test_every_goal_has_ideas_for_every_category() -> None:
    for goal in Goal:
        assert set(RECIPE_IDEAS[goal]) == set(CATEGORIES)


def test_recipe_prompt_mentions_title_and_format() -> None:
    prompt = recipe_prompt(Goal.GAIN_MASS, "Bowl de frango", "Snacks")

    assert "Bowl de frango" in prompt
    assert "Snacks" in prompt
    assert "Ingredientes:" in prompt
    assert "ganho de massa" in prompt


def test_seed_saves_one_recipe_per_category() -> None:
    repository = InMemoryRecipeRepository()
    image_service = RecipeImageService(
        client=FakeImageClient(), model="dall-e-3", size="1024x1024", quality="standard"
    )

    report = asyncio.run(
        _seeder(FakeTextClient(), repository, image_service).seed([Goal.LOSE_WEIGHT])
    )

    stored = repository.list_for_goal(Goal.LOSE_WEIGHT)
    assert len(report.saved) == len(CATEGORIES)
    assert report.failed == []
    assert {recipe.category for recipe in stored} == set(CATEGORIES)
    for recipe in stored:
        assert recipe.goal is Goal.LOSE_WEIGHT
        assert recipe.variant_ids == ["original", "lean"]
        assert recipe.original.image_url == "https://images.example/generated.png"
        assert all(
            variant.recipe.image_url == recipe.original.image_url
            for variant in recipe.variants
        )


def test_seed_uses_catalogue_title_when_text_has_none() -> None:
    repository = InMemoryRecipeRepository()
    text_client = FakeTextClient(
        text="Ingredientes:\n- 200 g frango\nModo de preparo:\n1. Grelhe o frango"
    )

    recipe_id = asyncio.run(
        _seeder(text_client, repository).seed_one(
            Goal.GENERAL_HEALTH, "Hummus com vegetais", "Snacks"
        )
    )

    stored = repository.get(recipe_id, Goal.GENERAL_HEALTH)
    assert stored.original.title == "Hummus com vegetais"
    assert stored.original.image_url is None


def test_seed_continues_after_failures() -> None:
    repository = InMemoryRecipeRepository()
    failing_title = RECIPE_IDEAS[Goal.GAIN_MASS]["Café"][0]
    text_client = FakeTextClient(fail_on={failing_title})

    report = asyncio.run(_seeder(text_client, repository).seed([Goal.GAIN_MASS]))

    assert report.failed == [failing_title]
    assert len(report.saved) == len(CATEGORIES) - 1


def test_seed_respects_per_category_and_delay(monkeypatch) -> None:
    sleeps: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    monkeypatch.setattr(seeding.asyncio, "sleep", fake_sleep)
    repository = InMemoryRecipeRepository()
    text_client = FakeTextClient()

    report = asyncio.run(
        _seeder(text_client, repository, delay_seconds=3).seed(
            [Goal.LOSE_WEIGHT], per_category=2
        )
    )

    assert len(report.saved) == 2 * len(CATEGORIES)
    assert len(text_client.prompts) == 2 * len(CATEGORIES)
    assert sleeps == [3] * (2 * len(CATEGORIES))
