"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fitswap.adapters.httpx_image_downloader import HttpxImageDownloader
from fitswap.adapters.openai_image_client import OpenAIImageClient
from fitswap.adapters.openai_recipe_client import OpenAIRecipeClient
from fitswap.adapters.supabase_image_storage import SupabaseImageStorage
from fitswap.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from fitswap.config import Settings
from fitswap.services.ai_parser import AIRecipeParser
from fitswap.services.cache import InMemoryCache
from fitswap.services.composer import VariantComposer
from fitswap.services.fitswap import FitSwapService
from fitswap.services.images import ImageStorage, RecipeImageService
from fitswap.services.recipes import (
    InMemoryRecipeRepository,
    RecipeRepository,
    RecipeService,
)
from fitswap.services.seeding import BaseRecipeSeeder


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    fitswap_service: FitSwapService
    recipe_service: RecipeService
    close_resources: Callable[[], Awaitable[None]]
    image_service: RecipeImageService | None = None
    seeder: BaseRecipeSeeder | None = None


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    OpenAI-backed features are wired only when an API key is configured and
    recipes are stored in Supabase only when a project is configured; the
    heuristic parser and an in-memory repository cover the rest.
    """
    resolved_settings = settings or Settings()

    repository: RecipeRepository
    storage: ImageStorage | None = None
    if resolved_settings.supabase_enabled:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        repository = SupabaseRecipeRepository(
            supabase_client, table_name=resolved_settings.supabase_recipes_table
        )
        storage = SupabaseImageStorage(
            supabase_client, bucket=resolved_settings.supabase_images_bucket
        )
    else:
        repository = InMemoryRecipeRepository()

    composer = VariantComposer()
    closers: list[Callable[[], Awaitable[None]]] = []
    ai_parser: AIRecipeParser | None = None
    image_service: RecipeImageService | None = None
    seeder: BaseRecipeSeeder | None = None
    recipe_client: OpenAIRecipeClient | None = None

    if resolved_settings.ai_enabled:
        recipe_client = OpenAIRecipeClient.create(resolved_settings.openai_api_key)
        image_client = OpenAIImageClient.create(resolved_settings.openai_api_key)
        downloader = HttpxImageDownloader.create() if storage is not None else None
        ai_parser = AIRecipeParser(
            client=recipe_client,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )
        image_service = RecipeImageService(
            client=image_client,
            model=resolved_settings.openai_image_model,
            size=resolved_settings.image_size,
            quality=resolved_settings.image_quality,
            downloader=downloader,
            storage=storage,
        )
        closers.extend([recipe_client.close, image_client.close])
        if downloader is not None:
            closers.append(downloader.close)

    fitswap_service = FitSwapService(
        composer=composer,
        ai_parser=ai_parser,
        cache=InMemoryCache(),
        repository=repository,
        cache_ttl_seconds=resolved_settings.parse_cache_ttl_seconds,
    )
    if recipe_client is not None:
        seeder = BaseRecipeSeeder(
            text_client=recipe_client,
            fitswap_service=fitswap_service,
            repository=repository,
            model=resolved_settings.openai_model,
            image_service=image_service,
            delay_seconds=resolved_settings.seed_delay_seconds,
        )

    async def close_resources() -> None:
        for close in closers:
            await close()

    return AppContainer(
        settings=resolved_settings,
        fitswap_service=fitswap_service,
        recipe_service=RecipeService(repository),
        close_resources=close_resources,
        image_service=image_service,
        seeder=seeder,
    )
