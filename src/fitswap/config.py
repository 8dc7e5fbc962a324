"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "medium"
    openai_store: bool = False
    openai_image_model: str = "dall-e-3"
    image_size: str = "1024x1024"
    image_quality: str = "standard"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_recipes_table: str = "recipes"
    supabase_images_bucket: str = "recipe-images"
    parse_cache_ttl_seconds: int = 3600
    seed_delay_seconds: float = 3.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def ai_enabled(self) -> bool:
        """Whether OpenAI-backed features are configured."""
        return bool(self.openai_api_key)

    @property
    def supabase_enabled(self) -> bool:
        """Whether a Supabase project is configured."""
        return bool(self.supabase_url and self.supabase_service_key)
