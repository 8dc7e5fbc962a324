"""Application service tying parsing, composition and storage together."""

import logging
from dataclasses import dataclass

from fitswap.domain.recipe import Goal, ParsedRecipe, Recipe, UserPreferences
from fitswap.errors import RecipeExtractionError, UnsupportedInputError
from fitswap.services.ai_parser import AIRecipeParser
from fitswap.services.cache import Cache, text_cache_key
from fitswap.services.composer import VariantComposer
from fitswap.services.recipes import RecipeRepository

_logger = logging.getLogger(__name__)


@dataclass
class FitSwapService:
    """Transform recipes from text or photos for a user goal."""

    composer: VariantComposer
    ai_parser: AIRecipeParser | None = None
    cache: Cache | None = None
    repository: RecipeRepository | None = None
    cache_ttl_seconds: int = 3600

    async def parse_text(self, text: str) -> ParsedRecipe:
        """Parse text with the AI parser when available, else heuristically."""
        if self.ai_parser is None:
            return self.composer.parser.parse(text)

        cache_key = text_cache_key("recipe:text", text or "")
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if isinstance(cached, ParsedRecipe):
                return cached

        try:
            parsed = await self.ai_parser.parse_text(text)
        except UnsupportedInputError:
            _logger.info("Text not usable for AI extraction, parsing heuristically")
            return self.composer.parser.parse(text)
        except Exception as exc:
            _logger.warning("AI extraction failed, falling back to heuristics: %s", exc)
            return self.composer.parser.parse(text)

        if self.cache is not None:
            self.cache.set(cache_key, parsed, ttl_seconds=self.cache_ttl_seconds)
        return parsed

    async def transform_text(  # noqa: PLR0913
        self,
        text: str,
        goal: Goal | str,
        preferences: UserPreferences | None = None,
        user_id: str | None = None,
        persist: bool = False,
    ) -> Recipe:
        """Parse recipe text and compose its variants."""
        parsed = await self.parse_text(text)
        recipe = self.composer.compose(parsed, goal, preferences, user_id=user_id)
        return self._maybe_persist(recipe, persist)

    async def transform_image(  # noqa: PLR0913
        self,
        image_bytes: bytes,
        goal: Goal | str,
        preferences: UserPreferences | None = None,
        user_id: str | None = None,
        persist: bool = False,
    ) -> Recipe:
        """Extract a recipe from a photo and compose its variants."""
        if self.ai_parser is None:
            raise RecipeExtractionError("Image extraction is not configured")
        try:
            parsed = await self.ai_parser.parse_image(image_bytes)
        except (RecipeExtractionError, UnsupportedInputError):
            raise
        except Exception as exc:
            raise RecipeExtractionError("Image extraction failed") from exc
        recipe = self.composer.compose(parsed, goal, preferences, user_id=user_id)
        return self._maybe_persist(recipe, persist)

    def _maybe_persist(self, recipe: Recipe, persist: bool) -> Recipe:
        if not persist:
            return recipe
        if self.repository is None:
            _logger.warning("Persistence requested but no repository configured")
            return recipe
        goal = recipe.goal or Goal.GENERAL_HEALTH
        return self.repository.save(recipe, goal)
