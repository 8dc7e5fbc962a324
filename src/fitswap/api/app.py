"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from fitswap.api.schemas import (
    FavoriteRequest,
    GenerateImageRequest,
    ParseRecipeRequest,
    TransformImageRequest,
    TransformRequest,
)
from fitswap.app_logging import configure_logging
from fitswap.containers import AppContainer
from fitswap.domain.recipe import Goal
from fitswap.errors import (
    RecipeExtractionError,
    RecipeNotFoundError,
    UnsupportedInputError,
)
from fitswap.serialization import parsed_recipe_to_payload, recipe_to_payload
from fitswap.services.recipes import goal_section_title


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(RecipeExtractionError)
    async def extraction_error(
        request: Request, exc: RecipeExtractionError
    ) -> JSONResponse:
        logger.warning("Recipe extraction failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
        )

    @app.exception_handler(UnsupportedInputError)
    async def unsupported_input(
        request: Request, exc: UnsupportedInputError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(RecipeNotFoundError)
    async def recipe_not_found(
        request: Request, exc: RecipeNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": f"Recipe not found: {exc}"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/transform")
    async def transform(payload: TransformRequest, request: Request) -> dict[str, object]:
        """Transform pasted recipe text into goal variants."""
        state_container: AppContainer = request.app.state.container
        recipe = await state_container.fitswap_service.transform_text(
            payload.text,
            Goal.coerce(payload.goal),
            preferences=payload.preferences.to_domain() if payload.preferences else None,
            user_id=payload.user_id,
            persist=payload.persist,
        )
        return recipe_to_payload(recipe)

    @app.post("/api/transform-image")
    async def transform_image(
        payload: TransformImageRequest, request: Request
    ) -> dict[str, object]:
        """Transform a recipe photo into goal variants."""
        state_container: AppContainer = request.app.state.container
        image_bytes = _decode_image(payload.image_base64)
        recipe = await state_container.fitswap_service.transform_image(
            image_bytes,
            Goal.coerce(payload.goal),
            preferences=payload.preferences.to_domain() if payload.preferences else None,
            user_id=payload.user_id,
            persist=payload.persist,
        )
        return recipe_to_payload(recipe)

    @app.post("/api/parse-recipe")
    async def parse_recipe(
        payload: ParseRecipeRequest, request: Request
    ) -> dict[str, object]:
        """Parse recipe text without composing variants."""
        state_container: AppContainer = request.app.state.container
        parsed = await state_container.fitswap_service.parse_text(payload.text)
        return parsed_recipe_to_payload(parsed)

    @app.post("/api/generate-image")
    async def generate_image(
        payload: GenerateImageRequest, request: Request
    ) -> dict[str, str]:
        """Generate an illustration for a recipe title."""
        state_container: AppContainer = request.app.state.container
        if state_container.image_service is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Image generation is not configured",
            )
        url = await state_container.image_service.illustrate(payload.title)
        if not url:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Image generation failed",
            )
        return {"imageUrl": url}

    @app.get("/api/recipes/{goal}")
    async def list_recipes(goal: str, request: Request) -> dict[str, object]:
        """Return stored recipes for a goal, newest first."""
        state_container: AppContainer = request.app.state.container
        resolved = Goal.coerce(goal)
        recipes = state_container.recipe_service.get_base_recipes_for_goal(resolved)
        return {
            "goal": resolved.value,
            "title": goal_section_title(resolved),
            "recipes": [recipe_to_payload(recipe) for recipe in recipes],
        }

    @app.get("/api/recipes/{goal}/{recipe_id}")
    async def get_recipe(goal: str, recipe_id: str, request: Request) -> dict[str, object]:
        """Return a stored recipe by id."""
        state_container: AppContainer = request.app.state.container
        recipe = state_container.recipe_service.get_recipe_by_id(recipe_id, goal)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        return recipe_to_payload(recipe)

    @app.post("/api/recipes/{goal}/{recipe_id}/favorite")
    async def favorite_recipe(
        goal: str, recipe_id: str, payload: FavoriteRequest, request: Request
    ) -> dict[str, object]:
        """Set the favorited flag of a stored recipe."""
        state_container: AppContainer = request.app.state.container
        recipe = state_container.recipe_service.set_favorited(
            recipe_id, goal, payload.favorited
        )
        return recipe_to_payload(recipe)

    return app


def _decode_image(encoded: str) -> bytes:
    """Decode a base64 image, accepting data URLs."""
    if encoded.startswith("data:") and "," in encoded:
        encoded = encoded.split(",", 1)[1]
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise UnsupportedInputError("Image is not valid base64") from exc
