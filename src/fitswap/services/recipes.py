"""Stored recipe retrieval keyed by goal."""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Protocol

from fitswap.domain.recipe import Goal, Recipe
from fitswap.errors import RecipeNotFoundError

_logger = logging.getLogger(__name__)

_SECTION_TITLES = {
    Goal.LOSE_WEIGHT: "Receitas para perder peso",
    Goal.GAIN_MASS: "Receitas para ganhar massa",
    Goal.GENERAL_HEALTH: "Receitas saudáveis",
}


class RecipeRepository(Protocol):
    """Persistence interface for generated recipes."""

    def save(self, recipe: Recipe, goal: Goal) -> Recipe:
        """Store a recipe under a goal and return it."""

    def list_for_goal(self, goal: Goal) -> list[Recipe]:
        """Return all recipes stored for a goal."""

    def get(self, recipe_id: str, goal: Goal) -> Recipe | None:
        """Return a recipe by id within a goal, if present."""

    def set_favorited(self, recipe_id: str, goal: Goal, favorited: bool) -> None:
        """Update the favorited flag of a stored recipe."""


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """Process-local repository used when no database is configured."""

    recipes: dict[Goal, dict[str, Recipe]] = field(default_factory=dict)

    def save(self, recipe: Recipe, goal: Goal) -> Recipe:
        stored = dataclasses.replace(recipe, goal=goal)
        self.recipes.setdefault(goal, {})[recipe.id] = stored
        return stored

    def list_for_goal(self, goal: Goal) -> list[Recipe]:
        return list(self.recipes.get(goal, {}).values())

    def get(self, recipe_id: str, goal: Goal) -> Recipe | None:
        return self.recipes.get(goal, {}).get(recipe_id)

    def set_favorited(self, recipe_id: str, goal: Goal, favorited: bool) -> None:
        recipe = self.get(recipe_id, goal)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        self.recipes[goal][recipe_id] = dataclasses.replace(recipe, favorited=favorited)


@dataclass
class RecipeService:
    """Read side for stored recipes."""

    repository: RecipeRepository

    def save(self, recipe: Recipe, goal: Goal | str) -> Recipe:
        return self.repository.save(recipe, Goal.coerce(goal))

    def get_base_recipes_for_goal(self, goal: Goal | str) -> list[Recipe]:
        """Return stored recipes for a goal, newest first."""
        resolved = Goal.coerce(goal)
        try:
            recipes = self.repository.list_for_goal(resolved)
        except Exception:
            _logger.exception("Failed to list recipes for goal=%s", resolved.value)
            return []
        return sorted(recipes, key=lambda recipe: recipe.created_at, reverse=True)

    def get_all_base_recipes(self) -> list[Recipe]:
        """Return stored recipes across every goal."""
        recipes: list[Recipe] = []
        for goal in Goal:
            recipes.extend(self.get_base_recipes_for_goal(goal))
        return recipes

    def get_recipe_by_id(
        self, recipe_id: str, goal: Goal | str | None = None
    ) -> Recipe | None:
        """Return a recipe by id, searching every goal when none is given."""
        goals = [Goal.coerce(goal)] if goal is not None else list(Goal)
        for candidate in goals:
            try:
                recipe = self.repository.get(recipe_id, candidate)
            except Exception:
                _logger.exception("Failed to fetch recipe %s", recipe_id)
                return None
            if recipe is not None:
                return recipe
        return None

    def set_favorited(
        self, recipe_id: str, goal: Goal | str, favorited: bool
    ) -> Recipe:
        """Toggle the favorited flag and return the updated recipe."""
        resolved = Goal.coerce(goal)
        if self.repository.get(recipe_id, resolved) is None:
            raise RecipeNotFoundError(recipe_id)
        self.repository.set_favorited(recipe_id, resolved, favorited)
        updated = self.repository.get(recipe_id, resolved)
        if updated is None:
            raise RecipeNotFoundError(recipe_id)
        return updated


def goal_section_title(goal: Goal | str) -> str:
    """Return the display title for a goal's recipe section."""
    return _SECTION_TITLES[Goal.coerce(goal)]
