"""Supabase implementation for stored recipes."""

from dataclasses import dataclass

from supabase import Client

from fitswap.domain.recipe import Goal, Recipe
from fitswap.errors import RecipeNotFoundError
from fitswap.serialization import recipe_from_payload, recipe_to_payload
from fitswap.services.recipes import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed repository for recipes grouped by goal."""

    client: Client
    table_name: str = "recipes"

    def save(self, recipe: Recipe, goal: Goal) -> Recipe:
        """Upsert a recipe under a goal and return the stored version."""
        payload = recipe_to_payload(recipe)
        payload["goal"] = goal.value
        response = (
            self.client.table(self.table_name)
            .upsert(
                {
                    "id": recipe.id,
                    "goal": goal.value,
                    "user_id": recipe.user_id,
                    "category": recipe.category,
                    "favorited": recipe.favorited,
                    "created_at": recipe.created_at.isoformat(),
                    "payload": payload,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save recipe")
        return _parse_recipe(response.data[0])

    def list_for_goal(self, goal: Goal) -> list[Recipe]:
        """Return recipes stored for a goal, newest first."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("goal", goal.value)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def get(self, recipe_id: str, goal: Goal) -> Recipe | None:
        """Return a recipe by id within a goal, if present."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("goal", goal.value)
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def set_favorited(self, recipe_id: str, goal: Goal, favorited: bool) -> None:
        """Update the favorited column of a stored recipe."""
        response = (
            self.client.table(self.table_name)
            .update({"favorited": favorited})
            .eq("goal", goal.value)
            .eq("id", recipe_id)
            .execute()
        )
        if not response.data:
            raise RecipeNotFoundError(recipe_id)


def _parse_recipe(row: dict[str, object]) -> Recipe:
    """Parse a recipe row; row columns win over the stored payload."""
    payload = dict(row.get("payload") or {})
    payload["id"] = row.get("id", payload.get("id"))
    payload["goal"] = row.get("goal", payload.get("goal"))
    if row.get("favorited") is not None:
        payload["favorited"] = row["favorited"]
    if row.get("created_at"):
        payload["createdAt"] = row["created_at"]
    return recipe_from_payload(payload)
