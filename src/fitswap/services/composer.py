"""Compose goal and budget variants for a parsed recipe."""

import dataclasses
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from fitswap.domain.recipe import (
    Goal,
    Ingredient,
    ParsedRecipe,
    Recipe,
    RecipeVariant,
    Swap,
    UserPreferences,
    new_id,
)
from fitswap.services.nutrition import NutritionCalculator
from fitswap.services.parser import RecipeParser, TextRecipeParser
from fitswap.services.swaps import SwapEngine

_logger = logging.getLogger(__name__)

LEAN_EXPLANATION = (
    "Versão otimizada para perda de peso com menos calorias e mais proteína."
)
HIGH_PROTEIN_EXPLANATION = "Versão rica em proteína para ganho de massa muscular."
BUDGET_EXPLANATION = "Versão otimizada para orçamento."

# goal -> (variant id, display name, explanation)
_GOAL_VARIANTS: dict[Goal, tuple[str, str, str]] = {
    Goal.LOSE_WEIGHT: ("lean", "Lean", LEAN_EXPLANATION),
    Goal.GAIN_MASS: ("high_protein", "High-Protein", HIGH_PROTEIN_EXPLANATION),
}


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class VariantComposer:
    """Parse once, then derive the original, goal and budget variants."""

    parser: RecipeParser = field(default_factory=TextRecipeParser)
    calculator: NutritionCalculator = field(default_factory=NutritionCalculator)
    swap_engine: SwapEngine = field(default_factory=SwapEngine)
    clock: Callable[[], datetime] = _utc_now
    id_factory: Callable[[str], str] = new_id

    def transform_recipe(
        self,
        recipe_text: str,
        goal: Goal | str,
        preferences: UserPreferences | None = None,
    ) -> Recipe:
        """Parse recipe text and build every applicable variant."""
        parsed = self.parser.parse(recipe_text)
        return self.compose(parsed, goal, preferences)

    def compose(
        self,
        parsed: ParsedRecipe,
        goal: Goal | str,
        preferences: UserPreferences | None = None,
        user_id: str | None = None,
    ) -> Recipe:
        """Build the Recipe aggregate for an already parsed recipe."""
        resolved_goal = Goal.coerce(goal)
        prefs = preferences or UserPreferences()
        budget = prefs.budget_per_portion

        variants = [
            self._build_variant(
                variant_id="original",
                name="Original",
                base=parsed,
                ingredients=list(parsed.ingredients),
                swaps=[],
                budget=budget,
            )
        ]

        goal_variant = _GOAL_VARIANTS.get(resolved_goal)
        if goal_variant is not None:
            variant_id, name, explanation = goal_variant
            variants.append(
                self._swap_variant(
                    parsed, resolved_goal, prefs, variant_id, name, explanation
                )
            )

        if budget is not None:
            variants.append(
                self._swap_variant(
                    parsed,
                    Goal.GENERAL_HEALTH,
                    prefs,
                    "budget",
                    "Budget",
                    BUDGET_EXPLANATION,
                )
            )

        _logger.info(
            "Composed recipe %r for goal=%s with variants=%s",
            parsed.title,
            resolved_goal.value,
            [variant.id for variant in variants],
        )
        return Recipe(
            id=self.id_factory("recipe"),
            original=parsed,
            variants=tuple(variants),
            created_at=self.clock(),
            user_id=user_id,
            goal=resolved_goal,
        )

    def _swap_variant(  # noqa: PLR0913
        self,
        parsed: ParsedRecipe,
        goal: Goal,
        preferences: UserPreferences,
        variant_id: str,
        name: str,
        explanation: str,
    ) -> RecipeVariant:
        swaps = self.swap_engine.generate_swaps(
            parsed.ingredients, goal, preferences.restrictions
        )
        ingredients = self.swap_engine.apply_swaps(parsed.ingredients, swaps)
        return self._build_variant(
            variant_id=variant_id,
            name=name,
            base=parsed,
            ingredients=ingredients,
            swaps=swaps,
            budget=preferences.budget_per_portion,
            explanation=explanation,
        )

    def _build_variant(  # noqa: PLR0913
        self,
        *,
        variant_id: str,
        name: str,
        base: ParsedRecipe,
        ingredients: Sequence[Ingredient],
        swaps: Sequence[Swap],
        budget: float | None,
        explanation: str | None = None,
    ) -> RecipeVariant:
        recipe = base
        if swaps:
            recipe = dataclasses.replace(base, ingredients=tuple(ingredients))
        nutrition = self.calculator.calculate_recipe_nutrition(ingredients)
        return RecipeVariant(
            id=variant_id,
            name=name,
            recipe=recipe,
            swaps=tuple(swaps),
            nutrition=nutrition,
            health_score=self.calculator.calculate_health_score(nutrition),
            cost_score=self.calculator.calculate_cost_score(ingredients, budget),
            explanation=explanation,
        )


_default_composer = VariantComposer()


def transform_recipe(
    recipe_text: str,
    goal: Goal | str,
    preferences: UserPreferences | None = None,
) -> Recipe:
    """Transform recipe text with the bundled parser and tables."""
    return _default_composer.transform_recipe(recipe_text, goal, preferences)
