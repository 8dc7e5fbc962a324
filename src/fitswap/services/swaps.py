"""Goal-driven ingredient substitutions."""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from fitswap.catalog import default_swap_table
from fitswap.domain.nutrition import NutritionDelta
from fitswap.domain.recipe import Goal, Ingredient, Swap, new_id
from fitswap.domain.tables import SwapCandidate, SwapTable, normalize_name
from fitswap.services.nutrition import NutritionCalculator

_logger = logging.getLogger(__name__)


class ImpactEstimator(Protocol):
    """Estimates the nutrition change introduced by a swap."""

    def estimate(self, original: Ingredient, swapped: Ingredient) -> NutritionDelta:
        """Return swapped minus original nutrition."""


@dataclass
class CalculatedImpactEstimator(ImpactEstimator):
    """Derive impact from the same calculator used to score variants."""

    calculator: NutritionCalculator = field(default_factory=NutritionCalculator)

    def estimate(self, original: Ingredient, swapped: Ingredient) -> NutritionDelta:
        before = self.calculator.ingredient_nutrition(original)
        after = self.calculator.ingredient_nutrition(swapped)
        return NutritionDelta(
            calories=round(after.calories - before.calories),
            protein=round(after.protein - before.protein, 1),
            carbohydrates=round(after.carbohydrates - before.carbohydrates, 1),
            fats=round(after.fats - before.fats, 1),
        )


# (original fragment, swapped fragment) -> delta, checked in order.
_KNOWN_IMPACTS: tuple[tuple[str, str, NutritionDelta], ...] = (
    ("creme de leite", "iogurte", NutritionDelta(-150, 8, -2, -20)),
    ("acucar", "stevia", NutritionDelta(-400, 0, -100, 0)),
    ("farinha branca", "aveia", NutritionDelta(-50, 5, -10, 2)),
    ("arroz branco", "quinoa", NutritionDelta(-10, 4, -5, 1)),
)
_DEFAULT_IMPACT = NutritionDelta(calories=-20, protein=2, carbohydrates=-5, fats=-2)


@dataclass
class HeuristicImpactEstimator(ImpactEstimator):
    """Fixed deltas for well-known substitutions."""

    def estimate(self, original: Ingredient, swapped: Ingredient) -> NutritionDelta:
        original_name = normalize_name(original.name)
        swapped_name = normalize_name(swapped.name)
        for original_part, swapped_part, delta in _KNOWN_IMPACTS:
            if original_part in original_name and swapped_part in swapped_name:
                return delta
        return _DEFAULT_IMPACT


def _default_estimator() -> ImpactEstimator:
    return CalculatedImpactEstimator()


@dataclass
class SwapEngine:
    """Match ingredients against a swap table and build substitutions."""

    table: SwapTable = field(default_factory=default_swap_table)
    impact_estimator: ImpactEstimator = field(default_factory=_default_estimator)
    id_factory: Callable[[str], str] = new_id

    def generate_swaps(
        self,
        ingredients: Iterable[Ingredient],
        goal: Goal | str,
        restrictions: Iterable[str] = (),
    ) -> list[Swap]:
        """Return one swap per ingredient that has a usable candidate."""
        resolved_goal = Goal.coerce(goal)
        restriction_list = list(restrictions)
        swaps: list[Swap] = []
        for ingredient in ingredients:
            candidate = self._pick_candidate(
                ingredient, resolved_goal, restriction_list
            )
            if candidate is None:
                continue
            swapped = Ingredient(
                id=f"swapped_{ingredient.id}",
                name=candidate.name,
                amount=ingredient.amount,
                unit=ingredient.unit,
                category=ingredient.category,
            )
            swaps.append(
                Swap(
                    id=self.id_factory("swap"),
                    original_ingredient=ingredient,
                    swapped_ingredient=swapped,
                    reason=candidate.reason,
                    impact=self.impact_estimator.estimate(ingredient, swapped),
                )
            )
        _logger.debug(
            "Generated %s swap(s) for goal=%s", len(swaps), resolved_goal.value
        )
        return swaps

    def apply_swaps(
        self, ingredients: Sequence[Ingredient], swaps: Iterable[Swap]
    ) -> list[Ingredient]:
        return apply_swaps(ingredients, swaps)

    def _pick_candidate(
        self, ingredient: Ingredient, goal: Goal, restrictions: list[str]
    ) -> SwapCandidate | None:
        candidates = [
            candidate
            for candidate in self.table.candidates(ingredient.name)
            if candidate.allowed(restrictions)
        ]
        if not candidates:
            return None
        for candidate in candidates:
            if candidate.suits(goal):
                return candidate
        return candidates[0]


def apply_swaps(
    ingredients: Sequence[Ingredient], swaps: Iterable[Swap]
) -> list[Ingredient]:
    """Replace ingredients by id, keeping the original order."""
    replacements = {
        swap.original_ingredient.id: swap.swapped_ingredient for swap in swaps
    }
    return [replacements.get(ingredient.id, ingredient) for ingredient in ingredients]


_default_engine = SwapEngine()


def generate_swaps(
    ingredients: Iterable[Ingredient],
    goal: Goal | str,
    restrictions: Iterable[str] = (),
) -> list[Swap]:
    """Generate swaps with the bundled table."""
    return _default_engine.generate_swaps(ingredients, goal, restrictions)
