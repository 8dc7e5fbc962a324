"""Nutrition aggregation and recipe scoring."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from fitswap.catalog import default_nutrition_table
from fitswap.domain.nutrition import (
    Affordability,
    CostScore,
    HealthFactors,
    HealthScore,
    NutritionInfo,
)
from fitswap.domain.recipe import Ingredient
from fitswap.domain.tables import NutritionTable, normalize_name

# Grams (or millilitres) per unit for mass/volume units. Anything else is a
# count-like unit and scales the 100 g row by the raw amount.
_MASS_VOLUME_UNITS: dict[str, float] = {
    "g": 1.0,
    "gr": 1.0,
    "grama": 1.0,
    "gramas": 1.0,
    "ml": 1.0,
    "mililitro": 1.0,
    "mililitros": 1.0,
    "kg": 1000.0,
    "quilo": 1000.0,
    "quilos": 1000.0,
    "l": 1000.0,
    "litro": 1000.0,
    "litros": 1000.0,
}

_BASE_SCORE = 50.0
_MAX_PROTEIN_BONUS = 20.0
_MAX_FIBER_BONUS = 10.0
_MAX_SODIUM_PENALTY = 15.0
_LOW_DENSITY_BONUS = 5.0
_LOW_DENSITY_THRESHOLD = 3.0
_IDEAL_RATIOS = (0.25, 0.45, 0.30)
_RATIO_WEIGHTS = (20.0, 10.0, 10.0)

_PLACEHOLDER_COST_PER_INGREDIENT = 3.0
_PLACEHOLDER_COST_SCORE = 75

_OPTIONAL_FIELDS = ("fiber", "sodium", "sugar", "saturated_fat")

_logger = logging.getLogger(__name__)


def unit_multiplier(amount: float, unit: str) -> float:
    """Return the factor applied to a per-100 g row for an amount and unit."""
    amount = max(amount, 0.0)
    grams_per_unit = _MASS_VOLUME_UNITS.get(normalize_name(unit).rstrip("."))
    if grams_per_unit is None:
        return amount
    return amount * grams_per_unit / 100


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


@dataclass
class NutritionCalculator:
    """Estimate nutrition from a static table and score the result."""

    table: NutritionTable = field(default_factory=default_nutrition_table)

    def ingredient_nutrition(self, ingredient: Ingredient) -> NutritionInfo:
        """Return unrounded nutrition for a single ingredient."""
        key = self.table.match(ingredient.name)
        if key is None:
            _logger.debug("No nutrition row for %r, using default", ingredient.name)
            facts = self.table.default
        else:
            facts = self.table.rows[key]
        multiplier = unit_multiplier(ingredient.amount, ingredient.unit)

        def scaled(value: float | None) -> float | None:
            return None if value is None else value * multiplier

        return NutritionInfo(
            calories=facts.calories * multiplier,
            protein=facts.protein * multiplier,
            carbohydrates=facts.carbs * multiplier,
            fats=facts.fats * multiplier,
            fiber=scaled(facts.fiber),
            sodium=scaled(facts.sodium),
            sugar=scaled(facts.sugar),
            saturated_fat=scaled(facts.saturated_fat),
        )

    def calculate_recipe_nutrition(
        self, ingredients: Iterable[Ingredient]
    ) -> NutritionInfo:
        """Sum ingredient nutrition, rounding calories to int and macros to 0.1."""
        totals = {"calories": 0.0, "protein": 0.0, "carbohydrates": 0.0, "fats": 0.0}
        optional: dict[str, float] = {}
        for ingredient in ingredients:
            nutrition = self.ingredient_nutrition(ingredient)
            for name in totals:
                totals[name] += getattr(nutrition, name)
            for name in _OPTIONAL_FIELDS:
                value = getattr(nutrition, name)
                if value is not None:
                    optional[name] = optional.get(name, 0.0) + value

        return NutritionInfo(
            calories=round(max(totals["calories"], 0.0)),
            protein=round(max(totals["protein"], 0.0), 1),
            carbohydrates=round(max(totals["carbohydrates"], 0.0), 1),
            fats=round(max(totals["fats"], 0.0), 1),
            **{name: round(max(value, 0.0), 1) for name, value in optional.items()},
        )

    def calculate_health_score(self, nutrition: NutritionInfo) -> HealthScore:
        """Score nutritional quality on a 0-100 scale with a factor breakdown."""
        protein_bonus = min(nutrition.protein / 2, _MAX_PROTEIN_BONUS)
        fiber_bonus = min((nutrition.fiber or 0.0) * 2, _MAX_FIBER_BONUS)
        macro_balance = _macro_balance(nutrition)

        sodium_penalty = 0.0
        if nutrition.sodium:
            sodium_penalty = min(nutrition.sodium / 50, _MAX_SODIUM_PENALTY)

        macro_grams = nutrition.protein + nutrition.carbohydrates + nutrition.fats
        density = nutrition.calories / max(macro_grams, 1.0)
        density_bonus = _LOW_DENSITY_BONUS if density < _LOW_DENSITY_THRESHOLD else 0.0

        score = (
            _BASE_SCORE
            + protein_bonus
            + fiber_bonus
            + macro_balance
            - sodium_penalty
            + density_bonus
        )
        factors = HealthFactors(
            protein_bonus=round(protein_bonus, 1),
            fiber_bonus=round(fiber_bonus, 1),
            macro_balance=round(macro_balance, 1),
            sodium_penalty=round(sodium_penalty, 1),
            calorie_density_bonus=density_bonus,
        )
        return HealthScore(value=round(_clamp(score)), factors=factors)

    def calculate_cost_score(
        self,
        ingredients: Sequence[Ingredient],
        cost_per_portion: float | None = None,
    ) -> CostScore:
        """Score affordability; without a cost, return the placeholder estimate."""
        if cost_per_portion is None:
            return CostScore(
                value=_PLACEHOLDER_COST_SCORE,
                cost_per_portion=len(ingredients) * _PLACEHOLDER_COST_PER_INGREDIENT,
                affordability=Affordability.MEDIUM,
            )

        if cost_per_portion < 10:
            affordability = Affordability.LOW
        elif cost_per_portion > 25:
            affordability = Affordability.HIGH
        else:
            affordability = Affordability.MEDIUM
        return CostScore(
            value=round(_clamp(100 - cost_per_portion * 2)),
            cost_per_portion=cost_per_portion,
            affordability=affordability,
        )


def _macro_balance(nutrition: NutritionInfo) -> float:
    """Return 0-10 points for closeness to the ideal calorie split."""
    energy = (
        nutrition.protein * 4,
        nutrition.carbohydrates * 4,
        nutrition.fats * 9,
    )
    total = sum(energy)
    if total <= 0:
        return 0.0
    deviation = sum(
        abs(part / total - ideal) * weight
        for part, ideal, weight in zip(energy, _IDEAL_RATIOS, _RATIO_WEIGHTS, strict=True)
    )
    return max(0.0, 10 - deviation)


_default_calculator = NutritionCalculator()


def calculate_recipe_nutrition(ingredients: Iterable[Ingredient]) -> NutritionInfo:
    """Aggregate nutrition using the bundled table."""
    return _default_calculator.calculate_recipe_nutrition(ingredients)


def calculate_health_score(nutrition: NutritionInfo) -> HealthScore:
    """Score nutrition using the default calculator."""
    return _default_calculator.calculate_health_score(nutrition)


def calculate_cost_score(
    ingredients: Sequence[Ingredient], cost_per_portion: float | None = None
) -> CostScore:
    """Score cost using the default calculator."""
    return _default_calculator.calculate_cost_score(ingredients, cost_per_portion)
