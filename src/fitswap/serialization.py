"""JSON payload conversion for recipes (camelCase keys)."""

from datetime import datetime

from fitswap.domain.nutrition import (
    Affordability,
    CostScore,
    HealthFactors,
    HealthScore,
    NutritionDelta,
    NutritionInfo,
)
from fitswap.domain.recipe import (
    CookingStep,
    Goal,
    Ingredient,
    ParsedRecipe,
    Recipe,
    RecipeVariant,
    Swap,
)


def _drop_none(payload: dict[str, object]) -> dict[str, object]:
    return {key: value for key, value in payload.items() if value is not None}


def ingredient_to_payload(ingredient: Ingredient) -> dict[str, object]:
    return _drop_none(
        {
            "id": ingredient.id,
            "name": ingredient.name,
            "amount": ingredient.amount,
            "unit": ingredient.unit,
            "category": ingredient.category,
        }
    )


def ingredient_from_payload(payload: dict[str, object]) -> Ingredient:
    return Ingredient(
        id=str(payload["id"]),
        name=str(payload.get("name", "")),
        amount=float(payload.get("amount", 1) or 1),
        unit=str(payload.get("unit", "un")),
        category=payload.get("category"),
    )


def step_to_payload(step: CookingStep) -> dict[str, object]:
    return _drop_none(
        {
            "id": step.id,
            "order": step.order,
            "instruction": step.instruction,
            "duration": step.duration,
            "temperature": step.temperature,
            "timerRequired": step.timer_required,
        }
    )


def step_from_payload(payload: dict[str, object]) -> CookingStep:
    return CookingStep(
        id=str(payload["id"]),
        order=int(payload.get("order", 1)),
        instruction=str(payload.get("instruction", "")),
        duration=payload.get("duration"),
        temperature=payload.get("temperature"),
        timer_required=bool(payload.get("timerRequired", False)),
    )


def parsed_recipe_to_payload(recipe: ParsedRecipe) -> dict[str, object]:
    """Serialize a ParsedRecipe."""
    return _drop_none(
        {
            "id": recipe.id,
            "title": recipe.title,
            "description": recipe.description,
            "ingredients": [ingredient_to_payload(i) for i in recipe.ingredients],
            "steps": [step_to_payload(s) for s in recipe.steps],
            "servings": recipe.servings,
            "prepTime": recipe.prep_time,
            "cookTime": recipe.cook_time,
            "totalTime": recipe.total_time,
            "source": recipe.source,
            "imageUrl": recipe.image_url,
            "partial": recipe.partial,
        }
    )


def parsed_recipe_from_payload(payload: dict[str, object]) -> ParsedRecipe:
    """Deserialize a ParsedRecipe."""
    return ParsedRecipe(
        id=str(payload["id"]),
        title=str(payload.get("title", "")),
        description=payload.get("description"),
        ingredients=tuple(
            ingredient_from_payload(item) for item in payload.get("ingredients", [])
        ),
        steps=tuple(step_from_payload(item) for item in payload.get("steps", [])),
        servings=int(payload.get("servings", 4)),
        prep_time=payload.get("prepTime"),
        cook_time=payload.get("cookTime"),
        total_time=payload.get("totalTime"),
        source=payload.get("source"),
        image_url=payload.get("imageUrl"),
        partial=bool(payload.get("partial", False)),
    )


def nutrition_to_payload(nutrition: NutritionInfo) -> dict[str, object]:
    return _drop_none(
        {
            "calories": nutrition.calories,
            "protein": nutrition.protein,
            "carbohydrates": nutrition.carbohydrates,
            "fats": nutrition.fats,
            "fiber": nutrition.fiber,
            "sodium": nutrition.sodium,
            "sugar": nutrition.sugar,
            "saturatedFat": nutrition.saturated_fat,
        }
    )


def nutrition_from_payload(payload: dict[str, object]) -> NutritionInfo:
    return NutritionInfo(
        calories=float(payload.get("calories", 0)),
        protein=float(payload.get("protein", 0)),
        carbohydrates=float(payload.get("carbohydrates", 0)),
        fats=float(payload.get("fats", 0)),
        fiber=payload.get("fiber"),
        sodium=payload.get("sodium"),
        sugar=payload.get("sugar"),
        saturated_fat=payload.get("saturatedFat"),
    )


def _delta_to_payload(delta: NutritionDelta) -> dict[str, object]:
    return {
        "calories": delta.calories,
        "protein": delta.protein,
        "carbohydrates": delta.carbohydrates,
        "fats": delta.fats,
    }


def _delta_from_payload(payload: dict[str, object]) -> NutritionDelta:
    return NutritionDelta(
        calories=float(payload.get("calories", 0)),
        protein=float(payload.get("protein", 0)),
        carbohydrates=float(payload.get("carbohydrates", 0)),
        fats=float(payload.get("fats", 0)),
    )


def swap_to_payload(swap: Swap) -> dict[str, object]:
    return {
        "id": swap.id,
        "originalIngredient": ingredient_to_payload(swap.original_ingredient),
        "swappedIngredient": ingredient_to_payload(swap.swapped_ingredient),
        "reason": swap.reason,
        "impact": _delta_to_payload(swap.impact),
    }


def swap_from_payload(payload: dict[str, object]) -> Swap:
    return Swap(
        id=str(payload["id"]),
        original_ingredient=ingredient_from_payload(payload["originalIngredient"]),
        swapped_ingredient=ingredient_from_payload(payload["swappedIngredient"]),
        reason=str(payload.get("reason", "")),
        impact=_delta_from_payload(payload.get("impact", {})),
    )


def health_score_to_payload(score: HealthScore) -> dict[str, object]:
    factors = score.factors
    return {
        "value": score.value,
        "factors": {
            "nutritionalDensity": round(factors.nutritional_density, 1),
            "proteinBonus": factors.protein_bonus,
            "fiberBonus": factors.fiber_bonus,
            "macroBalance": factors.macro_balance,
            "sodiumPenalty": factors.sodium_penalty,
            "calorieDensityBonus": factors.calorie_density_bonus,
        },
    }


def health_score_from_payload(payload: dict[str, object]) -> HealthScore:
    factors = payload.get("factors", {})
    return HealthScore(
        value=int(payload.get("value", 0)),
        factors=HealthFactors(
            protein_bonus=float(factors.get("proteinBonus", 0)),
            fiber_bonus=float(factors.get("fiberBonus", 0)),
            macro_balance=float(factors.get("macroBalance", 0)),
            sodium_penalty=float(factors.get("sodiumPenalty", 0)),
            calorie_density_bonus=float(factors.get("calorieDensityBonus", 0)),
        ),
    )


def cost_score_to_payload(score: CostScore) -> dict[str, object]:
    return {
        "value": score.value,
        "costPerPortion": score.cost_per_portion,
        "affordability": score.affordability.value,
    }


def cost_score_from_payload(payload: dict[str, object]) -> CostScore:
    return CostScore(
        value=int(payload.get("value", 0)),
        cost_per_portion=float(payload.get("costPerPortion", 0)),
        affordability=Affordability(payload.get("affordability", "medium")),
    )


def variant_to_payload(variant: RecipeVariant) -> dict[str, object]:
    return _drop_none(
        {
            "id": variant.id,
            "name": variant.name,
            "recipe": parsed_recipe_to_payload(variant.recipe),
            "swaps": [swap_to_payload(swap) for swap in variant.swaps],
            "nutrition": nutrition_to_payload(variant.nutrition),
            "healthScore": health_score_to_payload(variant.health_score),
            "costScore": cost_score_to_payload(variant.cost_score),
            "explanation": variant.explanation,
        }
    )


def variant_from_payload(payload: dict[str, object]) -> RecipeVariant:
    return RecipeVariant(
        id=str(payload["id"]),
        name=str(payload.get("name", "")),
        recipe=parsed_recipe_from_payload(payload["recipe"]),
        swaps=tuple(swap_from_payload(item) for item in payload.get("swaps", [])),
        nutrition=nutrition_from_payload(payload.get("nutrition", {})),
        health_score=health_score_from_payload(payload.get("healthScore", {})),
        cost_score=cost_score_from_payload(payload.get("costScore", {})),
        explanation=payload.get("explanation"),
    )


def recipe_to_payload(recipe: Recipe) -> dict[str, object]:
    """Serialize a Recipe aggregate."""
    return _drop_none(
        {
            "id": recipe.id,
            "original": parsed_recipe_to_payload(recipe.original),
            "variants": [variant_to_payload(v) for v in recipe.variants],
            "createdAt": recipe.created_at.isoformat(),
            "userId": recipe.user_id,
            "favorited": recipe.favorited,
            "goal": recipe.goal.value if recipe.goal else None,
            "category": recipe.category,
        }
    )


def recipe_from_payload(payload: dict[str, object]) -> Recipe:
    """Deserialize a Recipe aggregate."""
    goal = payload.get("goal")
    return Recipe(
        id=str(payload["id"]),
        original=parsed_recipe_from_payload(payload["original"]),
        variants=tuple(variant_from_payload(v) for v in payload.get("variants", [])),
        created_at=datetime.fromisoformat(str(payload["createdAt"])),
        user_id=payload.get("userId"),
        favorited=bool(payload.get("favorited", False)),
        goal=Goal.coerce(goal) if isinstance(goal, str) else None,
        category=payload.get("category"),
    )
