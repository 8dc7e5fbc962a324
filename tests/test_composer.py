"""Tests for variant composition."""

from datetime import UTC, datetime

from fitswap.domain.recipe import Goal, UserPreferences
from fitswap.services.composer import (
    BUDGET_EXPLANATION,
    HIGH_PROTEIN_EXPLANATION,
    LEAN_EXPLANATION,
    VariantComposer,
    transform_recipe,
)
from fitswap.services.parser import parse_recipe_from_text
from tests.conftest import FRANGO_TEXT


def test_lose_weight_builds_lean_variant() -> None:
    recipe = transform_recipe(FRANGO_TEXT, Goal.LOSE_WEIGHT)

    assert recipe.variant_ids == ["original", "lean"]
    lean = recipe.variant("lean")
    assert lean.explanation == LEAN_EXPLANATION
    assert len(lean.swaps) == 1
    assert lean.swaps[0].swapped_ingredient.name == "arroz integral"
    assert [i.name for i in lean.recipe.ingredients] == ["frango", "arroz integral"]
    assert lean.nutrition.calories < recipe.variant("original").nutrition.calories


def test_original_variant_keeps_parsed_recipe() -> None:
    recipe = transform_recipe(FRANGO_TEXT, "lose_weight")

    original = recipe.variant("original")
    assert original.recipe == recipe.original
    assert original.swaps == ()
    assert original.nutrition.calories == 460
    assert original.explanation is None
    assert recipe.original.title == "Frango grelhado"


def test_gain_mass_builds_high_protein_variant() -> None:
    recipe = transform_recipe(FRANGO_TEXT, Goal.GAIN_MASS)

    assert recipe.variant_ids == ["original", "high_protein"]
    variant = recipe.variant("high_protein")
    assert variant.explanation == HIGH_PROTEIN_EXPLANATION
    assert variant.swaps[0].swapped_ingredient.name == "quinoa"


def test_gain_muscle_alias_maps_to_gain_mass() -> None:
    recipe = transform_recipe(FRANGO_TEXT, "gain_muscle")

    assert recipe.goal is Goal.GAIN_MASS
    assert recipe.variant_ids == ["original", "high_protein"]


def test_general_health_without_budget_has_only_original() -> None:
    recipe = transform_recipe(FRANGO_TEXT, Goal.GENERAL_HEALTH)

    assert recipe.variant_ids == ["original"]


def test_unknown_goal_is_general_health() -> None:
    recipe = transform_recipe(FRANGO_TEXT, "bulking")

    assert recipe.goal is Goal.GENERAL_HEALTH
    assert recipe.variant_ids == ["original"]


def test_budget_adds_budget_variant_last() -> None:
    preferences = UserPreferences(budget_per_portion=8)

    recipe = transform_recipe(FRANGO_TEXT, Goal.LOSE_WEIGHT, preferences)

    assert recipe.variant_ids == ["original", "lean", "budget"]
    budget = recipe.variant("budget")
    assert budget.explanation == BUDGET_EXPLANATION
    assert budget.swaps[0].swapped_ingredient.name == "quinoa"
    assert all(v.cost_score.cost_per_portion == 8 for v in recipe.variants)
    assert budget.cost_score.value == 84


def test_zero_budget_still_counts_as_budget() -> None:
    recipe = transform_recipe(
        FRANGO_TEXT, Goal.GENERAL_HEALTH, UserPreferences(budget_per_portion=0)
    )

    assert recipe.variant_ids == ["original", "budget"]
    assert recipe.variant("budget").cost_score.value == 100


def test_variant_without_matches_has_no_swaps() -> None:
    recipe = transform_recipe(
        "Salada\nIngredientes\n- 100 g xyzzy\nPreparo\n1. Misture", Goal.LOSE_WEIGHT
    )

    lean = recipe.variant("lean")
    assert lean.swaps == ()
    assert lean.nutrition == recipe.variant("original").nutrition


def test_scores_are_bounded_for_every_variant() -> None:
    recipe = transform_recipe(
        FRANGO_TEXT, Goal.LOSE_WEIGHT, UserPreferences(budget_per_portion=1000)
    )

    for variant in recipe.variants:
        assert 0 <= variant.health_score.value <= 100
        assert 0 <= variant.cost_score.value <= 100
        assert variant.nutrition.calories >= 0


def test_empty_text_degrades_to_partial_recipe() -> None:
    recipe = transform_recipe("", Goal.LOSE_WEIGHT)

    assert recipe.original.partial is True
    assert recipe.variant_ids == ["original", "lean"]


def test_compose_uses_clock_and_user() -> None:
    now = datetime(2024, 1, 2, tzinfo=UTC)
    composer = VariantComposer(clock=lambda: now)

    recipe = composer.compose(
        parse_recipe_from_text(FRANGO_TEXT), Goal.LOSE_WEIGHT, user_id="user-1"
    )

    assert recipe.created_at == now
    assert recipe.user_id == "user-1"
    assert recipe.favorited is False


def test_restrictions_flow_into_swaps() -> None:
    text = "Estrogonofe\nIngredientes\n- 200 ml creme de leite\nPreparo\n1. Misture"

    recipe = transform_recipe(
        text, Goal.LOSE_WEIGHT, UserPreferences(restrictions=("lactose",))
    )

    assert recipe.variant("lean").swaps[0].swapped_ingredient.name == "leite de coco"
