"""Tests for table lookups and name matching."""

import pytest

from fitswap.catalog import default_nutrition_table, default_swap_table
from fitswap.domain.recipe import Goal
from fitswap.domain.tables import SwapCandidate, match_key, normalize_name


def test_normalize_name_folds_accents_and_spaces() -> None:
    assert normalize_name("  Açúcar   Mascavo ") == "acucar mascavo"


def test_match_key_prefers_exact() -> None:
    keys = ["arroz", "arroz integral"]

    assert match_key("arroz integral", keys) == "arroz integral"


def test_match_key_prefers_longest_contained_key() -> None:
    keys = ["farinha", "farinha de aveia"]

    assert match_key("farinha de aveia fina", keys) == "farinha de aveia"


def test_match_key_breaks_ties_alphabetically() -> None:
    keys = ["sal", "mel"]

    assert match_key("mel com sal", keys) == "mel"


def test_match_key_uses_aliases() -> None:
    assert match_key("ovos", ["ovo caipira"], {"ovos": "ovo caipira"}) == "ovo caipira"


def test_match_key_reverse_containment_needs_three_chars() -> None:
    keys = ["creme de leite"]

    assert match_key("creme", keys) == "creme de leite"
    assert match_key("de", keys) is None


def test_match_key_empty_name() -> None:
    assert match_key("   ", ["arroz"]) is None


def test_nutrition_table_is_read_only() -> None:
    table = default_nutrition_table()

    with pytest.raises(TypeError):
        table.rows["novo"] = table.default  # type: ignore[index]


def test_swap_table_alias_for_plain_rice() -> None:
    table = default_swap_table()

    assert table.match("arroz") == "arroz branco"
    assert table.candidates("xyzzy") == ()


def test_swap_candidate_filters() -> None:
    candidate = SwapCandidate(
        "iogurte grego", "Mais proteína", Goal.LOSE_WEIGHT, frozenset({"lactose"})
    )

    assert candidate.suits(Goal.LOSE_WEIGHT)
    assert not candidate.suits(Goal.GAIN_MASS)
    assert not candidate.allowed(["Lactose "])
    assert candidate.allowed(["gluten"])
    assert SwapCandidate("mel", "Natural").suits(Goal.GAIN_MASS)


def test_salt_does_not_match_inside_salmon() -> None:
    table = default_nutrition_table()

    assert table.match("sal") is None
    assert table.lookup("sal") == table.default


def test_match_key_containment_is_whole_word() -> None:
    keys = ["arroz", "salmão"]

    assert match_key("arroz branco cozido", keys) == "arroz"
    assert match_key("sal grosso", keys) is None
    assert match_key("arrozinho", keys) is None


def test_match_key_ignores_plural_s() -> None:
    assert match_key("bananas maduras", ["banana"]) == "banana"
    assert match_key("tomates", ["tomate", "tomate seco"]) == "tomate"


def test_match_key_prefers_key_inside_name_over_longer_container() -> None:
    keys = ["aveia", "farinha de aveia"]

    assert match_key("de aveia", keys) == "aveia"


def test_swap_table_plain_milk_has_no_candidates() -> None:
    table = default_swap_table()

    assert table.match("leite") == "leite"
    assert table.candidates("leite") == ()
    assert table.match("creme de leite light") == "creme de leite"
