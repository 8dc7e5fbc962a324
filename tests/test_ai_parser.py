"""Tests for AI-backed recipe extraction."""

import asyncio

import pytest

from fitswap.errors import RecipeExtractionError, UnsupportedInputError
from fitswap.services.ai_parser import RECIPE_SCHEMA, AIRecipeParser, to_data_url
from fitswap.services.parser import DEFAULT_TITLE
from tests.conftest import FakeRecipeExtractionClient


def _parser(client: FakeRecipeExtractionClient) -> AIRecipeParser:
    return AIRecipeParser(
        client=client, model="gpt-5.2", reasoning_effort="medium", store=False
    )


def test_parse_text_maps_extracted_fields() -> None:
    client = FakeRecipeExtractionClient()

    recipe = asyncio.run(_parser(client).parse_text("Bolo de cenoura ..."))

    assert recipe.title == "Bolo de cenoura"
    assert recipe.description == "Bolo fofinho"
    assert [i.name for i in recipe.ingredients] == [
        "farinha de trigo",
        "açúcar",
        "ovos",
    ]
    assert recipe.ingredients[2].unit == "un"
    assert [s.instruction for s in recipe.steps] == [
        "Bata tudo no liquidificador",
        "Asse por 40 minutos",
    ]
    assert [s.order for s in recipe.steps] == [1, 2]
    assert recipe.steps[1].timer_required is True
    assert recipe.steps[1].temperature == 180
    assert recipe.servings == 8
    assert recipe.prep_time == 20
    assert recipe.cook_time == 30
    assert recipe.total_time == 50
    assert recipe.partial is False
    assert client.calls[0]["text"] == "Bolo de cenoura ..."


def test_parse_text_marks_partial_output() -> None:
    client = FakeRecipeExtractionClient(
        result={
            "title": None,
            "description": None,
            "ingredients": [],
            "steps": [],
            "servings": None,
            "prep_time": None,
            "cook_time": None,
        }
    )

    recipe = asyncio.run(_parser(client).parse_text("algo"))

    assert recipe.title == DEFAULT_TITLE
    assert recipe.partial is True
    assert len(recipe.ingredients) == 2
    assert len(recipe.steps) == 2


def test_parse_text_rejects_invalid_output() -> None:
    client = FakeRecipeExtractionClient(
        result={"ingredients": [{"name": "", "amount": -1}]}
    )

    with pytest.raises(RecipeExtractionError):
        asyncio.run(_parser(client).parse_text("receita"))


@pytest.mark.parametrize("text", ["", "   ", "abc\x00def"])
def test_parse_text_rejects_unusable_input(text: str) -> None:
    client = FakeRecipeExtractionClient()

    with pytest.raises(UnsupportedInputError):
        asyncio.run(_parser(client).parse_text(text))
    assert client.calls == []


def test_parse_image_sends_data_url() -> None:
    client = FakeRecipeExtractionClient()
    image = b"\x89PNG\r\n\x1a\nrest"

    recipe = asyncio.run(_parser(client).parse_image(image))

    assert recipe.source == "Imagem"
    assert client.calls[0]["image_data_url"].startswith("data:image/png;base64,")


def test_parse_image_rejects_empty_bytes() -> None:
    with pytest.raises(UnsupportedInputError):
        asyncio.run(_parser(FakeRecipeExtractionClient()).parse_image(b""))


def test_to_data_url_defaults_to_jpeg() -> None:
    assert to_data_url(b"unknown").startswith("data:image/jpeg;base64,")


def test_schema_requires_every_property() -> None:
    properties = set(RECIPE_SCHEMA["properties"])

    assert set(RECIPE_SCHEMA["required"]) == properties
    assert RECIPE_SCHEMA["additionalProperties"] is False


def test_parse_text_rejects_blank_ingredient_names() -> None:
    client = FakeRecipeExtractionClient(
        result={"ingredients": [{"name": "   ", "amount": 1}], "steps": []}
    )

    with pytest.raises(RecipeExtractionError):
        asyncio.run(_parser(client).parse_text("receita"))


def test_parse_text_strips_padded_fields() -> None:
    client = FakeRecipeExtractionClient(
        result={
            "title": "  Omelete  ",
            "ingredients": [{"name": " ovos ", "amount": 2, "unit": " un "}],
            "steps": [{"order": 1, "instruction": "  Bata os ovos "}],
        }
    )

    recipe = asyncio.run(_parser(client).parse_text("omelete"))

    assert recipe.title == "Omelete"
    assert (recipe.ingredients[0].name, recipe.ingredients[0].unit) == ("ovos", "un")
    assert recipe.steps[0].instruction == "Bata os ovos"
