"""Heuristic recipe text parser.

Lines are fed through a small state machine (TITLE -> DESCRIPTION ->
INGREDIENTS / STEPS). Each line is classified on its own by
``classify_line``; the parser only applies the resulting transition, which
keeps the precedence rules testable without building whole recipes.

Precedence per line: servings marker, time marker, section header, title,
then the content kind implied by the current state.
"""

import dataclasses
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from fitswap.domain.recipe import CookingStep, Ingredient, ParsedRecipe, new_id
from fitswap.domain.tables import normalize_name

_logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Receita sem título"
DEFAULT_SOURCE = "Texto colado"
DEFAULT_SERVINGS = 4
DEFAULT_PREP_TIME = 15
DEFAULT_COOK_TIME = 30

_MAX_HEADER_WORDS = 5
_INGREDIENT_HEADERS = ("lista de ingredientes", "ingredientes", "ingrediente")
_STEP_HEADERS = (
    "modo de preparo",
    "modo de fazer",
    "como fazer",
    "preparacao",
    "preparo",
    "instrucoes",
    "passos",
)

_BULLET_RE = re.compile(r"^[-*•·]+\s*")
_ENUMERATION_RE = re.compile(r"^\d+\s*[.)]\s*")
_TITLE_PREFIX_RE = re.compile(r"^receita\s*:\s*", re.IGNORECASE)
_SERVINGS_RE = re.compile(r"^(porcoes|porcao|rendimento|rende|serve|serves)\b")
_TIME_RE = re.compile(r"^tempo\b")
_NUMBER_RE = re.compile(r"\d+")
_TIME_PART_RE = re.compile(r"(\d+)\s*(horas?|h\b|minutos?|min)?", re.IGNORECASE)
_DURATION_RE = re.compile(
    r"(\d+)\s*(minutos?|min|segundos?|seg|horas?|h)\b", re.IGNORECASE
)
_TEMPERATURE_RE = re.compile(r"(\d{2,3})\s*(?:°\s*c?|º\s*c?|graus)", re.IGNORECASE)
_AMOUNT_RE = re.compile(r"^\d+(?:[.,]\d+)?$")
_FRACTION_RE = re.compile(r"^(\d+)/(\d+)$")


class ParserState(Enum):
    """Section the parser is currently reading."""

    TITLE = "title"
    DESCRIPTION = "description"
    INGREDIENTS = "ingredients"
    STEPS = "steps"


class LineKind(Enum):
    """What a single line contributes to the recipe."""

    SERVINGS = "servings"
    PREP_TIME = "prep_time"
    COOK_TIME = "cook_time"
    INGREDIENTS_HEADER = "ingredients_header"
    STEPS_HEADER = "steps_header"
    TITLE = "title"
    DESCRIPTION = "description"
    INGREDIENT = "ingredient"
    STEP = "step"


@dataclass(frozen=True)
class LineClassification:
    """Result of classifying one line in a given state."""

    kind: LineKind
    next_state: ParserState
    value: int | None = None


class RecipeParser(Protocol):
    """Anything that turns recipe text into a ParsedRecipe."""

    def parse(self, text: str) -> ParsedRecipe:
        """Parse raw recipe text."""


def _strip_bullet(line: str) -> str:
    return _BULLET_RE.sub("", line.strip()).strip()


def _header_text(line: str) -> str:
    return normalize_name(_strip_bullet(line)).rstrip(":").strip()


def _is_header(line: str, markers: tuple[str, ...]) -> bool:
    text = _header_text(line)
    if not text or len(text.split()) > _MAX_HEADER_WORDS:
        return False
    return any(re.match(rf"{re.escape(marker)}\b", text) for marker in markers)


def _minutes_in(text: str) -> int | None:
    total = 0
    found = False
    for number, unit in _TIME_PART_RE.findall(text):
        found = True
        value = int(number)
        if unit and unit.lower().startswith("h"):
            value *= 60
        total += value
    return total if found else None


def classify_line(line: str, state: ParserState) -> LineClassification:
    """Classify a non-blank line given the current parser state."""
    text = _header_text(line)

    if _SERVINGS_RE.match(text):
        number = _NUMBER_RE.search(text)
        if number:
            return LineClassification(LineKind.SERVINGS, state, int(number.group()))

    if _TIME_RE.match(text) and _NUMBER_RE.search(text):
        minutes = _minutes_in(text)
        kind = LineKind.PREP_TIME if "preparo" in text else LineKind.COOK_TIME
        return LineClassification(kind, state, minutes)

    if _is_header(line, _INGREDIENT_HEADERS):
        return LineClassification(
            LineKind.INGREDIENTS_HEADER, ParserState.INGREDIENTS
        )
    if _is_header(line, _STEP_HEADERS):
        return LineClassification(LineKind.STEPS_HEADER, ParserState.STEPS)

    if state is ParserState.TITLE:
        return LineClassification(LineKind.TITLE, ParserState.DESCRIPTION)
    if state is ParserState.DESCRIPTION:
        return LineClassification(LineKind.DESCRIPTION, state)
    if state is ParserState.INGREDIENTS:
        return LineClassification(LineKind.INGREDIENT, state)
    return LineClassification(LineKind.STEP, state)


def _parse_amount(token: str) -> float | None:
    if _AMOUNT_RE.match(token):
        return float(token.replace(",", "."))
    fraction = _FRACTION_RE.match(token)
    if fraction and int(fraction.group(2)) != 0:
        return int(fraction.group(1)) / int(fraction.group(2))
    return None


def parse_ingredient_line(
    line: str, id_factory: Callable[[str], str] = new_id
) -> Ingredient | None:
    """Parse "- 200 g frango" style lines; None for empty lines.

    Tokens are read positionally: amount, unit, then the name. A
    non-numeric (or non-positive) amount becomes 1. Single-token lines are
    taken as the name with amount 1 and unit 'un'.
    """
    clean = _strip_bullet(line)
    if not clean:
        return None
    tokens = clean.split()
    if len(tokens) < 2:
        return Ingredient(id=id_factory("ing"), name=clean, amount=1, unit="un")

    amount = _parse_amount(tokens[0])
    return Ingredient(
        id=id_factory("ing"),
        name=" ".join(tokens[2:]) or "Ingrediente",
        amount=amount if amount is not None and amount > 0 else 1,
        unit=tokens[1],
    )


def parse_step_line(
    line: str, order: int, id_factory: Callable[[str], str] = new_id
) -> CookingStep | None:
    """Parse an instruction line, detecting timers and temperatures."""
    clean = _ENUMERATION_RE.sub("", _strip_bullet(line)).strip()
    if not clean:
        return None

    duration: int | None = None
    match = _DURATION_RE.search(clean)
    if match:
        value = int(match.group(1))
        unit = match.group(2).lower()
        if unit.startswith("min"):
            duration = value * 60
        elif unit.startswith("h"):
            duration = value * 3600
        else:
            duration = value

    temperature: int | None = None
    temperature_match = _TEMPERATURE_RE.search(clean)
    if temperature_match:
        temperature = int(temperature_match.group(1))

    return CookingStep(
        id=id_factory("step"),
        order=order,
        instruction=clean,
        duration=duration,
        temperature=temperature,
        timer_required=duration is not None,
    )


def extract_ingredients(
    text: str, id_factory: Callable[[str], str] = new_id
) -> list[Ingredient]:
    """Parse every bulleted line of a text as an ingredient."""
    ingredients: list[Ingredient] = []
    for line in (text or "").splitlines():
        if not _BULLET_RE.match(line.strip()):
            continue
        ingredient = parse_ingredient_line(line, id_factory)
        if ingredient:
            ingredients.append(ingredient)
    return ingredients


def placeholder_ingredients(
    id_factory: Callable[[str], str] = new_id,
) -> tuple[Ingredient, ...]:
    return (
        Ingredient(id=id_factory("ing"), name="Ingrediente 1", amount=100, unit="g"),
        Ingredient(id=id_factory("ing"), name="Ingrediente 2", amount=2, unit="un"),
    )


def placeholder_steps(
    id_factory: Callable[[str], str] = new_id,
) -> tuple[CookingStep, ...]:
    return (
        CookingStep(
            id=id_factory("step"),
            order=1,
            instruction="Preparar os ingredientes",
            duration=300,
            timer_required=True,
        ),
        CookingStep(
            id=id_factory("step"),
            order=2,
            instruction="Cozinhar conforme instruções",
            duration=1800,
            timer_required=True,
        ),
    )


def ensure_complete(
    recipe: ParsedRecipe, id_factory: Callable[[str], str] = new_id
) -> ParsedRecipe:
    """Fill empty ingredient or step lists with placeholders."""
    changes: dict[str, object] = {}
    if not recipe.ingredients:
        changes["ingredients"] = placeholder_ingredients(id_factory)
    if not recipe.steps:
        changes["steps"] = placeholder_steps(id_factory)
    if not changes:
        return recipe
    _logger.info(
        "Recipe %s is partial, filled placeholders for %s",
        recipe.id,
        ", ".join(sorted(changes)),
    )
    return dataclasses.replace(recipe, partial=True, **changes)


@dataclass
class TextRecipeParser(RecipeParser):
    """Keyword-driven parser for Portuguese recipe text."""

    default_servings: int = DEFAULT_SERVINGS
    default_prep_time: int = DEFAULT_PREP_TIME
    default_cook_time: int = DEFAULT_COOK_TIME
    source: str = DEFAULT_SOURCE
    id_factory: Callable[[str], str] = new_id

    def parse(self, text: str) -> ParsedRecipe:
        """Parse text into a ParsedRecipe; never raises."""
        title = DEFAULT_TITLE
        description: list[str] = []
        ingredients: list[Ingredient] = []
        steps: list[CookingStep] = []
        servings = self.default_servings
        prep_time = self.default_prep_time
        cook_time = self.default_cook_time

        state = ParserState.TITLE
        lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
        for line in lines:
            result = classify_line(line, state)
            state = result.next_state
            if result.kind is LineKind.SERVINGS and result.value:
                servings = result.value
            elif result.kind is LineKind.PREP_TIME and result.value is not None:
                prep_time = result.value
            elif result.kind is LineKind.COOK_TIME and result.value is not None:
                cook_time = result.value
            elif result.kind is LineKind.TITLE:
                title = _TITLE_PREFIX_RE.sub("", line).strip() or DEFAULT_TITLE
            elif result.kind is LineKind.DESCRIPTION:
                description.append(line)
            elif result.kind is LineKind.INGREDIENT:
                ingredient = parse_ingredient_line(line, self.id_factory)
                if ingredient:
                    ingredients.append(ingredient)
            elif result.kind is LineKind.STEP:
                step = parse_step_line(line, len(steps) + 1, self.id_factory)
                if step:
                    steps.append(step)

        recipe = ParsedRecipe(
            id=self.id_factory("recipe"),
            title=title,
            description=" ".join(description) or None,
            ingredients=tuple(ingredients),
            steps=tuple(steps),
            servings=servings,
            prep_time=prep_time,
            cook_time=cook_time,
            total_time=prep_time + cook_time,
            source=self.source,
        )
        _logger.debug(
            "Parsed recipe %r: %s ingredient(s), %s step(s)",
            title,
            len(ingredients),
            len(steps),
        )
        return ensure_complete(recipe, self.id_factory)


_default_parser = TextRecipeParser()


def parse_recipe_from_text(text: str) -> ParsedRecipe:
    """Parse recipe text with default settings."""
    return _default_parser.parse(text)
