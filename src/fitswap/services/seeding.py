"""Batch generation of base recipes per goal and category."""

import asyncio
import dataclasses
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from fitswap.domain.recipe import Goal
from fitswap.services.fitswap import FitSwapService
from fitswap.services.images import RecipeImageService
from fitswap.services.parser import DEFAULT_TITLE
from fitswap.services.recipes import RecipeRepository

_logger = logging.getLogger(__name__)

CATEGORIES = ("Café", "Almoço rápido", "Pré/Pós-treino", "Snacks")

RECIPE_IDEAS: dict[Goal, dict[str, tuple[str, ...]]] = {
    Goal.LOSE_WEIGHT: {
        "Café": (
            "Omelete de claras com espinafre e cogumelos",
            "Aveia com frutas e proteína",
            "Panqueca de banana e aveia sem açúcar",
        ),
        "Almoço rápido": (
            "Salada de quinoa com frango grelhado e vegetais",
            "Sopa de legumes com proteína magra",
            "Bowl de salmão com abacate e vegetais",
        ),
        "Pré/Pós-treino": (
            "Frango grelhado com batata doce e brócolis",
            "Salmão com batata doce e vegetais",
            "Peito de peru com quinoa e vegetais",
        ),
        "Snacks": (
            "Iogurte grego com frutas e granola",
            "Mix de castanhas e frutas secas",
            "Barra de proteína caseira",
        ),
    },
    Goal.GAIN_MASS: {
        "Café": (
            "Omelete completa com pão integral e queijo",
            "Aveia com whey protein e frutas",
            "Panqueca de banana com mel e proteína",
        ),
        "Almoço rápido": (
            "Frango com arroz integral e feijão",
            "Macarrão integral com carne moída e molho",
            "Bowl de frango, batata doce e quinoa",
        ),
        "Pré/Pós-treino": (
            "Peito de peru com batata e vegetais",
            "Salmão com arroz e legumes",
            "Carne moída com batata doce e vegetais",
        ),
        "Snacks": (
            "Shake de proteína com banana e aveia",
            "Sanduíche de frango com pão integral",
            "Iogurte grego com granola e mel",
        ),
    },
    Goal.GENERAL_HEALTH: {
        "Café": (
            "Omelete com vegetais e pão integral",
            "Aveia com frutas e sementes",
            "Panqueca de banana e aveia",
        ),
        "Almoço rápido": (
            "Salmão grelhado com quinoa e vegetais",
            "Frango ao curry com arroz integral",
            "Bowl mediterrâneo com grão-de-bico",
        ),
        "Pré/Pós-treino": (
            "Peixe assado com batata doce e salada",
            "Frango grelhado com quinoa e vegetais",
            "Salmão com batata doce e legumes",
        ),
        "Snacks": (
            "Iogurte com frutas e granola",
            "Mix de castanhas e frutas",
            "Hummus com vegetais",
        ),
    },
}

_GOAL_DESCRIPTIONS = {
    Goal.LOSE_WEIGHT: "perda de peso (menos calorias, mantendo a proteína)",
    Goal.GAIN_MASS: "ganho de massa (mais proteína, macros equilibrados)",
    Goal.GENERAL_HEALTH: "saúde geral (nutrição equilibrada)",
}


class RecipeTextClient(Protocol):
    """Interface for free-text LLM generation."""

    async def generate_text(self, *, model: str, prompt: str) -> str:
        """Return generated text for a prompt."""


def recipe_prompt(goal: Goal, title: str, category: str) -> str:
    """Prompt asking for a recipe in the format the text parser reads."""
    return (
        f"Escreva uma receita saudável chamada '{title}' para a categoria "
        f"'{category}', voltada para {_GOAL_DESCRIPTIONS[goal]}. Use exatamente "
        "este formato em português:\n"
        "<título>\n<descrição curta>\nPorções: <n>\n"
        "Tempo de preparo: <n> minutos\nTempo de cozimento: <n> minutos\n"
        "Ingredientes:\n- <quantidade> <unidade> <ingrediente>\n"
        "Modo de preparo:\n1. <passo>"
    )


@dataclass
class SeedReport:
    """Outcome of a seeding run."""

    saved: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


@dataclass
class BaseRecipeSeeder:
    """Generate, illustrate and persist catalogue recipes."""

    text_client: RecipeTextClient
    fitswap_service: FitSwapService
    repository: RecipeRepository
    model: str
    image_service: RecipeImageService | None = None
    delay_seconds: float = 3.0

    async def seed(
        self,
        goals: Iterable[Goal] = tuple(Goal),
        per_category: int = 1,
    ) -> SeedReport:
        """Seed up to ``per_category`` recipes for each goal and category."""
        report = SeedReport()
        for goal in goals:
            _logger.info("Seeding recipes for goal=%s", goal.value)
            for category in CATEGORIES:
                titles = RECIPE_IDEAS[goal].get(category, ())[:per_category]
                for title in titles:
                    try:
                        recipe_id = await self.seed_one(goal, title, category)
                    except Exception:
                        _logger.exception("Failed to seed %r (%s)", title, goal.value)
                        report.failed.append(title)
                    else:
                        report.saved.append(recipe_id)
                    if self.delay_seconds:
                        await asyncio.sleep(self.delay_seconds)
        _logger.info(
            "Seeding finished: saved=%s failed=%s",
            len(report.saved),
            len(report.failed),
        )
        return report

    async def seed_one(self, goal: Goal, title: str, category: str) -> str:
        """Generate a single recipe and return its stored id."""
        text = await self.text_client.generate_text(
            model=self.model, prompt=recipe_prompt(goal, title, category)
        )
        recipe = await self.fitswap_service.transform_text(text, goal)
        original = recipe.original
        if original.title == DEFAULT_TITLE:
            original = dataclasses.replace(original, title=title)

        if self.image_service is not None:
            image_url = await self.image_service.illustrate(original.title)
            if image_url:
                original = dataclasses.replace(original, image_url=image_url)

        recipe = dataclasses.replace(
            recipe,
            original=original,
            variants=tuple(
                dataclasses.replace(
                    variant,
                    recipe=dataclasses.replace(
                        variant.recipe, title=original.title, image_url=original.image_url
                    ),
                )
                for variant in recipe.variants
            ),
            category=category,
        )
        stored = self.repository.save(recipe, goal)
        _logger.info(
            "Saved %s (%s)",
            stored.id,
            "with image" if original.image_url else "no image",
        )
        return stored.id
